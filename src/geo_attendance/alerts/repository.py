from __future__ import annotations

from typing import Protocol

from .model import DismissalRecord


class DismissalRepository(Protocol):
    """At most one record per (tenant_id, actor_key, pattern_type)."""

    def upsert(self, record: DismissalRecord) -> None:
        raise NotImplementedError

    def exists(self, record: DismissalRecord) -> bool:
        raise NotImplementedError

    def list_for_tenant(self, tenant_id: str) -> set[DismissalRecord]:
        raise NotImplementedError

    def delete_all_for_tenant(self, tenant_id: str) -> int:
        raise NotImplementedError
