from __future__ import annotations

from datetime import datetime
from typing import Protocol


class ActorProfileRepository(Protocol):
    """Actor profiles keyed by the upstream identity id; only the tenant binding is written here."""

    def bind_tenant(self, *, actor_id: str, tenant_id: str, display_name: str, seen_at: datetime) -> None:
        """Merge-write: create the profile if absent.

        An existing tenant binding is never replaced; other stored fields are kept
        unless a new value is given.
        """

        raise NotImplementedError
