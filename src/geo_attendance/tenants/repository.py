from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol

from .model import TenantConfiguration


class TenantSettingsRepository(Protocol):
    def get_configuration(self, tenant_id: str) -> Optional[TenantConfiguration]:
        raise NotImplementedError

    def upsert_merge(self, tenant_id: str, partial: Mapping[str, Any]) -> None:
        """Create or update settings; keys absent from `partial` keep their stored value."""

        raise NotImplementedError
