from __future__ import annotations

import logging
from typing import Iterable

from ..common.validators import require_non_empty
from ..core.enums import PatternType
from ..core.exceptions import ValidationError
from ..patterns.model import PatternAlert
from .model import DismissalRecord
from .repository import DismissalRepository

logger = logging.getLogger(__name__)


def _pattern(value) -> PatternType:
    try:
        return PatternType(value)
    except ValueError:
        raise ValidationError(f"Unknown pattern type {value!r}")


class AlertStateManager:
    """Operator acknowledgements of pattern alerts, per tenant."""

    def __init__(self, dismissals: DismissalRepository):
        self._dismissals = dismissals

    def dismiss(self, tenant_id: str, actor_name: str, pattern_type: PatternType | str) -> None:
        record = DismissalRecord.for_actor(
            require_non_empty(tenant_id, "tenant_id"), require_non_empty(actor_name, "actor_name"), _pattern(pattern_type)
        )
        self._dismissals.upsert(record)

    def is_dismissed(self, tenant_id: str, actor_name: str, pattern_type: PatternType | str) -> bool:
        return self._dismissals.exists(DismissalRecord.for_actor(tenant_id, actor_name, _pattern(pattern_type)))

    def reset_all(self, tenant_id: str) -> int:
        """Irreversible; callers must have the operator confirm first."""
        tenant_id = require_non_empty(tenant_id, "tenant_id")
        removed = self._dismissals.delete_all_for_tenant(tenant_id)
        logger.info("Reset %d alert dismissals for tenant %s", removed, tenant_id)
        return removed

    def filter_active(self, tenant_id: str, alerts: Iterable[PatternAlert]) -> list[PatternAlert]:
        """Drop alerts the operator has dismissed; one store read per call."""
        dismissed = self._dismissals.list_for_tenant(tenant_id)
        return [
            a
            for a in alerts
            if a.tenant_id == tenant_id
            and DismissalRecord.for_actor(tenant_id, a.actor_name, a.pattern_type) not in dismissed
        ]
