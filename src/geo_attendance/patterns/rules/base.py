from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable

from ...core.enums import PatternType, Severity
from ..model import ActorHistory, PatternAlert


class PatternRule(ABC):
    """Strategy Pattern: one way of spotting a recurring attendance problem."""

    pattern_type: PatternType
    severity: Severity

    @abstractmethod
    def evaluate(self, history: ActorHistory) -> Iterable[PatternAlert]:
        raise NotImplementedError

    def _alert(self, history: ActorHistory, message: str, **extra) -> PatternAlert:
        return PatternAlert(
            tenant_id=history.tenant_id,
            actor_id=history.actor_id,
            actor_name=history.actor_name,
            pattern_type=self.pattern_type,
            severity=self.severity,
            message=message,
            **extra,
        )
