from __future__ import annotations

from typing import Iterable

from ...core.constants import LATE_STREAK_LENGTH
from ...core.enums import PatternType, Severity, TimelinessStatus
from ..model import ActorHistory, PatternAlert
from .base import PatternRule


class ConsecutiveLateStreakRule(PatternRule):
    """The actor's two most recent check-ins were both late."""

    pattern_type = PatternType.CONSECUTIVE_LATE_STREAK
    severity = Severity.HIGH

    def evaluate(self, history: ActorHistory) -> Iterable[PatternAlert]:
        recent = history.recent_pair
        if len(recent) == LATE_STREAK_LENGTH and all(s == TimelinessStatus.LATE for s in recent):
            yield self._alert(history, f"Late Streak: late on the last {LATE_STREAK_LENGTH} check-ins in a row.")
