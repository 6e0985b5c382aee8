from __future__ import annotations

from typing import Iterable

from ...core.constants import DAY_SPECIFIC_MIN_LATES
from ...core.enums import PatternType, Severity
from ..model import ActorHistory, PatternAlert
from .base import PatternRule

_WEEK = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


class DaySpecificDelayRule(PatternRule):
    """One alert per weekday the actor has repeatedly been late on."""

    pattern_type = PatternType.DAY_SPECIFIC_DELAY
    severity = Severity.MEDIUM

    def evaluate(self, history: ActorHistory) -> Iterable[PatternAlert]:
        for day in sorted(history.late_by_weekday, key=lambda d: _WEEK.index(d) if d in _WEEK else len(_WEEK)):
            count = history.late_by_weekday[day]
            if count >= DAY_SPECIFIC_MIN_LATES:
                yield self._alert(history, f"Recurring {day} Delay: Late on {count} {day}s.", weekday=day)
