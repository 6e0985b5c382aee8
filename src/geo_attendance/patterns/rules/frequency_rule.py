from __future__ import annotations

from typing import Iterable

from ...core.constants import CHRONIC_LATE_RATIO, CHRONIC_MIN_SHIFTS
from ...core.enums import PatternType, Severity
from ...stats.aggregator import percent_of
from ..model import ActorHistory, PatternAlert
from .base import PatternRule


class ChronicLateFrequencyRule(PatternRule):
    pattern_type = PatternType.CHRONIC_LATE_FREQUENCY
    severity = Severity.HIGH

    def evaluate(self, history: ActorHistory) -> Iterable[PatternAlert]:
        if history.total_logs < CHRONIC_MIN_SHIFTS or history.late_ratio <= CHRONIC_LATE_RATIO:
            return
        percent = percent_of(history.late_count, history.total_logs)
        yield self._alert(history, f"Chronic Punctuality Issue: Late for {percent}% of shifts.")
