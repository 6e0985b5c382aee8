from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .strategies.base import TimelinessStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.on_time_strategy import OnTimeStrategy


@dataclass
class TimelinessStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    def for_checkin(self, *, now: datetime, deadline: datetime) -> TimelinessStrategy:
        # Inclusive boundary: arriving exactly at the deadline is on time.
        if now <= deadline:
            return OnTimeStrategy()
        return LateStrategy()
