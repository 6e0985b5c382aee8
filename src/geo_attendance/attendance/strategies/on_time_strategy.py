from __future__ import annotations

from datetime import datetime

from ...core.enums import TimelinessStatus
from .base import TimelinessDecision, TimelinessStrategy


class OnTimeStrategy(TimelinessStrategy):
    """Check-in at or before the grace deadline."""

    def decide_checkin(self, *, now: datetime, shift_start: datetime, deadline: datetime) -> TimelinessDecision:
        return TimelinessDecision(status=TimelinessStatus.ON_TIME)
