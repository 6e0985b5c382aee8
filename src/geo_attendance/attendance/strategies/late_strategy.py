from __future__ import annotations

import math
from datetime import datetime

from ...core.enums import TimelinessStatus
from .base import TimelinessDecision, TimelinessStrategy


class LateStrategy(TimelinessStrategy):
    """Late check-in; minutes are counted from shift start and rounded up."""

    def decide_checkin(self, *, now: datetime, shift_start: datetime, deadline: datetime) -> TimelinessDecision:
        minutes = math.ceil((now - shift_start).total_seconds() / 60)
        return TimelinessDecision(status=TimelinessStatus.LATE, minutes_late=max(1, minutes))
