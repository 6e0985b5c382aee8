from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from ...core.enums import TimelinessStatus


@dataclass(frozen=True)
class TimelinessDecision:
    status: TimelinessStatus
    minutes_late: int = 0


class TimelinessStrategy(ABC):
    """Strategy Pattern: encapsulate how we decide a check-in's timeliness."""

    @abstractmethod
    def decide_checkin(self, *, now: datetime, shift_start: datetime, deadline: datetime) -> TimelinessDecision:
        raise NotImplementedError
