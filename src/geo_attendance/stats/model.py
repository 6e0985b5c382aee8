from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class DailyStats:
    total_count: int = 0
    present_count: int = 0
    late_count: int = 0
    checked_out_count: int = 0
    peak_hour: Optional[int] = None


@dataclass(frozen=True)
class PresentActor:
    actor_id: str
    actor_name: str
    status: Optional[str]


@dataclass(frozen=True)
class ReliabilityRow:
    actor_id: str
    actor_name: str
    total_shifts: int
    late_shifts: int
    reliability: int


@dataclass(frozen=True)
class DayBreakdown:
    day: date
    on_time: int
    late: int
