from __future__ import annotations

from enum import Enum


class EventType(str, Enum):
    """Loại sự kiện chấm công lưu trong log."""

    CHECK_IN = "CHECK_IN"
    CHECK_OUT = "CHECK_OUT"


class TimelinessStatus(str, Enum):
    """Trạng thái đúng giờ của một lượt check-in.

    EARLY is part of the stored vocabulary but the shift classifier never emits it.
    """

    EARLY = "EARLY"
    ON_TIME = "ON_TIME"
    LATE = "LATE"


class PatternType(str, Enum):
    CONSECUTIVE_LATE_STREAK = "consecutive"
    CHRONIC_LATE_FREQUENCY = "frequency"
    DAY_SPECIFIC_DELAY = "day_specific"


class Severity(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"


class ChangeKind(str, Enum):
    ADDED = "added"
    MODIFIED = "modified"
    REMOVED = "removed"
