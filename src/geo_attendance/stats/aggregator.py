from __future__ import annotations

import logging
import math
from collections import Counter
from typing import Iterable, Optional
from zoneinfo import ZoneInfo

from ..attendance.model import AttendanceEvent
from ..common.datetime_utils import to_local
from ..core.enums import EventType, TimelinessStatus
from .model import DailyStats, DayBreakdown, PresentActor, ReliabilityRow

logger = logging.getLogger(__name__)


def valid_events(events: Iterable[AttendanceEvent]) -> list[AttendanceEvent]:
    """Drop records whose server timestamp is missing or malformed."""
    out = []
    for e in events:
        if e.has_valid_timestamp:
            out.append(e)
        else:
            logger.debug("Skipping event %s with invalid timestamp", e.event_id)
    return out


def percent_of(part: float, whole: float) -> int:
    """Whole-number percentage, halves rounded up."""
    return math.floor(part / whole * 100 + 0.5)


def latest_per_actor(events: Iterable[AttendanceEvent]) -> dict[str, AttendanceEvent]:
    latest: dict[str, AttendanceEvent] = {}
    for e in events:
        current = latest.get(e.actor_id)
        if current is None or e.sort_key() > current.sort_key():
            latest[e.actor_id] = e
    return latest


class StatsAggregator:
    """Pure rollups over one tenant's events.

    Callers pass events already scoped to a tenant (and to a day where relevant);
    the same input always yields the same result.
    """

    def aggregate(self, events: Iterable[AttendanceEvent], *, zone: Optional[ZoneInfo] = None) -> DailyStats:
        rows = valid_events(events)
        latest = latest_per_actor(rows)

        return DailyStats(
            total_count=len(rows),
            present_count=sum(1 for e in latest.values() if e.is_check_in),
            late_count=sum(1 for e in rows if e.is_late),
            checked_out_count=sum(1 for e in rows if e.event_type == EventType.CHECK_OUT),
            peak_hour=self.peak_hour(rows, zone) if zone is not None else None,
        )

    def present_actors(self, events: Iterable[AttendanceEvent]) -> list[PresentActor]:
        latest = latest_per_actor(valid_events(events))
        present = [e for e in latest.values() if e.is_check_in]
        present.sort(key=AttendanceEvent.sort_key, reverse=True)
        return [
            PresentActor(
                actor_id=e.actor_id,
                actor_name=e.actor_name,
                status=e.timeliness_status.value if e.timeliness_status else None,
            )
            for e in present
        ]

    def peak_hour(self, events: Iterable[AttendanceEvent], zone: ZoneInfo) -> Optional[int]:
        """Tenant-local hour with the most events; earliest hour wins ties."""
        counts = Counter(to_local(e.server_timestamp, zone).hour for e in valid_events(events))
        if not counts:
            return None
        return min(counts, key=lambda hour: (-counts[hour], hour))

    def reliability_summary(self, events: Iterable[AttendanceEvent]) -> list[ReliabilityRow]:
        """Per-actor on-time share of check-ins, least reliable first."""
        totals: Counter = Counter()
        lates: Counter = Counter()
        names: dict[str, str] = {}

        for e in sorted(valid_events(events), key=AttendanceEvent.sort_key):
            if not e.is_check_in:
                continue
            totals[e.actor_id] += 1
            names[e.actor_id] = e.actor_name
            if e.is_late:
                lates[e.actor_id] += 1

        rows = []
        for actor_id, total in totals.items():
            late = lates[actor_id]
            rows.append(
                ReliabilityRow(
                    actor_id=actor_id,
                    actor_name=names[actor_id],
                    total_shifts=total,
                    late_shifts=late,
                    reliability=percent_of(total - late, total) if total else 100,
                )
            )
        rows.sort(key=lambda r: (r.reliability, r.actor_name, r.actor_id))
        return rows

    def daily_breakdown(self, events: Iterable[AttendanceEvent], zone: ZoneInfo) -> list[DayBreakdown]:
        on_time: Counter = Counter()
        late: Counter = Counter()
        for e in valid_events(events):
            if not e.is_check_in:
                continue
            day = to_local(e.server_timestamp, zone).date()
            if e.timeliness_status == TimelinessStatus.LATE:
                late[day] += 1
            else:
                on_time[day] += 1

        days = sorted(set(on_time) | set(late))
        return [DayBreakdown(day=d, on_time=on_time[d], late=late[d]) for d in days]
