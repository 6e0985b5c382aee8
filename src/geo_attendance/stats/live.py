from __future__ import annotations

import threading
from datetime import date
from typing import Callable, Optional

from ..attendance.change_feed import Subscription
from ..attendance.model import AttendanceEvent, ChangeSet, EventChange
from ..attendance.repository import EventLog
from ..common.datetime_utils import as_utc, local_day_bounds, to_local
from ..core.enums import ChangeKind
from ..tenants.model import TenantConfiguration
from .aggregator import StatsAggregator
from .model import DailyStats


class LiveStatsView:
    """Daily stats for one tenant, kept current from the log's change feed.

    Each view is its own subscription; nothing is shared between tenants or
    between dashboard sessions. The first append stamped after the current
    day ends moves the view onto that event's day.
    """

    def __init__(
        self,
        log: EventLog,
        config: TenantConfiguration,
        day: date,
        *,
        aggregator: Optional[StatsAggregator] = None,
        on_update: Optional[Callable[[DailyStats], None]] = None,
    ):
        self._log = log
        self._config = config
        self._zone = config.zone()
        self._aggregator = aggregator or StatsAggregator()
        self._on_update = on_update
        self._lock = threading.Lock()
        self._events: dict[str, AttendanceEvent] = {}
        self._stats = DailyStats()
        self._subscription: Optional[Subscription] = None
        self._set_day(day)

    @property
    def day(self) -> date:
        with self._lock:
            return self._day

    @property
    def stats(self) -> DailyStats:
        with self._lock:
            return self._stats

    def start(self) -> "LiveStatsView":
        # Subscribe before the initial load so no append falls between the two.
        # Every change for the tenant is delivered: a modification that moves an
        # event out of the window must still evict it.
        self._subscription = self._log.subscribe(self._config.tenant_id, self.apply)
        initial = self._log.query_range(self._config.tenant_id, self._start, self._end)
        self.apply(ChangeSet(
            tenant_id=self._config.tenant_id,
            changes=tuple(EventChange(kind=ChangeKind.ADDED, event=e) for e in initial),
        ))
        return self

    def stop(self) -> None:
        if self._subscription is not None:
            self._subscription.cancel()
            self._subscription = None

    def apply(self, change_set: ChangeSet) -> DailyStats:
        with self._lock:
            for change in change_set.changes:
                event = change.event
                if change.kind == ChangeKind.ADDED and self._after_window(event):
                    self._set_day(to_local(event.server_timestamp, self._zone).date())
                    self._events.clear()

                key = str(event.event_id)
                if change.kind == ChangeKind.REMOVED or not self._in_window(event):
                    self._events.pop(key, None)
                else:
                    self._events[key] = event
            self._stats = self._aggregator.aggregate(self._events.values(), zone=self._zone)
            stats = self._stats

        if self._on_update is not None:
            self._on_update(stats)
        return stats

    def _set_day(self, day: date) -> None:
        self._day = day
        self._start, self._end = local_day_bounds(day, self._zone)

    def _in_window(self, event: AttendanceEvent) -> bool:
        return (
            event.tenant_id == self._config.tenant_id
            and event.has_valid_timestamp
            and self._start <= as_utc(event.server_timestamp) < self._end
        )

    def _after_window(self, event: AttendanceEvent) -> bool:
        return (
            event.tenant_id == self._config.tenant_id
            and event.has_valid_timestamp
            and as_utc(event.server_timestamp) >= self._end
        )
