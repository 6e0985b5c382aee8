from __future__ import annotations

import itertools
import threading
from datetime import datetime
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import as_utc, now_utc
from ..core.enums import ChangeKind
from .change_feed import ChangeFeed, Listener, Predicate, Subscription
from .model import AttendanceEvent, EventChange, EventDraft
from .repository import EventLog


class InMemoryEventLog(EventLog):
    """Process-local event log for development and tests."""

    def __init__(self, *, clock: Callable[[], datetime] = now_utc, feed: Optional[ChangeFeed] = None):
        self._clock = clock
        self._feed = feed or ChangeFeed()
        self._lock = threading.Lock()
        self._events: list[AttendanceEvent] = []
        self._ids = itertools.count(1)

    def server_time(self) -> datetime:
        return as_utc(self._clock())

    def append(self, draft: EventDraft) -> AttendanceEvent:
        with self._lock:
            event = AttendanceEvent.from_draft(draft, event_id=next(self._ids), server_timestamp=as_utc(draft.server_timestamp))
            self._events.append(event)
        self._feed.publish(event.tenant_id, [EventChange(kind=ChangeKind.ADDED, event=event)])
        return event

    def query_range(
        self,
        tenant_id: str,
        from_time: datetime,
        to_time: datetime,
        *,
        actor_id: Optional[str] = None,
        descending: bool = False,
    ) -> Sequence[AttendanceEvent]:
        with self._lock:
            snapshot = list(self._events)
        start, end = as_utc(from_time), as_utc(to_time)
        rows = [
            e
            for e in snapshot
            if e.tenant_id == tenant_id
            and (actor_id is None or e.actor_id == actor_id)
            and e.has_valid_timestamp
            and start <= as_utc(e.server_timestamp) < end
        ]
        rows.sort(key=AttendanceEvent.sort_key, reverse=descending)
        return rows

    def subscribe(self, tenant_id: str, listener: Listener, predicate: Optional[Predicate] = None) -> Subscription:
        return self._feed.subscribe(tenant_id, listener, predicate)
