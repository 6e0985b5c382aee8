from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .change_feed import Listener, Predicate, Subscription
from .model import AttendanceEvent, EventDraft


class EventLog(Protocol):
    """Append-only attendance event log.

    The log owns authoritative time: `server_time()` is read right before
    `append`, and the value is stored as the event's `server_timestamp`.
    """

    def server_time(self) -> datetime:
        raise NotImplementedError

    def append(self, draft: EventDraft) -> AttendanceEvent:
        raise NotImplementedError

    def query_range(
        self,
        tenant_id: str,
        from_time: datetime,
        to_time: datetime,
        *,
        actor_id: Optional[str] = None,
        descending: bool = False,
    ) -> Sequence[AttendanceEvent]:
        """Events with from_time <= server_timestamp < to_time, in log order."""

        raise NotImplementedError

    def subscribe(self, tenant_id: str, listener: Listener, predicate: Optional[Predicate] = None) -> Subscription:
        raise NotImplementedError
