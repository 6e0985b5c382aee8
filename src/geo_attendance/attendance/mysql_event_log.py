from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Sequence

from ..common.datetime_utils import as_utc
from ..core.enums import ChangeKind, EventType, TimelinessStatus
from ..database.connection import ConnectionFactory
from ..database.mysql_base import db_cursor, fetch_all, fetch_one
from ..geofence.model import GeoPoint
from .change_feed import ChangeFeed, Listener, Predicate, Subscription
from .model import AttendanceEvent, EventChange, EventDraft
from .repository import EventLog


def _row_to_event(r: dict[str, Any]) -> AttendanceEvent:
    location = None
    if r.get("latitude") is not None and r.get("longitude") is not None:
        location = GeoPoint(latitude=float(r["latitude"]), longitude=float(r["longitude"]))

    ts = r.get("server_timestamp")
    status = r.get("timeliness_status")
    return AttendanceEvent(
        event_id=int(r["event_id"]),
        tenant_id=r["tenant_id"],
        actor_id=r["actor_id"],
        actor_name=r["actor_name"],
        server_timestamp=as_utc(ts) if isinstance(ts, datetime) else None,
        event_type=EventType(r["event_type"]),
        timeliness_status=TimelinessStatus(status) if status else None,
        minutes_late=int(r.get("minutes_late") or 0),
        reported_location=location,
        distance_from_site_meters=float(r.get("distance_from_site_meters") or 0),
    )


class MySQLEventLog(EventLog):
    """Event log over the `attendance_events` table.

    Subscriptions are served by an in-process change feed, so subscribers see
    appends made through this process.
    """

    def __init__(self, conn_factory: ConnectionFactory, *, feed: Optional[ChangeFeed] = None):
        self._conn_factory = conn_factory
        self._feed = feed or ChangeFeed()

    def server_time(self) -> datetime:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT UTC_TIMESTAMP(6) AS now")
            return as_utc(fetch_one(cur)["now"])

    def append(self, draft: EventDraft) -> AttendanceEvent:
        loc = draft.reported_location
        server_ts = as_utc(draft.server_timestamp)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_events(
                    tenant_id, actor_id, actor_name, server_timestamp, event_type,
                    timeliness_status, minutes_late, latitude, longitude, distance_from_site_meters
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    draft.tenant_id,
                    draft.actor_id,
                    draft.actor_name,
                    server_ts.replace(tzinfo=None),
                    draft.event_type.value,
                    draft.timeliness_status.value if draft.timeliness_status else None,
                    int(draft.minutes_late),
                    loc.latitude if loc else None,
                    loc.longitude if loc else None,
                    float(draft.distance_from_site_meters),
                ),
            )
            event = AttendanceEvent.from_draft(draft, event_id=int(cur.lastrowid), server_timestamp=server_ts)

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
        clauses = ["tenant_id=%s", "server_timestamp >= %s", "server_timestamp < %s"]
        params: list[object] = [tenant_id, as_utc(from_time).replace(tzinfo=None), as_utc(to_time).replace(tzinfo=None)]
        if actor_id is not None:
            clauses.append("actor_id=%s")
            params.append(actor_id)

        order = "DESC" if descending else "ASC"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT event_id, tenant_id, actor_id, actor_name, server_timestamp, event_type,
                       timeliness_status, minutes_late, latitude, longitude, distance_from_site_meters
                FROM attendance_events
                WHERE {" AND ".join(clauses)}
                ORDER BY server_timestamp {order}, event_id {order}
                """,
                tuple(params),
            )
            return [_row_to_event(r) for r in fetch_all(cur)]

    def subscribe(self, tenant_id: str, listener: Listener, predicate: Optional[Predicate] = None) -> Subscription:
        return self._feed.subscribe(tenant_id, listener, predicate)
