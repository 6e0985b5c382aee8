from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union

from ..common.datetime_utils import as_utc
from ..core.enums import ChangeKind, EventType, TimelinessStatus
from ..geofence.model import GeoPoint

EventId = Union[int, str]


@dataclass(frozen=True)
class EventDraft:
    """An event as built by the recorder, before the log assigns its id."""

    tenant_id: str
    actor_id: str
    actor_name: str
    server_timestamp: datetime
    event_type: EventType
    timeliness_status: Optional[TimelinessStatus]
    minutes_late: int
    reported_location: Optional[GeoPoint]
    distance_from_site_meters: float


@dataclass(frozen=True)
class AttendanceEvent:
    """Thực thể miền (domain): Sự kiện chấm công, bất biến sau khi ghi.

    `server_timestamp` may be None (or garbage) on corrupt historical rows;
    readers check `has_valid_timestamp` and skip such records.
    """

    event_id: EventId
    tenant_id: str
    actor_id: str
    actor_name: str
    server_timestamp: Optional[datetime]
    event_type: EventType
    timeliness_status: Optional[TimelinessStatus] = None
    minutes_late: int = 0
    reported_location: Optional[GeoPoint] = None
    distance_from_site_meters: float = 0.0

    @classmethod
    def from_draft(cls, draft: EventDraft, *, event_id: EventId, server_timestamp: datetime) -> "AttendanceEvent":
        return cls(
            event_id=event_id,
            tenant_id=draft.tenant_id,
            actor_id=draft.actor_id,
            actor_name=draft.actor_name,
            server_timestamp=server_timestamp,
            event_type=draft.event_type,
            timeliness_status=draft.timeliness_status,
            minutes_late=draft.minutes_late,
            reported_location=draft.reported_location,
            distance_from_site_meters=draft.distance_from_site_meters,
        )

    @property
    def has_valid_timestamp(self) -> bool:
        return isinstance(self.server_timestamp, datetime)

    @property
    def is_check_in(self) -> bool:
        return self.event_type == EventType.CHECK_IN

    @property
    def is_late(self) -> bool:
        return self.is_check_in and self.timeliness_status == TimelinessStatus.LATE

    def sort_key(self) -> tuple:
        # Log-assigned order: UTC timestamp first, id breaks ties. Naive values count as UTC.
        return (as_utc(self.server_timestamp), str(self.event_id).rjust(20, "0"))


@dataclass(frozen=True)
class EventChange:
    kind: ChangeKind
    event: AttendanceEvent


@dataclass(frozen=True)
class ChangeSet:
    tenant_id: str
    changes: tuple[EventChange, ...]
