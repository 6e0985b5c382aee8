from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import local_day_bounds, to_local
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_LOCATION_TIMEOUT_SECONDS
from ..core.enums import EventType
from ..core.exceptions import GeofenceViolation, PersistenceError
from ..geofence.model import GeoPoint
from ..geofence.validator import GeoValidator
from ..profiles.repository import ActorProfileRepository
from ..tenants.model import TenantConfiguration
from ..tenants.service import TenantSettingsService
from .classifier import ShiftClassifier
from .location import LocationProvider, acquire_location
from .model import AttendanceEvent, EventDraft
from .repository import EventLog

logger = logging.getLogger(__name__)


class EventRecorder:
    """Turn a validated check-in/check-out into an immutable logged event.

    Duplicate scans are not coalesced: every call that passes the geofence
    produces a new event.
    """

    def __init__(
        self,
        log: EventLog,
        profiles: ActorProfileRepository,
        *,
        geo_validator: Optional[GeoValidator] = None,
        classifier: Optional[ShiftClassifier] = None,
    ):
        self._log = log
        self._profiles = profiles
        self._geo = geo_validator or GeoValidator()
        self._classifier = classifier or ShiftClassifier()

    def record_check_in(
        self, tenant_id: str, actor_id: str, actor_name: str, reported_location: GeoPoint, config: TenantConfiguration
    ) -> AttendanceEvent:
        return self._record(EventType.CHECK_IN, tenant_id, actor_id, actor_name, reported_location, config)

    def record_check_out(
        self, tenant_id: str, actor_id: str, actor_name: str, reported_location: GeoPoint, config: TenantConfiguration
    ) -> AttendanceEvent:
        return self._record(EventType.CHECK_OUT, tenant_id, actor_id, actor_name, reported_location, config)

    def _record(
        self,
        event_type: EventType,
        tenant_id: str,
        actor_id: str,
        actor_name: str,
        reported_location: GeoPoint,
        config: TenantConfiguration,
    ) -> AttendanceEvent:
        tenant_id = require_non_empty(tenant_id, "tenant_id")
        actor_id = require_non_empty(actor_id, "actor_id")
        actor_name = (actor_name or "").strip() or "Employee"

        check = self._geo.validate(reported_location, config)
        if not check.within_bounds:
            logger.info(
                "Rejected %s for %s/%s: %.0fm from site (limit %.0fm)",
                event_type.value, tenant_id, actor_id, check.distance_meters, config.geofence_radius_meters,
            )
            raise GeofenceViolation(check.distance_meters, config.geofence_radius_meters)

        server_now = self._log.server_time()
        status = None
        minutes_late = 0
        if event_type == EventType.CHECK_IN:
            decision = self._classifier.classify(server_now, config)
            status, minutes_late = decision.status, decision.minutes_late

        event = self._log.append(
            EventDraft(
                tenant_id=tenant_id,
                actor_id=actor_id,
                actor_name=actor_name,
                server_timestamp=server_now,
                event_type=event_type,
                timeliness_status=status,
                minutes_late=minutes_late,
                reported_location=reported_location,
                distance_from_site_meters=check.distance_meters,
            )
        )
        logger.info(
            "Recorded %s #%s for %s/%s (%s)",
            event_type.value, event.event_id, tenant_id, actor_id, status.value if status else "-",
        )

        if event_type == EventType.CHECK_IN:
            self._bind_profile(event, server_now)
        return event

    def _bind_profile(self, event: AttendanceEvent, seen_at) -> None:
        # Independent of the append: a failed binding does not undo the event.
        try:
            self._profiles.bind_tenant(
                actor_id=event.actor_id, tenant_id=event.tenant_id, display_name=event.actor_name, seen_at=seen_at
            )
        except PersistenceError as e:
            logger.warning("Event #%s recorded but tenant binding for %s failed: %s", event.event_id, event.actor_id, e)


class AttendanceService:
    """Terminal use cases: resolve tenant rules, get a location, record."""

    def __init__(
        self,
        log: EventLog,
        settings: TenantSettingsService,
        recorder: EventRecorder,
        *,
        location_timeout_seconds: float = DEFAULT_LOCATION_TIMEOUT_SECONDS,
    ):
        self._log = log
        self._settings = settings
        self._recorder = recorder
        self._timeout = float(location_timeout_seconds)

    def check_in(self, tenant_id: str, actor_id: str, actor_name: str, location: LocationProvider) -> AttendanceEvent:
        config = self._settings.get_configuration(tenant_id)
        position = acquire_location(location, timeout_seconds=self._timeout)
        return self._recorder.record_check_in(config.tenant_id, actor_id, actor_name, position, config)

    def check_out(self, tenant_id: str, actor_id: str, actor_name: str, location: LocationProvider) -> AttendanceEvent:
        config = self._settings.get_configuration(tenant_id)
        position = acquire_location(location, timeout_seconds=self._timeout)
        return self._recorder.record_check_out(config.tenant_id, actor_id, actor_name, position, config)

    def punch(self, tenant_id: str, actor_id: str, actor_name: str, location: LocationProvider) -> AttendanceEvent:
        """Single scan action: check out if currently checked in today, else check in."""
        config = self._settings.get_configuration(tenant_id)
        today = to_local(self._log.server_time(), config.zone()).date()
        mine = [e for e in self.events_for_day(config, today) if e.actor_id == actor_id]
        checked_in = bool(mine) and mine[-1].is_check_in

        position = acquire_location(location, timeout_seconds=self._timeout)
        if checked_in:
            return self._recorder.record_check_out(config.tenant_id, actor_id, actor_name, position, config)
        return self._recorder.record_check_in(config.tenant_id, actor_id, actor_name, position, config)

    def events_for_day(self, config: TenantConfiguration, day: date) -> Sequence[AttendanceEvent]:
        start, end = local_day_bounds(day, config.zone())
        return self._log.query_range(config.tenant_id, start, end)
