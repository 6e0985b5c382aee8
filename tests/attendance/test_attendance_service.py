from __future__ import annotations

from datetime import datetime, time, timezone

import pytest

from geo_attendance.attendance.location import StaticLocation
from geo_attendance.attendance.memory_event_log import InMemoryEventLog
from geo_attendance.attendance.service import AttendanceService, EventRecorder
from geo_attendance.core.enums import EventType
from geo_attendance.core.exceptions import ConfigurationMissing, LocationUnavailable
from geo_attendance.geofence.model import GeoPoint
from geo_attendance.tenants.model import TenantConfiguration
from geo_attendance.tenants.service import TenantSettingsService


class InMemorySettings:
    def __init__(self, configs: dict[str, TenantConfiguration]):
        self.configs = configs

    def get_configuration(self, tenant_id):
        return self.configs.get(tenant_id)

    def upsert_merge(self, tenant_id, partial):
        raise NotImplementedError


class NullProfiles:
    def bind_tenant(self, **kwargs):
        pass


class Clock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def _service(clock: Clock):
    log = InMemoryEventLog(clock=clock)
    config = TenantConfiguration(tenant_id="acme", shift_start=time(9, 0), site_center=GeoPoint(0, 0), geofence_radius_meters=200)
    settings = TenantSettingsService(InMemorySettings({"acme": config}))
    return AttendanceService(log, settings, EventRecorder(log, NullProfiles()), location_timeout_seconds=1), log


def test_unknown_tenant_is_refused():
    svc, _ = _service(Clock(datetime(2026, 3, 2, 8, 0, tzinfo=timezone.utc)))
    with pytest.raises(ConfigurationMissing):
        svc.check_in("ghost", "u1", "Ada", StaticLocation(0, 0))


def test_missing_location_is_reported():
    svc, _ = _service(Clock(datetime(2026, 3, 2, 8, 0, tzinfo=timezone.utc)))
    with pytest.raises(LocationUnavailable):
        svc.check_in("acme", "u1", "Ada", StaticLocation(None, None))


def test_punch_toggles_between_check_in_and_check_out():
    clock = Clock(datetime(2026, 3, 2, 8, 50, tzinfo=timezone.utc))
    svc, _ = _service(clock)

    first = svc.punch("acme", "u1", "Ada", StaticLocation(0, 0))
    clock.now = datetime(2026, 3, 2, 17, 0, tzinfo=timezone.utc)
    second = svc.punch("acme", "u1", "Ada", StaticLocation(0, 0))
    clock.now = datetime(2026, 3, 2, 18, 0, tzinfo=timezone.utc)
    third = svc.punch("acme", "u1", "Ada", StaticLocation(0, 0))

    assert [first.event_type, second.event_type, third.event_type] == [
        EventType.CHECK_IN,
        EventType.CHECK_OUT,
        EventType.CHECK_IN,
    ]


def test_punch_starts_fresh_on_a_new_day():
    clock = Clock(datetime(2026, 3, 2, 8, 50, tzinfo=timezone.utc))
    svc, _ = _service(clock)

    svc.punch("acme", "u1", "Ada", StaticLocation(0, 0))
    clock.now = datetime(2026, 3, 3, 8, 50, tzinfo=timezone.utc)
    assert svc.punch("acme", "u1", "Ada", StaticLocation(0, 0)).event_type == EventType.CHECK_IN


def test_explicit_check_in_is_not_deduplicated():
    svc, log = _service(Clock(datetime(2026, 3, 2, 8, 50, tzinfo=timezone.utc)))
    svc.check_in("acme", "u1", "Ada", StaticLocation(0, 0))
    svc.check_in("acme", "u1", "Ada", StaticLocation(0, 0))

    rows = log.query_range("acme", datetime(2026, 3, 2, tzinfo=timezone.utc), datetime(2026, 3, 3, tzinfo=timezone.utc))
    assert len(rows) == 2
