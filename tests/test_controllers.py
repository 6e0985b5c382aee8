from __future__ import annotations

from datetime import datetime, time, timezone

import pytest

from geo_attendance.alerts.model import DismissalRecord
from geo_attendance.attendance.memory_event_log import InMemoryEventLog
from geo_attendance.container import wire
from geo_attendance.core.exceptions import PersistenceError
from geo_attendance.geofence.model import GeoPoint
from geo_attendance.main import create_app
from geo_attendance.tenants.model import TenantConfiguration

HEADERS = {"X-Actor-Id": "u1", "X-Actor-Name": "A. Smith!"}


class Clock:
    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now


class InMemorySettings:
    def __init__(self):
        self.rows = {
            "acme": {"site_latitude": 0.0, "site_longitude": 0.0, "geofence_radius_meters": 200.0},
        }

    def get_configuration(self, tenant_id):
        row = self.rows.get(tenant_id)
        if row is None:
            return None
        center = None
        if row.get("site_latitude") is not None:
            center = GeoPoint(row["site_latitude"], row["site_longitude"])
        return TenantConfiguration(
            tenant_id=tenant_id,
            shift_start=row.get("shift_start", time(9, 0)),
            grace_period_minutes=row.get("grace_period_minutes", 5),
            site_center=center,
            geofence_radius_meters=row.get("geofence_radius_meters", 150.0),
            timezone=row.get("timezone", "UTC"),
        )

    def upsert_merge(self, tenant_id, partial):
        self.rows.setdefault(tenant_id, {}).update(partial)


class InMemoryProfiles:
    def __init__(self):
        self.bindings = {}

    def bind_tenant(self, *, actor_id, tenant_id, display_name, seen_at):
        self.bindings.setdefault(actor_id, tenant_id)


class InMemoryDismissals:
    def __init__(self):
        self.records: set[DismissalRecord] = set()

    def upsert(self, record):
        self.records.add(record)

    def exists(self, record):
        return record in self.records

    def list_for_tenant(self, tenant_id):
        return {r for r in self.records if r.tenant_id == tenant_id}

    def delete_all_for_tenant(self, tenant_id):
        doomed = self.list_for_tenant(tenant_id)
        self.records -= doomed
        return len(doomed)


class BrokenLog(InMemoryEventLog):
    def append(self, draft):
        raise PersistenceError("connection reset")


@pytest.fixture
def clock():
    return Clock(datetime(2026, 3, 2, 8, 55, tzinfo=timezone.utc))


def _client(monkeypatch, log):
    monkeypatch.setenv("APP_ENV", "testing")
    container = wire(
        event_log=log,
        settings_repo=InMemorySettings(),
        profiles_repo=InMemoryProfiles(),
        dismissals_repo=InMemoryDismissals(),
        location_timeout_seconds=1,
    )
    return create_app(container).test_client()


@pytest.fixture
def client(monkeypatch, clock):
    return _client(monkeypatch, InMemoryEventLog(clock=clock))


def test_check_in_success(client):
    resp = client.post("/t/acme/checkin", json={"latitude": 0.0001, "longitude": 0}, headers=HEADERS)
    assert resp.status_code == 201
    body = resp.get_json()
    assert body["success"] is True
    assert body["event"]["status"] == "ON_TIME"
    assert body["event"]["event_type"] == "CHECK_IN"


def test_unknown_tenant_link(client):
    resp = client.post("/t/ghost/checkin", json={"latitude": 0, "longitude": 0}, headers=HEADERS)
    assert resp.status_code == 404
    assert resp.get_json()["error"] == "configuration_missing"


def test_outside_geofence_reports_distance(client):
    resp = client.post("/t/acme/checkin", json={"latitude": 0.0044966, "longitude": 0}, headers=HEADERS)
    assert resp.status_code == 403
    body = resp.get_json()
    assert body["error"] == "geofence_violation"
    assert body["distance_meters"] == pytest.approx(500, abs=1.0)


def test_missing_location(client):
    resp = client.post("/t/acme/checkin", json={}, headers=HEADERS)
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "location_unavailable"


def test_missing_identity(client):
    resp = client.post("/t/acme/checkin", json={"latitude": 0, "longitude": 0})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "validation_error"


def test_store_failure(monkeypatch, clock):
    client = _client(monkeypatch, BrokenLog(clock=clock))
    resp = client.post("/t/acme/checkin", json={"latitude": 0, "longitude": 0}, headers=HEADERS)
    assert resp.status_code == 503
    assert resp.get_json()["error"] == "persistence_error"


def test_punch_then_stats(client, clock):
    client.post("/t/acme/punch", json={"latitude": 0, "longitude": 0}, headers=HEADERS)
    clock.now = datetime(2026, 3, 2, 17, 0, tzinfo=timezone.utc)
    resp = client.post("/t/acme/punch", json={"latitude": 0, "longitude": 0}, headers=HEADERS)
    assert resp.get_json()["event"]["event_type"] == "CHECK_OUT"

    stats = client.get("/api/tenants/acme/stats/today").get_json()["stats"]
    assert stats["total_count"] == 2
    assert stats["present_count"] == 0
    assert stats["checked_out_count"] == 1


def test_alert_dismiss_and_reset_flow(client, clock):
    for day in (2, 3):
        clock.now = datetime(2026, 3, day, 9, 40, tzinfo=timezone.utc)
        client.post("/t/acme/checkin", json={"latitude": 0, "longitude": 0}, headers=HEADERS)

    alerts = client.get("/api/tenants/acme/alerts").get_json()["alerts"]
    assert [a["type"] for a in alerts] == ["consecutive"]

    resp = client.post("/api/tenants/acme/alerts/dismiss", json={"actor_name": "A. Smith!", "type": "consecutive"})
    assert resp.status_code == 200
    assert client.get("/api/tenants/acme/alerts").get_json()["alerts"] == []

    assert client.post("/api/tenants/acme/alerts/reset", json={}).status_code == 400
    resp = client.post("/api/tenants/acme/alerts/reset", json={"confirm": True})
    assert resp.get_json()["removed"] == 1
    assert len(client.get("/api/tenants/acme/alerts").get_json()["alerts"]) == 1


def test_settings_roundtrip(client):
    resp = client.put("/api/tenants/acme/settings", json={"shift_start": "08:00", "timezone": "Africa/Lagos"})
    assert resp.status_code == 200
    settings = client.get("/api/tenants/acme/settings").get_json()["settings"]
    assert settings["shift_start"] == "08:00"
    assert settings["timezone"] == "Africa/Lagos"
    assert settings["site_center"] == {"latitude": 0.0, "longitude": 0.0}

    resp = client.put("/api/tenants/acme/settings", json={"grace_period_minutes": -5})
    assert resp.status_code == 400


def test_reliability_days_validation(client):
    assert client.get("/api/tenants/acme/reliability?days=0").status_code == 400
    assert client.get("/api/tenants/acme/reliability?days=7").status_code == 200
