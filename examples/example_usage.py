"""Example: drive the service layer without Flask or MySQL.

Controllers are a thin layer; the rules live in the services.
"""

from datetime import datetime, timedelta, timezone

from geo_attendance.attendance.memory_event_log import InMemoryEventLog
from geo_attendance.attendance.service import EventRecorder
from geo_attendance.geofence.model import GeoPoint
from geo_attendance.patterns.detector import PatternDetector
from geo_attendance.stats.aggregator import StatsAggregator
from geo_attendance.tenants.model import TenantConfiguration


class _Profiles:
    def bind_tenant(self, **kwargs):
        pass


def main():
    clock = {"now": datetime(2026, 3, 2, 9, 20, tzinfo=timezone.utc)}
    log = InMemoryEventLog(clock=lambda: clock["now"])
    config = TenantConfiguration(tenant_id="acme", site_center=GeoPoint(6.4654, 3.4064), geofence_radius_meters=200)
    recorder = EventRecorder(log, _Profiles())

    for week in range(3):
        clock["now"] = datetime(2026, 3, 2, 9, 20, tzinfo=timezone.utc) + timedelta(weeks=week)
        recorder.record_check_in("acme", "u1", "Ada", GeoPoint(6.4655, 3.4065), config)

    events = log.query_range("acme", datetime(2026, 3, 1, tzinfo=timezone.utc), datetime(2026, 4, 1, tzinfo=timezone.utc))
    print(StatsAggregator().aggregate(events))
    for alert in PatternDetector().detect(events, config.zone()):
        print(alert.severity.value, alert.message)


if __name__ == "__main__":
    main()
