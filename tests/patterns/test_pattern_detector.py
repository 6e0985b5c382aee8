from __future__ import annotations

import random
from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from geo_attendance.attendance.model import AttendanceEvent
from geo_attendance.core.enums import EventType, PatternType, Severity, TimelinessStatus
from geo_attendance.patterns.detector import PatternDetector

UTC = ZoneInfo("UTC")
L = TimelinessStatus.LATE
OK = TimelinessStatus.ON_TIME


class EventFactory:
    def __init__(self, tenant_id="acme"):
        self.tenant_id = tenant_id
        self.next_id = 1

    def check_in(self, actor_id, day, status, *, month=3, hh=9, mm=0):
        return self._make(actor_id, day, month, hh, mm, EventType.CHECK_IN, status)

    def check_out(self, actor_id, day, *, month=3, hh=17, mm=0):
        return self._make(actor_id, day, month, hh, mm, EventType.CHECK_OUT, None)

    def _make(self, actor_id, day, month, hh, mm, event_type, status):
        event = AttendanceEvent(
            event_id=self.next_id,
            tenant_id=self.tenant_id,
            actor_id=actor_id,
            actor_name=f"Name {actor_id}",
            server_timestamp=datetime(2026, month, day, hh, mm, tzinfo=timezone.utc),
            event_type=event_type,
            timeliness_status=status,
            minutes_late=12 if status == L else 0,
        )
        self.next_id += 1
        return event


def _types(alerts):
    return sorted(a.pattern_type.value for a in alerts)


def test_two_most_recent_late_check_ins_make_a_streak():
    f = EventFactory()
    # Monday then Tuesday, both late
    events = [f.check_in("u1", 2, L), f.check_in("u1", 3, L)]

    alerts = PatternDetector().detect(events, UTC)

    assert _types(alerts) == ["consecutive"]
    assert alerts[0].severity == Severity.HIGH
    assert alerts[0].actor_id == "u1"


def test_streak_ignores_check_outs_between_check_ins():
    f = EventFactory()
    events = [f.check_in("u1", 2, L), f.check_out("u1", 2), f.check_in("u1", 3, L), f.check_out("u1", 3)]
    assert _types(PatternDetector().detect(events, UTC)) == ["consecutive"]


def test_no_streak_when_latest_is_on_time():
    f = EventFactory()
    events = [f.check_in("u1", 2, L), f.check_in("u1", 3, L), f.check_in("u1", 4, OK)]
    alerts = PatternDetector().detect(events, UTC)
    assert PatternType.CONSECUTIVE_LATE_STREAK not in {a.pattern_type for a in alerts}


def test_single_late_check_in_is_not_a_streak():
    f = EventFactory()
    assert PatternDetector().detect([f.check_in("u1", 2, L)], UTC) == []


def test_chronic_frequency_reports_rounded_percentage():
    f = EventFactory()
    # Mon-Wed late, Thu-Fri on time: 3/5 = 60%, newest two on time.
    events = [
        f.check_in("u1", 2, L),
        f.check_in("u1", 3, L),
        f.check_in("u1", 4, L),
        f.check_in("u1", 5, OK),
        f.check_in("u1", 6, OK),
    ]

    alerts = PatternDetector().detect(events, UTC)

    assert _types(alerts) == ["frequency"]
    assert "60%" in alerts[0].message
    assert alerts[0].severity == Severity.HIGH


def test_exactly_forty_percent_is_not_chronic():
    f = EventFactory()
    events = [
        f.check_in("u1", 2, L),
        f.check_in("u1", 3, L),
        f.check_in("u1", 4, OK),
        f.check_in("u1", 5, OK),
        f.check_in("u1", 6, OK),
    ]
    assert PatternDetector().detect(events, UTC) == []


def test_chronic_needs_three_shifts():
    f = EventFactory()
    # 1 of 2 late (50%) but too few shifts; check-outs do not count as shifts.
    events = [f.check_in("u1", 2, L), f.check_out("u1", 2), f.check_in("u1", 3, OK), f.check_out("u1", 3)]
    assert PatternDetector().detect(events, UTC) == []


def test_two_late_mondays_make_one_day_specific_alert():
    f = EventFactory()
    events = [
        f.check_in("u1", 2, L),  # Monday
        f.check_in("u1", 9, L),  # Monday
        f.check_in("u1", 10, OK),
        f.check_in("u1", 11, OK),
        f.check_in("u1", 12, OK),
        f.check_in("u1", 13, OK),
    ]

    alerts = PatternDetector().detect(events, UTC)

    assert _types(alerts) == ["day_specific"]
    assert alerts[0].weekday == "Monday"
    assert "Monday" in alerts[0].message
    assert alerts[0].severity == Severity.MEDIUM


def test_three_late_mondays_still_one_monday_alert():
    f = EventFactory()
    events = [f.check_in("u1", d, L) for d in (2, 9, 16)] + [f.check_in("u1", d, OK) for d in (17, 18, 19, 20, 21, 22)]
    alerts = [a for a in PatternDetector().detect(events, UTC) if a.pattern_type == PatternType.DAY_SPECIFIC_DELAY]
    assert len(alerts) == 1
    assert "Late on 3 Mondays" in alerts[0].message


def test_each_weekday_alerts_independently():
    f = EventFactory()
    events = [
        f.check_in("u1", 2, L),  # Mon
        f.check_in("u1", 6, L),  # Fri
        f.check_in("u1", 9, L),  # Mon
        f.check_in("u1", 13, L),  # Fri
    ] + [f.check_in("u1", d, OK) for d in (14, 15, 16, 17, 18, 19)]

    alerts = [a for a in PatternDetector().detect(events, UTC) if a.pattern_type == PatternType.DAY_SPECIFIC_DELAY]
    assert sorted(a.weekday for a in alerts) == ["Friday", "Monday"]


def test_weekday_follows_tenant_zone():
    f = EventFactory()
    # Sunday 23:30 UTC is Monday morning in Tokyo.
    events = [f.check_in("u1", 1, L, hh=23, mm=30), f.check_in("u1", 8, L, hh=23, mm=30)] + [
        f.check_in("u1", d, OK) for d in (10, 11, 12, 13)
    ]
    tokyo = [a for a in PatternDetector().detect(events, ZoneInfo("Asia/Tokyo")) if a.weekday]
    utc = [a for a in PatternDetector().detect(events, UTC) if a.weekday]
    assert [a.weekday for a in tokyo] == ["Monday"]
    assert [a.weekday for a in utc] == ["Sunday"]


def test_actor_can_trigger_every_rule_at_once():
    f = EventFactory()
    events = [f.check_in("u1", 2, L), f.check_in("u1", 9, L), f.check_in("u1", 10, OK), f.check_in("u1", 11, L), f.check_in("u1", 12, L)]
    assert _types(PatternDetector().detect(events, UTC)) == ["consecutive", "day_specific", "frequency"]


def test_actors_are_analyzed_separately():
    f = EventFactory()
    events = [f.check_in("u1", 2, L), f.check_in("u2", 3, L), f.check_in("u1", 4, OK), f.check_in("u2", 4, OK)]
    assert PatternDetector().detect(events, UTC) == []


def test_malformed_records_are_skipped():
    f = EventFactory()
    broken = AttendanceEvent(
        event_id=500,
        tenant_id="acme",
        actor_id="u1",
        actor_name="Name u1",
        server_timestamp=None,
        event_type=EventType.CHECK_IN,
        timeliness_status=L,
    )
    events = [f.check_in("u1", 2, L), broken]
    assert PatternDetector().detect(events, UTC) == []


def _history():
    f = EventFactory()
    events = []
    for actor in ("u1", "u2", "u3"):
        for day in range(2, 28):
            status = L if (day + len(actor) + int(actor[1])) % 3 == 0 or day % 7 == 2 else OK
            events.append(f.check_in(actor, day, status, mm=int(actor[1])))
            events.append(f.check_out(actor, day))
    return events


def test_detection_is_order_independent():
    events = _history()
    shuffled = list(events)
    random.Random(7).shuffle(shuffled)

    detector = PatternDetector()
    assert set(detector.detect(events, UTC)) == set(detector.detect(shuffled, UTC))


def test_detection_is_idempotent():
    events = _history()
    detector = PatternDetector()
    assert detector.detect(events, UTC) == detector.detect(events, UTC)


def test_naive_timestamps_are_read_as_utc():
    f = EventFactory()
    older = f.check_in("u1", 2, L)
    older = AttendanceEvent(**{**older.__dict__, "server_timestamp": older.server_timestamp.replace(tzinfo=None)})
    newer = f.check_in("u1", 3, L)

    alerts = PatternDetector().detect([newer, older], UTC)
    assert _types(alerts) == ["consecutive"]
