from __future__ import annotations

from typing import Iterable, Optional, Sequence
from zoneinfo import ZoneInfo

from ..attendance.model import AttendanceEvent
from ..common.datetime_utils import weekday_name
from ..stats.aggregator import valid_events
from .model import ActorHistory, PatternAlert
from .rules.base import PatternRule
from .rules.day_specific_rule import DaySpecificDelayRule
from .rules.frequency_rule import ChronicLateFrequencyRule
from .rules.streak_rule import ConsecutiveLateStreakRule


def default_rules() -> list[PatternRule]:
    return [ConsecutiveLateStreakRule(), ChronicLateFrequencyRule(), DaySpecificDelayRule()]


class PatternDetector:
    """Batch analysis of one tenant's recent history, actor by actor.

    A pure function of the event set: input order does not matter, because each
    actor's events are re-sorted into log order (timestamp, then id).
    """

    def __init__(self, rules: Optional[Sequence[PatternRule]] = None):
        self._rules = list(rules) if rules is not None else default_rules()

    def build_histories(self, events: Iterable[AttendanceEvent], zone: ZoneInfo) -> list[ActorHistory]:
        by_actor: dict[str, list[AttendanceEvent]] = {}
        for e in valid_events(events):
            if not e.actor_id:
                continue
            by_actor.setdefault(e.actor_id, []).append(e)

        histories = []
        for actor_id in sorted(by_actor):
            rows = sorted(by_actor[actor_id], key=AttendanceEvent.sort_key, reverse=True)
            history = ActorHistory(tenant_id=rows[0].tenant_id, actor_id=actor_id, actor_name=rows[0].actor_name)

            for e in rows:
                if not e.is_check_in:
                    continue
                history.total_logs += 1
                if len(history.recent_pair) < 2:
                    history.recent_pair.append(e.timeliness_status)
                if e.is_late:
                    history.late_count += 1
                    day = weekday_name(e.server_timestamp, zone)
                    history.late_by_weekday[day] = history.late_by_weekday.get(day, 0) + 1

            histories.append(history)
        return histories

    def detect(self, events: Iterable[AttendanceEvent], zone: ZoneInfo) -> list[PatternAlert]:
        alerts: list[PatternAlert] = []
        for history in self.build_histories(events, zone):
            for rule in self._rules:
                alerts.extend(rule.evaluate(history))
        return alerts
