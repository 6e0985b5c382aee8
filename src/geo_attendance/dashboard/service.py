from __future__ import annotations

from datetime import date, timedelta
from typing import Callable, Optional, Sequence

from ..alerts.service import AlertStateManager
from ..attendance.model import AttendanceEvent
from ..attendance.repository import EventLog
from ..common.datetime_utils import local_day_bounds, to_local
from ..core.constants import DEFAULT_PATTERN_LOOKBACK_DAYS
from ..patterns.detector import PatternDetector
from ..patterns.model import PatternAlert
from ..stats.aggregator import StatsAggregator
from ..stats.live import LiveStatsView
from ..stats.model import DailyStats, DayBreakdown, PresentActor, ReliabilityRow
from ..tenants.model import TenantConfiguration
from ..tenants.service import TenantSettingsService


class DashboardService:
    """Operator-facing read side. Every entry point takes the tenant id explicitly."""

    def __init__(
        self,
        log: EventLog,
        settings: TenantSettingsService,
        alert_state: AlertStateManager,
        *,
        aggregator: Optional[StatsAggregator] = None,
        detector: Optional[PatternDetector] = None,
        lookback_days: int = DEFAULT_PATTERN_LOOKBACK_DAYS,
    ):
        self._log = log
        self._settings = settings
        self._alert_state = alert_state
        self._aggregator = aggregator or StatsAggregator()
        self._detector = detector or PatternDetector()
        self._lookback_days = int(lookback_days)

    def _today(self, config: TenantConfiguration) -> date:
        return to_local(self._log.server_time(), config.zone()).date()

    def _events_between(self, config: TenantConfiguration, first_day: date, last_day: date) -> Sequence[AttendanceEvent]:
        zone = config.zone()
        start, _ = local_day_bounds(first_day, zone)
        _, end = local_day_bounds(last_day, zone)
        return self._log.query_range(config.tenant_id, start, end)

    def _recent(self, config: TenantConfiguration, days: int) -> Sequence[AttendanceEvent]:
        today = self._today(config)
        return self._events_between(config, today - timedelta(days=max(1, days) - 1), today)

    def today_events(self, tenant_id: str, *, day: Optional[date] = None) -> Sequence[AttendanceEvent]:
        config = self._settings.get_configuration(tenant_id)
        day = day or self._today(config)
        return self._events_between(config, day, day)

    def daily_stats(self, tenant_id: str, *, day: Optional[date] = None) -> DailyStats:
        config = self._settings.get_configuration(tenant_id)
        day = day or self._today(config)
        return self._aggregator.aggregate(self._events_between(config, day, day), zone=config.zone())

    def present_actors(self, tenant_id: str) -> list[PresentActor]:
        return self._aggregator.present_actors(self.today_events(tenant_id))

    def live_stats(self, tenant_id: str, *, on_update: Optional[Callable[[DailyStats], None]] = None) -> LiveStatsView:
        """Start a subscription-backed view of today's stats; call `stop()` when the session ends.

        The view moves to the next tenant-local day on the first append after
        midnight; until then `view.day` still names the previous day.
        """
        config = self._settings.get_configuration(tenant_id)
        view = LiveStatsView(self._log, config, self._today(config), aggregator=self._aggregator, on_update=on_update)
        return view.start()

    def detect_patterns(self, tenant_id: str) -> list[PatternAlert]:
        config = self._settings.get_configuration(tenant_id)
        return self._detector.detect(self._recent(config, self._lookback_days), config.zone())

    def active_alerts(self, tenant_id: str) -> list[PatternAlert]:
        return self._alert_state.filter_active(tenant_id, self.detect_patterns(tenant_id))

    def reliability(self, tenant_id: str, *, days: int = 7) -> list[ReliabilityRow]:
        config = self._settings.get_configuration(tenant_id)
        return self._aggregator.reliability_summary(self._recent(config, days))

    def daily_breakdown(self, tenant_id: str, *, days: int = 7) -> list[DayBreakdown]:
        config = self._settings.get_configuration(tenant_id)
        return self._aggregator.daily_breakdown(self._recent(config, days), config.zone())
