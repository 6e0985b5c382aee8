from __future__ import annotations

from dataclasses import dataclass

from .alerts.mysql_dismissal_repository import MySQLDismissalRepository
from .alerts.repository import DismissalRepository
from .alerts.service import AlertStateManager
from .attendance.mysql_event_log import MySQLEventLog
from .attendance.repository import EventLog
from .attendance.service import AttendanceService, EventRecorder
from .core.constants import DEFAULT_LOCATION_TIMEOUT_SECONDS, DEFAULT_PATTERN_LOOKBACK_DAYS, DEFAULT_TIMEZONE
from .dashboard.service import DashboardService
from .database.connection import ConnectionFactory, DBConfig
from .profiles.mysql_profile_repository import MySQLActorProfileRepository
from .profiles.repository import ActorProfileRepository
from .tenants.mysql_tenant_repository import MySQLTenantSettingsRepository
from .tenants.repository import TenantSettingsRepository
from .tenants.service import TenantSettingsService


@dataclass(frozen=True)
class Container:
    event_log: EventLog
    settings_repo: TenantSettingsRepository
    profiles_repo: ActorProfileRepository
    dismissals_repo: DismissalRepository

    settings_service: TenantSettingsService
    recorder: EventRecorder
    attendance_service: AttendanceService
    alert_state: AlertStateManager
    dashboard_service: DashboardService


def wire(
    *,
    event_log: EventLog,
    settings_repo: TenantSettingsRepository,
    profiles_repo: ActorProfileRepository,
    dismissals_repo: DismissalRepository,
    location_timeout_seconds: float = DEFAULT_LOCATION_TIMEOUT_SECONDS,
    pattern_lookback_days: int = DEFAULT_PATTERN_LOOKBACK_DAYS,
) -> Container:
    settings_service = TenantSettingsService(settings_repo)
    recorder = EventRecorder(event_log, profiles_repo)
    attendance_service = AttendanceService(
        event_log,
        settings_service,
        recorder,
        location_timeout_seconds=location_timeout_seconds,
    )
    alert_state = AlertStateManager(dismissals_repo)
    dashboard_service = DashboardService(
        event_log,
        settings_service,
        alert_state,
        lookback_days=pattern_lookback_days,
    )

    return Container(
        event_log=event_log,
        settings_repo=settings_repo,
        profiles_repo=profiles_repo,
        dismissals_repo=dismissals_repo,
        settings_service=settings_service,
        recorder=recorder,
        attendance_service=attendance_service,
        alert_state=alert_state,
        dashboard_service=dashboard_service,
    )


def build_container(
    *,
    db_config: dict,
    default_timezone: str = DEFAULT_TIMEZONE,
    location_timeout_seconds: float = DEFAULT_LOCATION_TIMEOUT_SECONDS,
    pattern_lookback_days: int = DEFAULT_PATTERN_LOOKBACK_DAYS,
) -> Container:
    conn = ConnectionFactory.shared(DBConfig.from_mapping(db_config))

    return wire(
        event_log=MySQLEventLog(conn),
        settings_repo=MySQLTenantSettingsRepository(conn, default_timezone=default_timezone),
        profiles_repo=MySQLActorProfileRepository(conn),
        dismissals_repo=MySQLDismissalRepository(conn),
        location_timeout_seconds=location_timeout_seconds,
        pattern_lookback_days=pattern_lookback_days,
    )
