from __future__ import annotations

from typing import Any, Mapping, Optional

from ..core.constants import (
    DEFAULT_GEOFENCE_RADIUS_METERS,
    DEFAULT_GRACE_MINUTES,
    DEFAULT_SHIFT_START,
    DEFAULT_TIMEZONE,
)
from ..database.connection import ConnectionFactory
from ..database.mysql_base import db_cursor, fetch_one, to_time_of_day
from ..geofence.model import GeoPoint
from .model import TenantConfiguration
from .repository import TenantSettingsRepository

_COLUMNS = (
    "shift_start",
    "grace_period_minutes",
    "site_latitude",
    "site_longitude",
    "geofence_radius_meters",
    "timezone",
)


class MySQLTenantSettingsRepository(TenantSettingsRepository):
    def __init__(self, conn_factory: ConnectionFactory, *, default_timezone: str = DEFAULT_TIMEZONE):
        self._conn_factory = conn_factory
        self._default_timezone = default_timezone

    def get_configuration(self, tenant_id: str) -> Optional[TenantConfiguration]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT tenant_id, shift_start, grace_period_minutes, site_latitude, site_longitude,
                       geofence_radius_meters, timezone
                FROM tenant_settings
                WHERE tenant_id=%s
                """,
                (tenant_id,),
            )
            r = fetch_one(cur)
            if not r:
                return None

            center = None
            if r.get("site_latitude") is not None and r.get("site_longitude") is not None:
                center = GeoPoint(latitude=float(r["site_latitude"]), longitude=float(r["site_longitude"]))

            return TenantConfiguration(
                tenant_id=r["tenant_id"],
                shift_start=to_time_of_day(r.get("shift_start")) or DEFAULT_SHIFT_START,
                grace_period_minutes=int(r["grace_period_minutes"]) if r.get("grace_period_minutes") is not None else DEFAULT_GRACE_MINUTES,
                site_center=center,
                geofence_radius_meters=float(r.get("geofence_radius_meters") or DEFAULT_GEOFENCE_RADIUS_METERS),
                timezone=r.get("timezone") or self._default_timezone,
            )

    def upsert_merge(self, tenant_id: str, partial: Mapping[str, Any]) -> None:
        fields = {k: v for k, v in partial.items() if k in _COLUMNS}
        unknown = set(partial) - set(_COLUMNS)
        if unknown:
            raise ValueError(f"Unknown settings fields: {sorted(unknown)}")

        columns = ["tenant_id", *fields]
        placeholders = ",".join(["%s"] * len(columns))
        # Only the columns being written are touched on conflict; the rest are preserved.
        updates = ", ".join(f"{c}=VALUES({c})" for c in fields) or "tenant_id=tenant_id"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO tenant_settings({", ".join(columns)})
                VALUES({placeholders})
                ON DUPLICATE KEY UPDATE {updates}
                """,
                (tenant_id, *fields.values()),
            )
