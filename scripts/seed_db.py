from __future__ import annotations

import importlib
import os

from dotenv import load_dotenv

from geo_attendance.config import get_settings_module
from geo_attendance.database.connection import ConnectionFactory, DBConfig
from geo_attendance.tenants.mysql_tenant_repository import MySQLTenantSettingsRepository
from geo_attendance.tenants.service import TenantSettingsService


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    conn = ConnectionFactory.shared(DBConfig.from_mapping(db_config))
    service = TenantSettingsService(
        MySQLTenantSettingsRepository(conn, default_timezone=getattr(settings, "DEFAULT_TIMEZONE", "UTC"))
    )

    tenant_id = os.getenv("SEED_TENANT_ID", "demo")
    config = service.update(
        tenant_id,
        {
            "shift_start": os.getenv("SEED_SHIFT_START", "09:00"),
            "grace_period_minutes": int(os.getenv("SEED_GRACE_MINUTES", "5")),
            "site_center": {
                "latitude": float(os.getenv("SEED_SITE_LAT", "10.7769")),
                "longitude": float(os.getenv("SEED_SITE_LNG", "106.7009")),
            },
            "geofence_radius_meters": float(os.getenv("SEED_RADIUS_METERS", "150")),
            "timezone": os.getenv("SEED_TIMEZONE", getattr(settings, "DEFAULT_TIMEZONE", "UTC")),
        },
    )

    print(
        f"OK: Seeded tenant {config.tenant_id!r} (shift {config.shift_start:%H:%M}, "
        f"grace {config.grace_period_minutes}m, radius {config.geofence_radius_meters:g}m, tz {config.timezone}) -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
    )


if __name__ == "__main__":
    main()
