from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional
from zoneinfo import ZoneInfo

from ..common.datetime_utils import get_zone
from ..core.constants import (
    DEFAULT_GEOFENCE_RADIUS_METERS,
    DEFAULT_GRACE_MINUTES,
    DEFAULT_SHIFT_START,
    DEFAULT_TIMEZONE,
)
from ..geofence.model import GeoPoint


@dataclass(frozen=True)
class TenantConfiguration:
    """Thực thể miền (domain): Cấu hình chấm công của một doanh nghiệp.

    `site_center` is optional; without it geofencing is disabled and every
    location is accepted.
    """

    tenant_id: str
    shift_start: time = DEFAULT_SHIFT_START
    grace_period_minutes: int = DEFAULT_GRACE_MINUTES
    site_center: Optional[GeoPoint] = None
    geofence_radius_meters: float = DEFAULT_GEOFENCE_RADIUS_METERS
    timezone: str = DEFAULT_TIMEZONE

    @property
    def geofence_enabled(self) -> bool:
        return self.site_center is not None

    def zone(self) -> ZoneInfo:
        return get_zone(self.timezone)
