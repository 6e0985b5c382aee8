from __future__ import annotations

import logging
from typing import Any, Mapping

from ..common.datetime_utils import get_zone, parse_hhmm
from ..common.validators import require_non_empty, require_non_negative_int, require_positive
from ..core.exceptions import ConfigurationMissing, ValidationError
from ..geofence.model import GeoPoint
from .model import TenantConfiguration
from .repository import TenantSettingsRepository

logger = logging.getLogger(__name__)


class TenantSettingsService:
    """Use case: read and update a tenant's attendance rules."""

    def __init__(self, settings: TenantSettingsRepository):
        self._settings = settings

    def get_configuration(self, tenant_id: str) -> TenantConfiguration:
        """Read path used before recording an event.

        A missing configuration is an error, never a permissive default: it usually
        means a stale or malformed terminal link.
        """
        tenant_id = require_non_empty(tenant_id, "tenant_id")
        config = self._settings.get_configuration(tenant_id)
        if config is None:
            raise ConfigurationMissing(tenant_id)
        return config

    def update(self, tenant_id: str, changes: Mapping[str, Any]) -> TenantConfiguration:
        """Merge-write the given settings. Accepted keys:

        shift_start ("HH:MM"), grace_period_minutes, site_center ({latitude, longitude}
        or None to disable geofencing), geofence_radius_meters, timezone.
        """
        tenant_id = require_non_empty(tenant_id, "tenant_id")
        partial: dict[str, Any] = {}

        for key, value in changes.items():
            if key == "shift_start":
                partial["shift_start"] = parse_hhmm(value)
            elif key == "grace_period_minutes":
                partial["grace_period_minutes"] = require_non_negative_int(value, "grace_period_minutes")
            elif key == "geofence_radius_meters":
                partial["geofence_radius_meters"] = require_positive(value, "geofence_radius_meters")
            elif key == "timezone":
                partial["timezone"] = get_zone(require_non_empty(value, "timezone")).key
            elif key == "site_center":
                if value is None:
                    partial["site_latitude"] = None
                    partial["site_longitude"] = None
                else:
                    if not isinstance(value, Mapping):
                        raise ValidationError("site_center must be an object with latitude/longitude")
                    point = GeoPoint.parse(value.get("latitude"), value.get("longitude"))
                    partial["site_latitude"] = point.latitude
                    partial["site_longitude"] = point.longitude
            else:
                raise ValidationError(f"Unknown setting {key!r}")

        if not partial:
            raise ValidationError("No settings to update")

        self._settings.upsert_merge(tenant_id, partial)
        logger.info("Updated settings for tenant %s: %s", tenant_id, sorted(changes))
        return self.get_configuration(tenant_id)
