from __future__ import annotations

import math

from ..core.constants import EARTH_RADIUS_METERS
from ..tenants.model import TenantConfiguration
from .model import GeoPoint, GeofenceCheck


def haversine_distance(a: GeoPoint, b: GeoPoint, *, radius: float = EARTH_RADIUS_METERS) -> float:
    """Great-circle distance between two points in meters."""
    phi1 = math.radians(a.latitude)
    phi2 = math.radians(b.latitude)
    dphi = math.radians(b.latitude - a.latitude)
    dlambda = math.radians(b.longitude - a.longitude)

    h = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    # Rounding can push h slightly outside [0, 1] for antipodal points.
    h = min(1.0, max(0.0, h))
    return 2 * radius * math.atan2(math.sqrt(h), math.sqrt(1 - h))


class GeoValidator:
    """Decide whether a reported position is inside a tenant's geofence."""

    def validate(self, reported: GeoPoint, config: TenantConfiguration) -> GeofenceCheck:
        if config.site_center is None:
            return GeofenceCheck(within_bounds=True, distance_meters=0.0)

        distance = haversine_distance(reported, config.site_center)
        return GeofenceCheck(
            within_bounds=distance <= config.geofence_radius_meters,
            distance_meters=distance,
        )
