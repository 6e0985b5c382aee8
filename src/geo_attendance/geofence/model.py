from __future__ import annotations

from dataclasses import dataclass

from ..common.validators import require_coordinate


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float

    @classmethod
    def parse(cls, latitude, longitude) -> "GeoPoint":
        """Build a point from untrusted input (request payloads, DB rows)."""
        return cls(
            latitude=require_coordinate(latitude, "latitude", limit=90.0),
            longitude=require_coordinate(longitude, "longitude", limit=180.0),
        )


@dataclass(frozen=True)
class GeofenceCheck:
    within_bounds: bool
    distance_meters: float
