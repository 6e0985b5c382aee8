from __future__ import annotations


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class LocationUnavailable(DomainError):
    """Raised when the device denies or fails to provide a position in time."""


class GeofenceViolation(DomainError):
    """Raised when a reported position lies outside the tenant's geofence."""

    def __init__(self, distance_meters: float, radius_meters: float | None = None):
        self.distance_meters = float(distance_meters)
        self.radius_meters = radius_meters
        msg = f"Outside the allowed area: {self.distance_meters:.0f}m from site"
        if radius_meters is not None:
            msg += f" (limit {radius_meters:.0f}m)"
        super().__init__(msg)


class PersistenceError(DomainError):
    """Raised when an append or merge write to the store fails."""


class ConfigurationMissing(DomainError):
    """Raised when no tenant configuration exists for a tenant id."""

    def __init__(self, tenant_id: str):
        self.tenant_id = tenant_id
        super().__init__(f"No configuration found for tenant {tenant_id!r}")
