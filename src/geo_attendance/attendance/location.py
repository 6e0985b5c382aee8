from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeout
from typing import Protocol

from ..core.constants import DEFAULT_LOCATION_TIMEOUT_SECONDS
from ..core.exceptions import LocationUnavailable, ValidationError
from ..geofence.model import GeoPoint

logger = logging.getLogger(__name__)


class LocationProvider(Protocol):
    def current_position(self) -> GeoPoint:
        """Return the device position; raise PermissionError when access is denied."""

        raise NotImplementedError


class StaticLocation:
    """A position already submitted by the device (e.g. in the check-in request)."""

    def __init__(self, latitude, longitude):
        self._latitude = latitude
        self._longitude = longitude

    def current_position(self) -> GeoPoint:
        if self._latitude is None or self._longitude is None:
            raise LocationUnavailable("Location was not provided by the device")
        try:
            return GeoPoint.parse(self._latitude, self._longitude)
        except ValidationError as e:
            raise LocationUnavailable(f"Invalid location: {e}") from e


def acquire_location(provider: LocationProvider, *, timeout_seconds: float = DEFAULT_LOCATION_TIMEOUT_SECONDS) -> GeoPoint:
    """Obtain a position or fail explicitly; never hangs past `timeout_seconds`."""
    pool = ThreadPoolExecutor(max_workers=1, thread_name_prefix="location")
    future = pool.submit(provider.current_position)
    try:
        position = future.result(timeout=timeout_seconds)
    except FutureTimeout:
        future.cancel()
        raise LocationUnavailable(f"Timed out after {timeout_seconds:g}s waiting for location")
    except PermissionError as e:
        raise LocationUnavailable("Location permission denied") from e
    except LocationUnavailable:
        raise
    except Exception as e:
        logger.warning("Location provider failed: %s", e)
        raise LocationUnavailable("Could not determine location") from e
    finally:
        # Do not wait for an abandoned provider call.
        pool.shutdown(wait=False)

    if not isinstance(position, GeoPoint):
        raise LocationUnavailable("Location provider returned no position")
    return position
