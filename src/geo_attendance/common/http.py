from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify, request

from ..core.exceptions import (
    ConfigurationMissing,
    GeofenceViolation,
    LocationUnavailable,
    PersistenceError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def error_response(error: Exception):
    """Map each domain error to its own payload; the corrective action differs per kind."""
    if isinstance(error, GeofenceViolation):
        return jsonify({
            "success": False,
            "error": "geofence_violation",
            "message": str(error),
            "distance_meters": round(error.distance_meters, 1),
            "radius_meters": error.radius_meters,
        }), 403
    if isinstance(error, LocationUnavailable):
        return jsonify({"success": False, "error": "location_unavailable", "message": str(error)}), 400
    if isinstance(error, ConfigurationMissing):
        return jsonify({"success": False, "error": "configuration_missing", "message": str(error)}), 404
    if isinstance(error, PersistenceError):
        return jsonify({"success": False, "error": "persistence_error", "message": "Could not save. Please try again."}), 503
    if isinstance(error, ValidationError):
        return jsonify({"success": False, "error": "validation_error", "message": str(error)}), 400
    raise error


def json_errors(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except (ValidationError, LocationUnavailable, GeofenceViolation, ConfigurationMissing) as e:
            return error_response(e)
        except PersistenceError as e:
            logger.error("Store failure on %s %s: %s", request.method, request.path, e)
            return error_response(e)

    return wrapper


def actor_from_headers() -> tuple[str, str]:
    """Identity is established upstream and forwarded in headers."""
    actor_id = (request.headers.get("X-Actor-Id") or "").strip()
    if not actor_id:
        raise ValidationError("Missing actor identity")
    actor_name = (request.headers.get("X-Actor-Name") or "").strip()
    return actor_id, actor_name
