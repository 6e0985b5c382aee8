from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import json_errors
from ..container import Container
from .model import TenantConfiguration


def settings_to_dict(config: TenantConfiguration) -> dict:
    center = config.site_center
    return {
        "tenant_id": config.tenant_id,
        "shift_start": config.shift_start.strftime("%H:%M"),
        "grace_period_minutes": config.grace_period_minutes,
        "site_center": {"latitude": center.latitude, "longitude": center.longitude} if center else None,
        "geofence_radius_meters": config.geofence_radius_meters,
        "timezone": config.timezone,
    }


def register(app: Flask, container: Container) -> None:
    settings = container.settings_service

    @app.route("/api/tenants/<tenant_id>/settings", methods=["GET"], endpoint="get_settings")
    @json_errors
    def get_settings(tenant_id: str):
        return jsonify({"success": True, "settings": settings_to_dict(settings.get_configuration(tenant_id))})

    @app.route("/api/tenants/<tenant_id>/settings", methods=["PUT", "PATCH"], endpoint="update_settings")
    @json_errors
    def update_settings(tenant_id: str):
        data = request.get_json(silent=True) or {}
        config = settings.update(tenant_id, data)
        return jsonify({"success": True, "settings": settings_to_dict(config)})
