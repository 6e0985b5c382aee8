from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import actor_from_headers, json_errors
from ..container import Container
from .location import StaticLocation
from .model import AttendanceEvent


def event_to_dict(e: AttendanceEvent) -> dict:
    return {
        "event_id": e.event_id,
        "tenant_id": e.tenant_id,
        "actor_id": e.actor_id,
        "actor_name": e.actor_name,
        "server_timestamp": e.server_timestamp.isoformat() if e.has_valid_timestamp else None,
        "event_type": e.event_type.value,
        "status": e.timeliness_status.value if e.timeliness_status else None,
        "minutes_late": e.minutes_late,
        "distance_meters": round(e.distance_from_site_meters, 1),
    }


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    def _location() -> StaticLocation:
        data = request.get_json(silent=True) or {}
        return StaticLocation(data.get("latitude"), data.get("longitude"))

    @app.route("/t/<tenant_id>/checkin", methods=["POST"], endpoint="terminal_checkin")
    @json_errors
    def terminal_checkin(tenant_id: str):
        actor_id, actor_name = actor_from_headers()
        event = service.check_in(tenant_id, actor_id, actor_name, _location())
        return jsonify({"success": True, "event": event_to_dict(event)}), 201

    @app.route("/t/<tenant_id>/checkout", methods=["POST"], endpoint="terminal_checkout")
    @json_errors
    def terminal_checkout(tenant_id: str):
        actor_id, actor_name = actor_from_headers()
        event = service.check_out(tenant_id, actor_id, actor_name, _location())
        return jsonify({"success": True, "event": event_to_dict(event)}), 201

    @app.route("/t/<tenant_id>/punch", methods=["POST"], endpoint="terminal_punch")
    @json_errors
    def terminal_punch(tenant_id: str):
        """Scan endpoint: auto-detect check-in vs check-out from today's last event."""
        actor_id, actor_name = actor_from_headers()
        event = service.punch(tenant_id, actor_id, actor_name, _location())
        return jsonify({"success": True, "event": event_to_dict(event)}), 201
