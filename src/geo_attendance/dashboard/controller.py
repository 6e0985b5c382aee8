from __future__ import annotations

from dataclasses import asdict

from flask import Flask, jsonify, request

from ..common.http import json_errors
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    dashboard = container.dashboard_service
    alert_state = container.alert_state

    def _days(default: int = 7) -> int:
        try:
            days = int(request.args.get("days", default))
        except ValueError:
            raise ValidationError("days must be an integer")
        if not 1 <= days <= 366:
            raise ValidationError("days must be between 1 and 366")
        return days

    @app.route("/api/tenants/<tenant_id>/stats/today", endpoint="stats_today")
    @json_errors
    def stats_today(tenant_id: str):
        return jsonify({"success": True, "stats": asdict(dashboard.daily_stats(tenant_id))})

    @app.route("/api/tenants/<tenant_id>/present", endpoint="present_actors")
    @json_errors
    def present_actors(tenant_id: str):
        return jsonify({"success": True, "present": [asdict(p) for p in dashboard.present_actors(tenant_id)]})

    @app.route("/api/tenants/<tenant_id>/reliability", endpoint="reliability")
    @json_errors
    def reliability(tenant_id: str):
        rows = dashboard.reliability(tenant_id, days=_days())
        return jsonify({"success": True, "rows": [asdict(r) for r in rows]})

    @app.route("/api/tenants/<tenant_id>/breakdown", endpoint="daily_breakdown")
    @json_errors
    def daily_breakdown(tenant_id: str):
        rows = dashboard.daily_breakdown(tenant_id, days=_days())
        return jsonify({
            "success": True,
            "days": [{"day": r.day.isoformat(), "on_time": r.on_time, "late": r.late} for r in rows],
        })

    @app.route("/api/tenants/<tenant_id>/alerts", endpoint="active_alerts")
    @json_errors
    def active_alerts(tenant_id: str):
        alerts = dashboard.active_alerts(tenant_id)
        return jsonify({
            "success": True,
            "alerts": [
                {
                    "actor_id": a.actor_id,
                    "actor_name": a.actor_name,
                    "type": a.pattern_type.value,
                    "severity": a.severity.value,
                    "message": a.message,
                    "weekday": a.weekday,
                }
                for a in alerts
            ],
        })

    @app.route("/api/tenants/<tenant_id>/alerts/dismiss", methods=["POST"], endpoint="dismiss_alert")
    @json_errors
    def dismiss_alert(tenant_id: str):
        data = request.get_json(silent=True) or {}
        alert_state.dismiss(tenant_id, data.get("actor_name", ""), data.get("type", ""))
        return jsonify({"success": True})

    @app.route("/api/tenants/<tenant_id>/alerts/reset", methods=["POST"], endpoint="reset_alerts")
    @json_errors
    def reset_alerts(tenant_id: str):
        data = request.get_json(silent=True) or {}
        if data.get("confirm") is not True:
            raise ValidationError("Resetting dismissed alerts cannot be undone; send confirm=true")
        removed = alert_state.reset_all(tenant_id)
        return jsonify({"success": True, "removed": removed})
