from __future__ import annotations

from datetime import date

from flask import Flask, flash, jsonify, redirect, render_template, request, url_for

from ..auth.decorators import admin_required
from ..common.http import send_export, wants_json
from ..container import Container
from ..core.exceptions import ApiError, ValidationError
from ..exporters.json_exporter import daily_snapshot_json
from .service import AnalyticsService


def _leave_row(leave) -> dict:
    emp = leave.employee
    return {
        "name": (emp.full_name if emp else None) or "Unknown",
        "leave_type": getattr(leave.leave_type, "value", leave.leave_type),
        "start_date": leave.start_date.isoformat() if leave.start_date else None,
        "end_date": leave.end_date.isoformat() if leave.end_date else None,
    }


def live_payload(poller) -> dict:
    snap = poller.snapshot()
    analytics = snap["data"]
    on_leave = AnalyticsService.on_leave_today(analytics, date.today()) if analytics else []
    return {
        **snap,
        "data": analytics.raw if analytics else None,
        "on_leave_today": [_leave_row(l) for l in on_leave],
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/admin/dashboard", endpoint="admin_dashboard")
    @admin_required
    def admin_dashboard(auth):
        poller = container.pollers.get_or_start(auth)
        payload = live_payload(poller)
        if payload["notice"]:
            flash(payload["notice"], "warning")
        return render_template(
            "admin/dashboard.html",
            live=payload,
            refresh_ms=int(container.refresh_interval * 1000),
            active_page="admin_dashboard",
        )

    @app.route("/admin/dashboard/live.json", endpoint="admin_dashboard_live")
    @admin_required
    def admin_dashboard_live(auth):
        poller = container.pollers.get_or_start(auth)
        return jsonify(live_payload(poller))

    def _control(auth, action: str):
        poller = container.pollers.get_or_start(auth)
        getattr(poller, action)()
        if wants_json():
            return jsonify(live_payload(poller))
        return redirect(url_for("admin_dashboard"))

    @app.route("/admin/dashboard/pause", methods=["POST"], endpoint="admin_dashboard_pause")
    @admin_required
    def admin_dashboard_pause(auth):
        return _control(auth, "pause")

    @app.route("/admin/dashboard/resume", methods=["POST"], endpoint="admin_dashboard_resume")
    @admin_required
    def admin_dashboard_resume(auth):
        return _control(auth, "resume")

    @app.route("/admin/dashboard/refresh", methods=["POST"], endpoint="admin_dashboard_refresh")
    @admin_required
    def admin_dashboard_refresh(auth):
        return _control(auth, "refresh_now")

    @app.route("/admin/daily-data", endpoint="daily_data")
    @admin_required
    def daily_data(auth):
        day = request.args.get("date") or date.today().isoformat()
        snapshot = None
        try:
            snapshot = container.analytics_service.daily_data(auth, day=day)
        except ValidationError as e:
            flash(str(e), "warning")
        return render_template("admin/daily_data.html", snapshot=snapshot, day=day, active_page="daily_data")

    @app.route("/admin/daily-data/json", endpoint="daily_data_json")
    @admin_required
    def daily_data_json(auth):
        day = request.args.get("date") or date.today().isoformat()
        try:
            export = daily_snapshot_json(container.analytics_service.daily_data(auth, day=day))
        except (ValidationError, ApiError) as e:
            if isinstance(e, ApiError) and (e.is_unauthorized or e.is_forbidden):
                raise
            flash(f"Export failed: {e}", "danger")
            return redirect(url_for("daily_data", date=day))
        flash("Daily data exported successfully!", "success")
        return send_export(export)
