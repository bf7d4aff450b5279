from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from ..auth.decorators import admin_required
from ..common.http import send_export
from ..container import Container
from ..core.exceptions import ApiError, AuthorizationError, NotFoundError, ValidationError
from ..exporters.csv_exporter import performance_report_csv

logger = logging.getLogger(__name__)

REPORT_ERRORS = (ValidationError, AuthorizationError, NotFoundError, ApiError)


def _raise_session_errors(e: Exception) -> None:
    # Expired sessions and forbidden answers go to the app-level handlers.
    if isinstance(e, ApiError) and (e.is_unauthorized or e.is_forbidden):
        raise e


def register(app: Flask, container: Container) -> None:
    service = container.performance_report_service

    def _build(auth, employee_id: str):
        date_range = service.parse_range(request.args.get("start"), request.args.get("end"))
        ref = container.employee_service.parse_ref(employee_id)
        return service.build(auth, ref, date_range)

    @app.route("/admin/employees/<employee_id>/performance", endpoint="performance_report")
    @admin_required
    def performance_report(auth, employee_id: str):
        # One view per login, employee and requested range; a failed reload
        # keeps showing the last report that loaded for the same key.
        view = container.report_views.get(
            (auth.token, employee_id, request.args.get("start") or "", request.args.get("end") or "")
        )
        ticket = view.begin_load()
        try:
            view.complete(ticket, _build(auth, employee_id))
        except REPORT_ERRORS as e:
            _raise_session_errors(e)
            view.fail(ticket, e)
            flash(view.pop_notice() or "Failed to load performance data", "danger")

        report = view.data
        return render_template(
            "reports/performance.html",
            report=report,
            employee_id=employee_id,
            start=request.args.get("start") or (report.date_range.start.isoformat() if report else ""),
            end=request.args.get("end") or (report.date_range.end.isoformat() if report else ""),
            active_page="admin_employees",
        )

    @app.route("/admin/employees/<employee_id>/performance/csv", endpoint="performance_report_csv")
    @admin_required
    def performance_report_csv_download(auth, employee_id: str):
        try:
            report = _build(auth, employee_id)
            export = performance_report_csv(report)
        except REPORT_ERRORS as e:
            _raise_session_errors(e)
            logger.warning("performance export failed: %s", e)
            flash(str(e) or "Failed to load performance data", "danger")
            return redirect(
                url_for(
                    "performance_report",
                    employee_id=employee_id,
                    start=request.args.get("start"),
                    end=request.args.get("end"),
                )
            )
        flash("Report exported successfully!", "success")
        return send_export(export)
