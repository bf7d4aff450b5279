from __future__ import annotations

from datetime import date

from flask import Flask, flash, redirect, render_template, request, url_for

from ..auth.decorators import admin_required, login_required
from ..common.datetime_utils import parse_month
from ..common.http import send_export
from ..container import Container
from ..core.exceptions import ApiError, ValidationError
from ..exporters.csv_exporter import attendance_report_csv
from ..exporters.excel_exporter import attendance_report_xlsx


def _month_arg(today: date) -> str:
    value = (request.args.get("month") or "").strip() or today.strftime("%Y-%m")
    try:
        parse_month(value)
    except ValueError:
        raise ValidationError("Invalid month (YYYY-MM)")
    return value


def register(app: Flask, container: Container) -> None:
    @app.route("/dashboard", endpoint="dashboard")
    @login_required
    def dashboard(auth):
        if auth.is_admin_or_hr:
            return redirect(url_for("admin_dashboard"))

        today = date.today()
        service = container.attendance_service
        today_record = service.get_today_record(auth)
        records = service.history(auth, month=today.strftime("%Y-%m"))
        stats = service.monthly_stats(records, today)
        leaves = container.leave_service.my_leaves(auth)

        return render_template(
            "dashboard.html",
            today_record=today_record,
            stats=stats,
            data=service.get_history_ui(records[:5]),
            leaves=leaves[:5],
            active_page="dashboard",
        )

    @app.route("/checkin", methods=["POST"], endpoint="checkin")
    @login_required
    def checkin(auth):
        try:
            container.attendance_service.check_in(auth)
            flash("Checked in successfully!", "success")
        except ValidationError as e:
            flash(str(e), "warning")
        return redirect(url_for("dashboard"))

    @app.route("/checkout", methods=["POST"], endpoint="checkout")
    @login_required
    def checkout(auth):
        try:
            container.attendance_service.check_out(auth)
            flash("Checked out successfully!", "success")
        except ValidationError as e:
            flash(str(e), "warning")
        return redirect(url_for("dashboard"))

    @app.route("/attendance", endpoint="attendance_history")
    @login_required
    def attendance_history(auth):
        try:
            month = _month_arg(date.today())
        except ValidationError as e:
            flash(str(e), "warning")
            return redirect(url_for("attendance_history"))

        # Admin/HR may look at any employee; everyone else sees their own records.
        employee_id = request.args.get("employee_id") if auth.is_admin_or_hr else None
        records = container.attendance_service.history(auth, employee_id=employee_id or None, month=month)
        return render_template(
            "attendance/history.html",
            month=month,
            employee_id=employee_id or "",
            data=container.attendance_service.get_history_ui(records),
            active_page="attendance_history",
        )

    @app.route("/admin/attendance", endpoint="admin_attendance")
    @admin_required
    def admin_attendance(auth):
        try:
            month = _month_arg(date.today())
        except ValidationError as e:
            flash(str(e), "warning")
            return redirect(url_for("admin_attendance"))

        records = container.attendance_service.history(auth, month=month)
        return render_template(
            "admin/attendance.html",
            month=month,
            records=records,
            active_page="admin_attendance",
        )

    def _export(auth, exporter):
        try:
            month = _month_arg(date.today())
            records = container.attendance_service.history(auth, month=month)
            export = exporter(records, month=month)
        except (ValidationError, ApiError) as e:
            if isinstance(e, ApiError) and (e.is_unauthorized or e.is_forbidden):
                raise
            flash(f"Export failed: {e}", "danger")
            return redirect(url_for("admin_attendance", month=request.args.get("month")))
        flash("Attendance report exported successfully!", "success")
        return send_export(export)

    @app.route("/admin/attendance/report.csv", endpoint="admin_attendance_csv")
    @admin_required
    def admin_attendance_csv(auth):
        return _export(auth, attendance_report_csv)

    @app.route("/admin/attendance/report.xlsx", endpoint="admin_attendance_xlsx")
    @admin_required
    def admin_attendance_xlsx(auth):
        return _export(auth, attendance_report_xlsx)
