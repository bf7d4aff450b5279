from __future__ import annotations

import logging
from datetime import date

from flask import Flask, flash, redirect, render_template, request, url_for

from ..auth.decorators import admin_required, login_required
from ..common.http import send_export
from ..container import Container
from ..core.exceptions import ApiError, AuthorizationError, ValidationError
from ..exporters.csv_exporter import payroll_report_csv
from ..exporters.html_exporter import salary_slip_html
from ..exporters.pdf_exporter import salary_slip_pdf

logger = logging.getLogger(__name__)


def _period_args() -> tuple[int, int]:
    today = date.today()
    month = request.args.get("month", default=today.month, type=int)
    year = request.args.get("year", default=today.year, type=int)
    return month, year


def _fetch_failed(e: Exception) -> None:
    # Expired sessions and forbidden answers go to the app-level handlers.
    if isinstance(e, ApiError) and (e.is_unauthorized or e.is_forbidden):
        raise e
    flash(str(e), "danger")


def register(app: Flask, container: Container) -> None:
    @app.route("/admin/payroll", endpoint="admin_payroll")
    @admin_required
    def admin_payroll(auth):
        term = request.args.get("q") or ""
        month, year = _period_args()
        rows = container.payroll_service.list_payroll(auth, search=term)
        return render_template(
            "admin/payroll.html",
            rows=rows,
            q=term,
            month=month,
            year=year,
            active_page="admin_payroll",
        )

    @app.route("/payroll/slip/<employee_code>", endpoint="salary_slip")
    @login_required
    def salary_slip(auth, employee_code: str):
        month, year = _period_args()
        slip = None
        try:
            slip = container.payroll_service.salary_slip(auth, employee_code=employee_code, month=month, year=year)
        except (ValidationError, AuthorizationError, ApiError) as e:
            _fetch_failed(e)
        return render_template(
            "payroll/slip.html",
            slip=slip,
            employee_code=employee_code,
            month=month,
            year=year,
            active_page="admin_payroll" if auth.is_admin_or_hr else "my_salary",
        )

    def _download(auth, employee_code: str, render):
        month, year = _period_args()
        try:
            slip = container.payroll_service.salary_slip(auth, employee_code=employee_code, month=month, year=year)
            export = render(slip, employee_code)
        except (ValidationError, AuthorizationError, ApiError) as e:
            _fetch_failed(e)
            return redirect(url_for("salary_slip", employee_code=employee_code, month=month, year=year))
        logger.info("salary slip %s exported for %s %s/%s", export.filename, employee_code, month, year)
        flash("Salary slip downloaded successfully!", "success")
        return send_export(export)

    @app.route("/payroll/slip/<employee_code>/pdf", endpoint="salary_slip_pdf")
    @login_required
    def salary_slip_pdf_download(auth, employee_code: str):
        return _download(auth, employee_code, lambda slip, _code: salary_slip_pdf(slip))

    @app.route("/payroll/slip/<employee_code>/html", endpoint="salary_slip_html")
    @login_required
    def salary_slip_html_download(auth, employee_code: str):
        return _download(auth, employee_code, lambda slip, code: salary_slip_html(slip, employee_code=code))

    @app.route("/salary", endpoint="my_salary")
    @login_required
    def my_salary(auth):
        month, year = _period_args()
        return redirect(url_for("salary_slip", employee_code=auth.employee_id, month=month, year=year))

    @app.route("/admin/payroll/report", endpoint="payroll_report")
    @admin_required
    def payroll_report(auth):
        month, year = _period_args()
        department = request.args.get("department") or ""
        report = None
        try:
            report = container.payroll_service.report(auth, month=month, year=year, department=department)
        except (ValidationError, ApiError) as e:
            _fetch_failed(e)
        return render_template(
            "admin/payroll_report.html",
            report=report,
            month=month,
            year=year,
            department=department,
            active_page="payroll_report",
        )

    @app.route("/admin/payroll/report.csv", endpoint="payroll_report_csv")
    @admin_required
    def payroll_report_csv_download(auth):
        month, year = _period_args()
        department = request.args.get("department") or ""
        try:
            report = container.payroll_service.report(auth, month=month, year=year, department=department)
            export = payroll_report_csv(report)
        except (ValidationError, ApiError) as e:
            _fetch_failed(e)
            return redirect(url_for("payroll_report", month=month, year=year, department=department))
        flash("Payroll report exported successfully!", "success")
        return send_export(export)
