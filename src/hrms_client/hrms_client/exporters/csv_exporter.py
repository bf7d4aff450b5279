"""CSV renderings of reports.

The performance report is a key/value document rather than a table: scalar
rows first, then one block per group (``Attendance,`` header followed by
``key,value`` rows), blocks separated by a single blank line.
"""

from __future__ import annotations

import csv
import io
from typing import Iterable, Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..common.coerce import coerce_str, format_money
from ..core.constants import PLACEHOLDER
from ..payroll.model import PayrollReport
from ..reports.model import PerformanceReport
from .base import ExportFile

CSV_MIMETYPE = "text/csv"

Block = Sequence[tuple[str, object]]


def _encode(text: str) -> bytes:
    return text.encode("utf-8-sig")


def write_grouped(scalars: Block, groups: Sequence[tuple[str, Block]]) -> str:
    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n")
    for key, value in scalars:
        writer.writerow([key, value])
    for index, (title, rows) in enumerate(groups):
        if index > 0 or scalars:
            writer.writerow([])
        writer.writerow([title, ""])
        for key, value in rows:
            writer.writerow([key, value])
    return out.getvalue()


def performance_report_csv(
    report: PerformanceReport,
    *,
    employee_name: Optional[str] = None,
    employee_code: Optional[str] = None,
) -> ExportFile:
    emp = report.employee
    name = employee_name or (emp.display_name if emp else None) or "Unknown"
    code = employee_code or (emp.employee_id if emp else None) or "N/A"
    att = report.summary.attendance
    lv = report.summary.leaves

    scalars = [
        ("Employee", name),
        ("EmployeeID", code),
        ("Period", report.date_range.label),
    ]
    groups: list[tuple[str, Block]] = [
        (
            "Attendance",
            [
                ("Present Days", att.present),
                ("Absent Days", att.absent),
                ("Half Days", att.half_day),
                ("Total Working Days", att.total_days),
                ("Total Hours", att.total_hours),
                ("Attendance Rate", f"{att.attendance_rate}%"),
            ],
        ),
        (
            "Leaves",
            [
                ("Approved", lv.approved),
                ("Pending", lv.pending),
                ("Rejected", lv.rejected),
                ("Total", lv.total),
            ],
        ),
    ]
    salary = report.summary.salary
    if salary is not None:
        groups.append(
            (
                "Salary",
                [
                    ("Gross Salary", format_money(salary.gross)),
                    ("Earned Salary", format_money(salary.earned)),
                    ("Deductions", format_money(salary.deductions)),
                    ("Net Salary", format_money(salary.net)),
                ],
            )
        )

    filename = (
        f"performance-report-{code}-{report.date_range.start.isoformat()}-to-{report.date_range.end.isoformat()}.csv"
    )
    return ExportFile(filename=filename, mimetype=CSV_MIMETYPE, content=_encode(write_grouped(scalars, groups)))


def _plain(value) -> str:
    """Render a Decimal without exponent or trailing zeros: 20 -> "20", 20.50 -> "20.5"."""
    if value == value.to_integral_value():
        return str(int(value))
    return format(value.normalize(), "f")


PAYROLL_COLUMNS = [
    "Employee ID",
    "Name",
    "Department",
    "Team",
    "Gross Salary",
    "Working Days",
    "Earned Salary",
    "Deductions",
    "Net Salary",
]


def payroll_report_csv(report: PayrollReport) -> ExportFile:
    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(PAYROLL_COLUMNS)
    for r in report.employees:
        writer.writerow(
            [
                r.employee_id,
                r.name,
                r.department or "",
                r.team or "",
                f"{r.gross_salary:.2f}",
                _plain(r.working_days),
                f"{r.earned_salary:.2f}",
                f"{r.deductions:.2f}",
                f"{r.net_salary:.2f}",
            ]
        )
    filename = f"payroll-report-{report.period.month_name}-{report.period.year}.csv"
    return ExportFile(filename=filename, mimetype=CSV_MIMETYPE, content=_encode(out.getvalue()))


ATTENDANCE_COLUMNS = ["Date", "Employee ID", "Employee Name", "Check In", "Check Out", "Status", "Hours"]


def attendance_rows(records: Iterable[AttendanceRecord]) -> list[dict]:
    """Flatten attendance records into report rows; shared by CSV and Excel export."""
    rows = []
    for r in records:
        emp = r.employee
        rows.append(
            {
                "Date": r.date.isoformat() if r.date else PLACEHOLDER,
                "Employee ID": coerce_str(emp.employee_id if emp else None, ""),
                "Employee Name": coerce_str(emp.full_name if emp else None, ""),
                "Check In": r.check_in.strftime("%H:%M:%S") if r.check_in else "",
                "Check Out": r.check_out.strftime("%H:%M:%S") if r.check_out else "",
                "Status": getattr(r.status, "value", r.status) or "",
                "Hours": "" if r.total_hours is None else str(r.total_hours),
            }
        )
    return rows


def attendance_report_csv(records: Sequence[AttendanceRecord], *, month: str) -> ExportFile:
    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=ATTENDANCE_COLUMNS, lineterminator="\n")
    writer.writeheader()
    for row in attendance_rows(records):
        writer.writerow(row)
    return ExportFile(filename=f"attendance-report-{month}.csv", mimetype=CSV_MIMETYPE, content=_encode(out.getvalue()))
