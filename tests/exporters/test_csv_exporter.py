from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from src.hrms_client.hrms_client.attendance.model import AttendanceRecord
from src.hrms_client.hrms_client.core.enums import AttendanceStatus, Role
from src.hrms_client.hrms_client.employees.model import EmployeeBrief, Employee, EmployeeProfile, SalaryStructure
from src.hrms_client.hrms_client.exporters.csv_exporter import (
    attendance_report_csv,
    payroll_report_csv,
    performance_report_csv,
    write_grouped,
)
from src.hrms_client.hrms_client.payroll.model import PayrollReport
from src.hrms_client.hrms_client.reports.aggregator import ReportAggregator
from src.hrms_client.hrms_client.reports.model import DateRange

EMP = Employee(
    id="65a1b2c3d4e5f60718293a4b",
    employee_id="EMP001",
    email="a@example.com",
    role=Role.EMPLOYEE,
    profile=EmployeeProfile(full_name="Asha Rao"),
)
RANGE = DateRange(date(2025, 1, 1), date(2025, 1, 4))
RECORDS = [
    AttendanceRecord(date=date(2025, 1, 1), status=AttendanceStatus.PRESENT, total_hours=Decimal("8")),
    AttendanceRecord(date=date(2025, 1, 2), status=AttendanceStatus.PRESENT, total_hours=Decimal("8")),
    AttendanceRecord(date=date(2025, 1, 3), status=AttendanceStatus.ABSENT),
    AttendanceRecord(date=date(2025, 1, 4), status=AttendanceStatus.HALF_DAY, total_hours=Decimal("4")),
]


def text_of(export) -> str:
    return export.content.decode("utf-8-sig")


def test_group_is_header_line_then_key_value_lines():
    text = write_grouped([], [("Attendance", [("Present Days", 2), ("Absent Days", 1)])])
    assert text.splitlines() == ["Attendance,", "Present Days,2", "Absent Days,1"]


def test_groups_are_separated_by_one_blank_line_and_none_trails():
    text = write_grouped([("Employee", "A")], [("G1", [("a", 1)]), ("G2", [("b", 2)])])

    assert text == "Employee,A\n\nG1,\na,1\n\nG2,\nb,2\n"
    assert not text.endswith("\n\n")


def test_performance_csv_without_salary_omits_salary_block():
    report = ReportAggregator().aggregate(RECORDS, [], RANGE, employee=EMP)

    export = performance_report_csv(report)
    lines = text_of(export).splitlines()

    assert export.filename == "performance-report-EMP001-2025-01-01-to-2025-01-04.csv"
    assert lines[:3] == ["Employee,Asha Rao", "EmployeeID,EMP001", "Period,2025-01-01 to 2025-01-04"]
    assert "Attendance," in lines
    assert "Attendance Rate,62.5%" in lines
    assert "Total Hours,20.00" in lines
    assert "Leaves," in lines
    assert "Salary," not in lines
    assert lines[-1] == "Total,0"


def test_performance_csv_with_salary_renders_money_values():
    salary = SalaryStructure(basic=Decimal("30000"), pf=Decimal("1800"), professional_tax=Decimal("200"), tds=Decimal("500"))
    report = ReportAggregator().aggregate(RECORDS, [], RANGE, salary, employee=EMP)

    lines = text_of(performance_report_csv(report)).splitlines()

    assert "Salary," in lines
    assert 'Gross Salary,"₹30,000.00"' in lines
    assert 'Deductions,"₹2,500.00"' in lines
    assert 'Earned Salary,"₹2,500.00"' in lines
    assert lines[-1] == "Net Salary,₹0.00"


def test_performance_csv_does_not_mutate_report():
    report = ReportAggregator().aggregate(RECORDS, [], RANGE, employee=EMP)
    before = report.summary

    performance_report_csv(report)

    assert report.summary == before


def test_attendance_report_csv_uses_placeholders_for_missing_values():
    rows = [
        AttendanceRecord(
            date=date(2025, 2, 3),
            status=AttendanceStatus.PRESENT,
            check_in=datetime(2025, 2, 3, 9, 0, 0),
            check_out=datetime(2025, 2, 3, 17, 30, 0),
            total_hours=Decimal("8.50"),
            employee=EmployeeBrief(id="x", employee_id="EMP001", full_name="Asha Rao", email=None),
        ),
        AttendanceRecord(date=date(2025, 2, 4), status="Holiday"),
    ]

    export = attendance_report_csv(rows, month="2025-02")
    lines = text_of(export).splitlines()

    assert export.filename == "attendance-report-2025-02.csv"
    assert lines[0] == "Date,Employee ID,Employee Name,Check In,Check Out,Status,Hours"
    assert lines[1] == "2025-02-03,EMP001,Asha Rao,09:00:00,17:30:00,Present,8.50"
    assert lines[2] == "2025-02-04,,,,,Holiday,"


def test_payroll_report_csv_columns_and_filename():
    report = PayrollReport.from_api(
        {
            "period": {"month": 1, "year": 2025, "monthName": "January"},
            "summary": {"total_employees": 1},
            "employees": [
                {
                    "employee_id": "EMP001",
                    "name": "Asha Rao",
                    "department": "Engineering",
                    "team": None,
                    "gross_salary": 30000,
                    "working_days": 20.5,
                    "earned_salary": 20500,
                    "deductions": 2500,
                    "net_salary": 18000,
                }
            ],
        }
    )

    export = payroll_report_csv(report)
    lines = text_of(export).splitlines()

    assert export.filename == "payroll-report-January-2025.csv"
    assert lines[0].startswith("Employee ID,Name,Department,Team,Gross Salary")
    assert lines[1] == "EMP001,Asha Rao,Engineering,,30000.00,20.5,20500.00,2500.00,18000.00"
