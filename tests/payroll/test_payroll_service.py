from __future__ import annotations

from decimal import Decimal

import pytest

from src.hrms_client.hrms_client.core.exceptions import AuthorizationError, ValidationError
from src.hrms_client.hrms_client.payroll.model import PayrollEntry, PayrollReport, SalarySlip
from src.hrms_client.hrms_client.payroll.service import PayrollService


class FakePayrollRepo:
    def __init__(self, entries=()):
        self.entries = list(entries)
        self.slip_calls = []
        self.report_calls = []

    def list_payroll(self, auth):
        return list(self.entries)

    def get_salary_slip(self, auth, *, employee_code, month, year):
        self.slip_calls.append((employee_code, month, year))
        return SalarySlip.from_api({}, month=month, year=year)

    def get_report(self, auth, *, month, year, department=None):
        self.report_calls.append((month, year, department))
        return PayrollReport.from_api({}, month=month, year=year)


def test_employee_only_sees_own_slip(employee_auth):
    repo = FakePayrollRepo()
    service = PayrollService(repo)

    with pytest.raises(AuthorizationError):
        service.salary_slip(employee_auth, employee_code="EMP002", month=1, year=2025)

    service.my_salary_slip(employee_auth, month="1", year="2025")
    assert repo.slip_calls == [("EMP001", 1, 2025)]


@pytest.mark.parametrize("month, year", [(0, 2025), (13, 2025), ("x", 2025), (1, 1900)])
def test_bad_period_is_rejected(admin_auth, month, year):
    with pytest.raises(ValidationError, match="month/year"):
        PayrollService(FakePayrollRepo()).salary_slip(admin_auth, employee_code="EMP001", month=month, year=year)


def test_report_strips_department(admin_auth, employee_auth):
    repo = FakePayrollRepo()
    report = PayrollService(repo).report(admin_auth, month=2, year=2025, department="  ")

    assert repo.report_calls == [(2, 2025, None)]
    assert report.period.month_name == "February"
    with pytest.raises(AuthorizationError):
        PayrollService(repo).report(employee_auth, month=2, year=2025)


def test_list_payroll_search(hr_auth):
    entries = [
        PayrollEntry.from_api({"employee_id": "EMP001", "name": "Asha Rao", "department": "Engineering"}),
        PayrollEntry.from_api({"employee_id": "EMP002", "name": "Ravi Kumar", "department": "Sales"}),
    ]
    service = PayrollService(FakePayrollRepo(entries))

    assert [e.employee_id for e in service.list_payroll(hr_auth, search="sales")] == ["EMP002"]
    assert entries[0].team == "Unassigned"


def test_salary_slip_unwraps_envelope():
    slip = SalarySlip.from_api(
        {
            "success": True,
            "salary_slip": {
                "employee": {"name": "Asha Rao", "employee_id": "EMP001"},
                "period": {"month": 1, "year": 2025, "monthName": "January"},
                "earnings": {"basic": "30000.50"},
                "deductions": {"pf": None},
                "net_salary": 28200.5,
            },
        }
    )

    assert slip.employee("name") == "Asha Rao"
    assert slip.period.yyyy_mm == "2025-01"
    assert slip.earning("basic") == Decimal("30000.50")
    assert slip.deduction("pf") == Decimal("0")
    assert slip.attendance("present_days") == 0
    assert slip.net_salary == Decimal("28200.5")


def test_payroll_report_counts_rows_when_summary_missing():
    report = PayrollReport.from_api(
        {"employees": [{"employee_id": "EMP001", "working_days": "21.5"}, None]}, month=3, year=2025
    )

    assert report.total_employees == 1
    assert report.employees[0].working_days == Decimal("21.5")
    assert report.total_net == Decimal("0")
    assert report.period.month_name == "March"
