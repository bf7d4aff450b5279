from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from src.hrms_client.hrms_client.attendance.model import AttendanceRecord
from src.hrms_client.hrms_client.core.enums import AttendanceStatus, LeaveType, RequestStatus, Role
from src.hrms_client.hrms_client.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.hrms_client.hrms_client.employees.model import ByCode, ById, Employee, EmployeeProfile, SalaryStructure
from src.hrms_client.hrms_client.employees.service import EmployeeService
from src.hrms_client.hrms_client.leaves.model import LeaveRecord
from src.hrms_client.hrms_client.reports.model import DateRange
from src.hrms_client.hrms_client.reports.service import PerformanceReportService

EMP = Employee(
    id="65a1b2c3d4e5f60718293a4b",
    employee_id="EMP001",
    email="a@example.com",
    role=Role.EMPLOYEE,
    profile=EmployeeProfile(full_name="Asha Rao"),
    salary_structure=SalaryStructure(basic=Decimal("30000"), pf=Decimal("1800")),
)


class FakeEmployeesRepo:
    def __init__(self, employees):
        self._employees = list(employees)

    def get_by_id(self, auth, employee_id):
        return next((e for e in self._employees if e.id == employee_id), None)

    def list_all(self, auth):
        return list(self._employees)


class FakeAttendanceRepo:
    def __init__(self, rows):
        self._rows = rows
        self.last_args = None

    def list_records(self, auth, *, employee_id=None, start_date=None, end_date=None, month=None):
        self.last_args = {"employee_id": employee_id, "start_date": start_date, "end_date": end_date}
        return self._rows


class FakeLeavesRepo:
    def __init__(self, rows):
        self._rows = rows
        self.last_args = None

    def list_all(self, auth, *, status=None, employee_id=None, start_date=None, end_date=None):
        self.last_args = {"employee_id": employee_id, "start_date": start_date, "end_date": end_date}
        return self._rows


def make_service(attendance=(), leaves=()):
    att_repo = FakeAttendanceRepo(list(attendance))
    leave_repo = FakeLeavesRepo(list(leaves))
    svc = PerformanceReportService(EmployeeService(FakeEmployeesRepo([EMP])), att_repo, leave_repo)
    return svc, att_repo, leave_repo


def test_build_resolves_code_to_canonical_id_before_fetching(admin_auth):
    svc, att_repo, leave_repo = make_service(
        attendance=[AttendanceRecord(date=date(2025, 1, 2), status=AttendanceStatus.PRESENT)],
        leaves=[LeaveRecord(None, date(2025, 1, 3), date(2025, 1, 3), LeaveType.SICK, RequestStatus.APPROVED)],
    )
    rng = DateRange(date(2025, 1, 1), date(2025, 1, 31))

    report = svc.build(admin_auth, ByCode("EMP001"), rng)

    assert att_repo.last_args == {"employee_id": EMP.id, "start_date": rng.start, "end_date": rng.end}
    assert leave_repo.last_args["employee_id"] == EMP.id
    assert report.employee == EMP
    assert report.summary.attendance.present == 1
    assert report.summary.salary.working_days == 2


def test_by_id_falls_back_to_list_scan_for_codes(admin_auth):
    svc, _, _ = make_service()
    report = svc.build(admin_auth, ById("EMP001"), DateRange(date(2025, 1, 1), date(2025, 1, 1)))
    assert report.employee.id == EMP.id


def test_unknown_employee_raises_not_found(admin_auth):
    svc, _, _ = make_service()
    with pytest.raises(NotFoundError):
        svc.build(admin_auth, ByCode("NOPE"), DateRange(date(2025, 1, 1), date(2025, 1, 1)))


def test_employees_cannot_build_reports(employee_auth):
    svc, _, _ = make_service()
    with pytest.raises(AuthorizationError):
        svc.build(employee_auth, ByCode("EMP001"), DateRange(date(2025, 1, 1), date(2025, 1, 1)))


def test_parse_range_defaults_to_month_to_date():
    rng = PerformanceReportService.parse_range(None, "", today=date(2025, 3, 14))
    assert rng == DateRange(date(2025, 3, 1), date(2025, 3, 14))


def test_parse_range_rejects_bad_dates():
    with pytest.raises(ValidationError):
        PerformanceReportService.parse_range("2025-13-01", None)
