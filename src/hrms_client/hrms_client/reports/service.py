from __future__ import annotations

from datetime import date
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..auth.model import AuthSession
from ..common.datetime_utils import parse_iso_date
from ..core.exceptions import AuthorizationError, ValidationError
from ..employees.model import EmployeeRef
from ..employees.service import EmployeeService
from ..leaves.repository import LeaveRepository
from .aggregator import ReportAggregator
from .model import DateRange, PerformanceReport


class PerformanceReportService:
    """Use case: per-employee performance report for a date range.

    The employee reference is resolved once, up front, to the canonical id
    that the attendance and leave endpoints expect.
    """

    def __init__(
        self,
        employees: EmployeeService,
        attendance: AttendanceRepository,
        leaves: LeaveRepository,
        *,
        aggregator: Optional[ReportAggregator] = None,
    ):
        self._employees = employees
        self._attendance = attendance
        self._leaves = leaves
        self._aggregator = aggregator or ReportAggregator()

    @staticmethod
    def parse_range(start: Optional[str], end: Optional[str], *, today: Optional[date] = None) -> DateRange:
        """Default range is the first of the current month through today."""
        today = today or date.today()
        try:
            start_d = parse_iso_date(start) if start else today.replace(day=1)
            end_d = parse_iso_date(end) if end else today
        except ValueError:
            raise ValidationError("Invalid date (YYYY-MM-DD)")
        return DateRange(start=start_d, end=end_d)

    def build(self, auth: AuthSession, ref: EmployeeRef, date_range: DateRange) -> PerformanceReport:
        if not auth.is_admin_or_hr:
            raise AuthorizationError("You are not allowed to view performance reports")

        employee = self._employees.resolve(auth, ref)
        attendance = self._attendance.list_records(
            auth, employee_id=employee.id, start_date=date_range.start, end_date=date_range.end
        )
        leaves = self._leaves.list_all(
            auth, employee_id=employee.id, start_date=date_range.start, end_date=date_range.end
        )
        return self._aggregator.aggregate(
            attendance,
            leaves,
            date_range,
            employee.salary_structure,
            employee=employee,
        )
