from __future__ import annotations

from typing import Optional, Sequence

from ..auth.model import AuthSession
from ..common.validators import require_non_empty
from ..core.exceptions import AuthorizationError, ValidationError
from .model import PayrollEntry, PayrollReport, SalarySlip
from .repository import PayrollRepository


def _check_period(month: int, year: int) -> tuple[int, int]:
    try:
        month, year = int(month), int(year)
    except (TypeError, ValueError):
        raise ValidationError("Invalid month/year")
    if not 1 <= month <= 12 or year < 1970:
        raise ValidationError("Invalid month/year")
    return month, year


class PayrollService:
    def __init__(self, payroll: PayrollRepository):
        self._payroll = payroll

    def list_payroll(self, auth: AuthSession, *, search: str = "") -> Sequence[PayrollEntry]:
        if not auth.is_admin_or_hr:
            raise AuthorizationError("You are not allowed to view payroll")
        rows = self._payroll.list_payroll(auth)
        term = (search or "").strip().lower()
        if not term:
            return rows
        return [
            r
            for r in rows
            if term in r.name.lower() or term in r.employee_id.lower() or term in (r.department or "").lower()
        ]

    def salary_slip(self, auth: AuthSession, *, employee_code: str, month: int, year: int) -> SalarySlip:
        employee_code = require_non_empty(employee_code, "Employee ID")
        if not auth.is_admin_or_hr and employee_code != auth.employee_id:
            raise AuthorizationError("Not authorized")
        month, year = _check_period(month, year)
        return self._payroll.get_salary_slip(auth, employee_code=employee_code, month=month, year=year)

    def my_salary_slip(self, auth: AuthSession, *, month: int, year: int) -> SalarySlip:
        return self.salary_slip(auth, employee_code=auth.employee_id, month=month, year=year)

    def report(self, auth: AuthSession, *, month: int, year: int, department: Optional[str] = None) -> PayrollReport:
        if not auth.is_admin_or_hr:
            raise AuthorizationError("You are not allowed to view payroll reports")
        month, year = _check_period(month, year)
        return self._payroll.get_report(auth, month=month, year=year, department=(department or "").strip() or None)
