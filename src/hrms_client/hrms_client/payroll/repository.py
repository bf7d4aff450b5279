from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import PayrollEntry, PayrollReport, SalarySlip


class PayrollRepository(Protocol):
    def list_payroll(self, auth) -> Sequence[PayrollEntry]:
        raise NotImplementedError

    def get_salary_slip(self, auth, *, employee_code: str, month: int, year: int) -> SalarySlip:
        raise NotImplementedError

    def get_report(self, auth, *, month: int, year: int, department: Optional[str] = None) -> PayrollReport:
        raise NotImplementedError
