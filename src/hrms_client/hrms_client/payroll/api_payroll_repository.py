from __future__ import annotations

from typing import Optional, Sequence

from ..api.base import ApiRepository, unwrap_list
from .model import PayrollEntry, PayrollReport, SalarySlip
from .repository import PayrollRepository


class ApiPayrollRepository(ApiRepository, PayrollRepository):
    def list_payroll(self, auth) -> Sequence[PayrollEntry]:
        data = self._client(auth).get("/payroll")
        return [PayrollEntry.from_api(r) for r in unwrap_list(data, "payroll") if isinstance(r, dict)]

    def get_salary_slip(self, auth, *, employee_code: str, month: int, year: int) -> SalarySlip:
        data = self._client(auth).get(f"/payroll/salary-slip/{employee_code}", month=month, year=year)
        return SalarySlip.from_api(data, month=month, year=year)

    def get_report(self, auth, *, month: int, year: int, department: Optional[str] = None) -> PayrollReport:
        data = self._client(auth).get("/payroll/report", month=month, year=year, department=department)
        return PayrollReport.from_api(data, month=month, year=year)
