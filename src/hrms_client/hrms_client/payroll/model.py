from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional

from ..common.coerce import coerce_decimal, coerce_int, coerce_str, dig, optional_str
from ..common.datetime_utils import month_name
from ..employees.model import SalaryStructure


@dataclass(frozen=True)
class Period:
    month: int
    year: int
    month_name: str

    @property
    def yyyy_mm(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"

    @classmethod
    def from_api(cls, data: Any, *, month: int = 0, year: int = 0) -> "Period":
        m = coerce_int(dig(data, "month"), month)
        y = coerce_int(dig(data, "year"), year)
        name = coerce_str(dig(data, "monthName"), month_name(m) if 1 <= m <= 12 else "-")
        return cls(month=m, year=y, month_name=name)


@dataclass(frozen=True)
class SalarySlip:
    """Authoritative, server-computed salary slip.

    Kept as the raw payload plus its period; exporters read fields through the
    coerce helpers so missing values never abort rendering.
    """

    raw: dict
    period: Period

    @classmethod
    def from_api(cls, data: Any, *, month: int = 0, year: int = 0) -> "SalarySlip":
        if isinstance(data, dict) and isinstance(data.get("salary_slip"), dict):
            data = data["salary_slip"]
        data = data if isinstance(data, dict) else {}
        return cls(raw=data, period=Period.from_api(data.get("period"), month=month, year=year))

    def employee(self, field: str) -> str:
        return coerce_str(dig(self.raw, "employee", field))

    def attendance(self, field: str) -> Any:
        value = dig(self.raw, "attendance", field)
        return 0 if value is None else value

    def earning(self, field: str) -> Decimal:
        return coerce_decimal(dig(self.raw, "earnings", field))

    def deduction(self, field: str) -> Decimal:
        return coerce_decimal(dig(self.raw, "deductions", field))

    @property
    def net_salary(self) -> Decimal:
        return coerce_decimal(self.raw.get("net_salary"))


@dataclass(frozen=True)
class PayrollEntry:
    """One employee row of ``GET /payroll``."""

    employee_id: str
    name: str
    department: Optional[str]
    designation: Optional[str]
    team: str
    gross_salary: Decimal
    net_salary: Decimal
    salary_structure: Optional[SalaryStructure] = None

    @classmethod
    def from_api(cls, data: dict) -> "PayrollEntry":
        return cls(
            employee_id=str(data.get("employee_id") or ""),
            name=str(data.get("name") or ""),
            department=optional_str(data.get("department")),
            designation=optional_str(data.get("designation")),
            team=coerce_str(data.get("team"), "Unassigned"),
            gross_salary=coerce_decimal(data.get("gross_salary")),
            net_salary=coerce_decimal(data.get("net_salary")),
            salary_structure=SalaryStructure.from_api(data.get("salary_structure")),
        )


@dataclass(frozen=True)
class PayrollReportRow:
    employee_id: str
    name: str
    department: Optional[str]
    team: Optional[str]
    gross_salary: Decimal
    working_days: Decimal
    earned_salary: Decimal
    deductions: Decimal
    net_salary: Decimal

    @classmethod
    def from_api(cls, data: dict) -> "PayrollReportRow":
        return cls(
            employee_id=str(data.get("employee_id") or ""),
            name=str(data.get("name") or ""),
            department=optional_str(data.get("department")),
            team=optional_str(data.get("team")),
            gross_salary=coerce_decimal(data.get("gross_salary")),
            working_days=coerce_decimal(data.get("working_days")),
            earned_salary=coerce_decimal(data.get("earned_salary")),
            deductions=coerce_decimal(data.get("deductions")),
            net_salary=coerce_decimal(data.get("net_salary")),
        )


@dataclass(frozen=True)
class PayrollReport:
    period: Period
    total_employees: int
    total_gross: Decimal
    total_earned: Decimal
    total_deductions: Decimal
    total_net: Decimal
    employees: tuple[PayrollReportRow, ...]

    @classmethod
    def from_api(cls, data: Any, *, month: int = 0, year: int = 0) -> "PayrollReport":
        data = data if isinstance(data, dict) else {}
        summary = data.get("summary") or {}
        rows = tuple(PayrollReportRow.from_api(r) for r in (data.get("employees") or []) if isinstance(r, dict))
        return cls(
            period=Period.from_api(data.get("period"), month=month, year=year),
            total_employees=coerce_int(summary.get("total_employees"), len(rows)),
            total_gross=coerce_decimal(summary.get("total_gross")),
            total_earned=coerce_decimal(summary.get("total_earned")),
            total_deductions=coerce_decimal(summary.get("total_deductions")),
            total_net=coerce_decimal(summary.get("total_net")),
            employees=rows,
        )
