from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional, Union

from ..common.coerce import coerce_decimal, dig, optional_str
from ..common.datetime_utils import parse_api_date
from ..core.enums import Role

EARNING_FIELDS = ("basic", "hra", "conveyance", "medical", "special_allowance")
DEDUCTION_FIELDS = ("pf", "professional_tax", "tds")


@dataclass(frozen=True)
class SalaryStructure:
    basic: Decimal = Decimal("0")
    hra: Decimal = Decimal("0")
    conveyance: Decimal = Decimal("0")
    medical: Decimal = Decimal("0")
    special_allowance: Decimal = Decimal("0")
    pf: Decimal = Decimal("0")
    professional_tax: Decimal = Decimal("0")
    tds: Decimal = Decimal("0")

    @property
    def gross(self) -> Decimal:
        return self.basic + self.hra + self.conveyance + self.medical + self.special_allowance

    @property
    def total_deductions(self) -> Decimal:
        return self.pf + self.professional_tax + self.tds

    @property
    def net(self) -> Decimal:
        return self.gross - self.total_deductions

    @classmethod
    def from_api(cls, data: Any) -> Optional["SalaryStructure"]:
        """Build from the ``salary_structure`` sub-document; ``None`` when absent."""
        if not isinstance(data, dict):
            return None
        return cls(**{name: coerce_decimal(data.get(name)) for name in EARNING_FIELDS + DEDUCTION_FIELDS})

    def to_api(self) -> dict:
        payload = {name: float(getattr(self, name)) for name in EARNING_FIELDS + DEDUCTION_FIELDS}
        payload["gross_salary"] = float(self.gross)
        payload["net_salary"] = float(self.net)
        return payload


@dataclass(frozen=True)
class EmployeeBrief:
    """Populated employee reference embedded in attendance/leave documents."""

    id: Optional[str]
    employee_id: Optional[str]
    full_name: Optional[str]
    email: Optional[str]
    department: Optional[str] = None

    @classmethod
    def from_api(cls, data: Any) -> Optional["EmployeeBrief"]:
        if isinstance(data, str):
            return cls(id=data, employee_id=None, full_name=None, email=None)
        if not isinstance(data, dict):
            return None
        return cls(
            id=optional_str(data.get("_id")),
            employee_id=optional_str(data.get("employee_id")),
            full_name=optional_str(dig(data, "profile", "full_name")),
            email=optional_str(data.get("email")),
            department=optional_str(dig(data, "profile", "department")),
        )


@dataclass(frozen=True)
class EmployeeProfile:
    full_name: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    gender: Optional[str] = None
    marital_status: Optional[str] = None
    job_title: Optional[str] = None
    designation: Optional[str] = None
    department: Optional[str] = None
    date_of_birth: Optional[Any] = None
    date_of_joining: Optional[Any] = None
    profile_picture_url: Optional[str] = None
    bank_account_number: Optional[str] = None
    pan_number: Optional[str] = None
    aadhar_number: Optional[str] = None

    @classmethod
    def from_api(cls, data: Any) -> "EmployeeProfile":
        data = data if isinstance(data, dict) else {}
        return cls(
            full_name=str(data.get("full_name") or ""),
            first_name=optional_str(data.get("first_name")),
            last_name=optional_str(data.get("last_name")),
            phone=optional_str(data.get("phone")),
            address=optional_str(data.get("address")),
            gender=optional_str(data.get("gender")),
            marital_status=optional_str(data.get("marital_status")),
            job_title=optional_str(data.get("job_title")),
            designation=optional_str(data.get("designation")),
            department=optional_str(data.get("department")),
            date_of_birth=parse_api_date(data.get("date_of_birth")),
            date_of_joining=parse_api_date(data.get("date_of_joining")),
            profile_picture_url=optional_str(data.get("profile_picture_url")),
            bank_account_number=optional_str(data.get("bank_account_number")),
            pan_number=optional_str(data.get("pan_number")),
            aadhar_number=optional_str(data.get("aadhar_number")),
        )


@dataclass(frozen=True)
class Employee:
    id: str
    employee_id: str
    email: str
    role: Role
    profile: EmployeeProfile
    salary_structure: Optional[SalaryStructure] = None
    team_name: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.profile.full_name or self.employee_id or "Unknown"

    @classmethod
    def from_api(cls, data: dict) -> "Employee":
        try:
            role = Role(data.get("role") or Role.EMPLOYEE.value)
        except ValueError:
            role = Role.EMPLOYEE
        team = data.get("team")
        return cls(
            id=str(data.get("_id") or ""),
            employee_id=str(data.get("employee_id") or ""),
            email=str(data.get("email") or ""),
            role=role,
            profile=EmployeeProfile.from_api(data.get("profile")),
            salary_structure=SalaryStructure.from_api(data.get("salary_structure")),
            team_name=optional_str(team.get("team_name")) if isinstance(team, dict) else None,
        )


@dataclass(frozen=True)
class ById:
    id: str


@dataclass(frozen=True)
class ByCode:
    code: str


EmployeeRef = Union[ById, ByCode]
