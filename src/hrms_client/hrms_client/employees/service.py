from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from ..auth.model import AuthSession
from ..common.coerce import coerce_decimal
from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import DEDUCTION_FIELDS, EARNING_FIELDS, ById, ByCode, Employee, EmployeeRef, SalaryStructure
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)

# Fields an Employee may change on their own profile; Admin/HR may change any.
SELF_EDITABLE_FIELDS = ("phone", "address", "profile_picture_url")


@dataclass(frozen=True)
class NewEmployee:
    first_name: str
    last_name: str
    email: str
    department: str
    designation: str
    role: Role = Role.EMPLOYEE
    phone: Optional[str] = None
    gender: Optional[str] = None
    date_of_joining: Optional[str] = None
    team: Optional[str] = None
    salary_structure: Optional[SalaryStructure] = None


class EmployeeService:
    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def list_employees(self, auth: AuthSession) -> Sequence[Employee]:
        return self._employees.list_all(auth)

    def get(self, auth: AuthSession, employee_id: str) -> Employee:
        emp = self._employees.get_by_id(auth, employee_id)
        if not emp:
            raise NotFoundError("Employee not found")
        return emp

    def resolve(self, auth: AuthSession, ref: EmployeeRef) -> Employee:
        """Resolve an ``EmployeeRef`` into the canonical employee record.

        ``ById`` asks ``/users/:id`` first and falls back to scanning the
        employee list, because callers sometimes hold a human-readable code in
        an id slot. ``ByCode`` always scans the list.
        """
        if isinstance(ref, ById):
            emp = self._employees.get_by_id(auth, ref.id)
            if emp:
                return emp
            needle = ref.id
        elif isinstance(ref, ByCode):
            needle = ref.code
        else:
            raise ValidationError("Unsupported employee reference")

        for emp in self._employees.list_all(auth):
            if emp.id == needle or emp.employee_id == needle:
                return emp
        raise NotFoundError("Could not find employee details")

    @staticmethod
    def parse_ref(value: str) -> EmployeeRef:
        """Classify a raw identifier from a URL: 24-hex object ids vs employee codes."""
        value = require_non_empty(value, "Employee")
        if len(value) == 24 and all(c in "0123456789abcdef" for c in value.lower()):
            return ById(value)
        return ByCode(value)

    @staticmethod
    def search(employees: Sequence[Employee], term: str) -> list[Employee]:
        term = (term or "").strip().lower()
        if not term:
            return list(employees)
        return [
            e
            for e in employees
            if term in (e.profile.full_name or "").lower()
            or term in (e.email or "").lower()
            or term in (e.employee_id or "").lower()
        ]

    def create(self, auth: AuthSession, new: NewEmployee) -> Employee:
        if not auth.is_admin_or_hr:
            raise AuthorizationError("You are not allowed to create employees")
        if new.role == Role.HR_OFFICER and auth.role != Role.ADMIN:
            raise AuthorizationError("Only Admin can create HR Officer profiles")
        if new.role == Role.ADMIN:
            raise ValidationError("Admin accounts cannot be created from this screen")

        payload = {
            "first_name": require_non_empty(new.first_name, "First name"),
            "last_name": require_non_empty(new.last_name, "Last name"),
            "email": require_non_empty(new.email, "Email"),
            "department": require_non_empty(new.department, "Department"),
            "designation": require_non_empty(new.designation, "Designation"),
            "role": new.role.value,
            "phone": new.phone or None,
            "gender": new.gender or None,
            "date_of_joining": new.date_of_joining or None,
        }
        if new.role == Role.EMPLOYEE:
            payload["team"] = require_non_empty(new.team or "", "Team")
        elif new.team:
            payload["team"] = new.team
        if new.salary_structure:
            payload["salary_structure"] = new.salary_structure.to_api()

        emp = self._employees.create(auth, payload)
        logger.info("employee created: %s by %s", emp.employee_id, auth.employee_id)
        return emp

    @staticmethod
    def salary_from_form(form) -> SalaryStructure:
        values = {}
        for name in EARNING_FIELDS + DEDUCTION_FIELDS:
            amount = coerce_decimal(form.get(name))
            if amount < 0:
                raise ValidationError(f"{name.replace('_', ' ').title()} cannot be negative")
            values[name] = amount
        return SalaryStructure(**values)

    def update_salary(self, auth: AuthSession, employee_id: str, salary: SalaryStructure) -> Employee:
        if not auth.is_admin_or_hr:
            raise AuthorizationError("You are not allowed to change salary structures")
        return self._employees.update(auth, employee_id, {"salary_structure": salary.to_api()})

    def update_profile(self, auth: AuthSession, employee_id: str, profile: dict) -> Employee:
        if not auth.is_admin_or_hr:
            raise AuthorizationError("You are not allowed to edit this profile")
        cleaned = {k: v for k, v in profile.items() if v not in (None, "")}
        return self._employees.update(auth, employee_id, {"profile": cleaned})

    def get_own_profile(self, auth: AuthSession) -> Employee:
        return self._employees.get_own_profile(auth)

    def update_own_profile(self, auth: AuthSession, changes: dict) -> tuple[Employee, AuthSession]:
        """Update the caller's own profile and return the replacement session."""
        if auth.role == Role.EMPLOYEE:
            payload = {k: v for k, v in changes.items() if k in SELF_EDITABLE_FIELDS and v}
        else:
            payload = {"profile": {k: v for k, v in changes.items() if v not in (None, "")}}
        if not payload:
            raise ValidationError("Nothing to update")

        emp = self._employees.update_own_profile(auth, payload)
        new_auth = auth.updated(name=emp.profile.full_name, profile_picture=emp.profile.profile_picture_url)
        return emp, new_auth
