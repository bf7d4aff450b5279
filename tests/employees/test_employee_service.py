from __future__ import annotations

from decimal import Decimal

import pytest

from src.hrms_client.hrms_client.core.enums import Role
from src.hrms_client.hrms_client.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.hrms_client.hrms_client.employees.model import ByCode, ById, Employee, EmployeeProfile
from src.hrms_client.hrms_client.employees.service import EmployeeService, NewEmployee

OBJECT_ID = "65a1b2c3d4e5f60718293a4b"


def employee(emp_id=OBJECT_ID, code="EMP001", name="Asha Rao", email="asha@example.com", role=Role.EMPLOYEE):
    return Employee(
        id=emp_id,
        employee_id=code,
        email=email,
        role=role,
        profile=EmployeeProfile(full_name=name, profile_picture_url="http://img/a.png"),
    )


class FakeEmployeeRepo:
    def __init__(self, employees=()):
        self.employees = list(employees)
        self.created = []
        self.updates = []
        self.own_updates = []

    def get_by_id(self, auth, employee_id):
        return next((e for e in self.employees if e.id == employee_id), None)

    def list_all(self, auth):
        return list(self.employees)

    def create(self, auth, payload):
        self.created.append(payload)
        return employee(code="EMP777", name=payload["first_name"] + " " + payload["last_name"])

    def update(self, auth, employee_id, payload):
        self.updates.append((employee_id, payload))
        return self.get_by_id(auth, employee_id) or employee()

    def get_own_profile(self, auth):
        return self.employees[0]

    def update_own_profile(self, auth, payload):
        self.own_updates.append(payload)
        return employee(name="Asha R.")


def new_employee(**overrides):
    values = dict(
        first_name="Ravi",
        last_name="Kumar",
        email="ravi@example.com",
        department="Engineering",
        designation="Developer",
        team="team-1",
    )
    values.update(overrides)
    return NewEmployee(**values)


def test_parse_ref_classifies_object_ids_and_codes():
    assert EmployeeService.parse_ref(OBJECT_ID) == ById(OBJECT_ID)
    assert EmployeeService.parse_ref("EMP001") == ByCode("EMP001")
    with pytest.raises(ValidationError):
        EmployeeService.parse_ref("  ")


def test_resolve_by_id_falls_back_to_list_scan(admin_auth):
    service = EmployeeService(FakeEmployeeRepo([employee()]))

    # A code held in an id slot is still found through the list.
    assert service.resolve(admin_auth, ById("EMP001")).id == OBJECT_ID
    assert service.resolve(admin_auth, ByCode("EMP001")).id == OBJECT_ID
    with pytest.raises(NotFoundError):
        service.resolve(admin_auth, ByCode("EMP404"))


def test_get_missing_employee(admin_auth):
    with pytest.raises(NotFoundError):
        EmployeeService(FakeEmployeeRepo()).get(admin_auth, OBJECT_ID)


def test_search_matches_name_email_and_code():
    people = [employee(), employee(emp_id="x", code="EMP002", name="Ravi Kumar", email="ravi@example.com")]

    assert [e.employee_id for e in EmployeeService.search(people, "ravi")] == ["EMP002"]
    assert [e.employee_id for e in EmployeeService.search(people, "emp001")] == ["EMP001"]
    assert len(EmployeeService.search(people, "")) == 2


def test_create_requires_team_for_employees(admin_auth):
    with pytest.raises(ValidationError, match="Team"):
        EmployeeService(FakeEmployeeRepo()).create(admin_auth, new_employee(team=None))


def test_only_admin_creates_hr_officers(admin_auth, hr_auth, employee_auth):
    repo = FakeEmployeeRepo()
    service = EmployeeService(repo)

    with pytest.raises(AuthorizationError):
        service.create(hr_auth, new_employee(role=Role.HR_OFFICER))
    with pytest.raises(AuthorizationError):
        service.create(employee_auth, new_employee())

    service.create(admin_auth, new_employee(role=Role.HR_OFFICER, team=None))
    assert repo.created[0]["role"] == "HR Officer"
    assert "team" not in repo.created[0]


def test_salary_from_form_rejects_negative_amounts():
    salary = EmployeeService.salary_from_form({"basic": "20000", "hra": "8000", "pf": "1800"})
    assert salary.gross == Decimal("28000")
    assert salary.net == Decimal("26200")

    with pytest.raises(ValidationError, match="Professional Tax"):
        EmployeeService.salary_from_form({"basic": "100", "professional_tax": "-1"})


def test_update_salary_is_admin_or_hr_only(employee_auth, hr_auth):
    repo = FakeEmployeeRepo([employee()])
    service = EmployeeService(repo)
    salary = EmployeeService.salary_from_form({"basic": "1000"})

    with pytest.raises(AuthorizationError):
        service.update_salary(employee_auth, OBJECT_ID, salary)

    service.update_salary(hr_auth, OBJECT_ID, salary)
    assert repo.updates[0][1]["salary_structure"]["basic"] == 1000.0


def test_employee_can_only_change_contact_fields(employee_auth):
    repo = FakeEmployeeRepo([employee()])

    emp, new_auth = EmployeeService(repo).update_own_profile(
        employee_auth, {"phone": "98765", "department": "Sales", "address": ""}
    )

    assert repo.own_updates == [{"phone": "98765"}]
    assert new_auth.name == "Asha R."
    assert new_auth.token == employee_auth.token


def test_update_own_profile_with_nothing_to_change(employee_auth):
    with pytest.raises(ValidationError):
        EmployeeService(FakeEmployeeRepo([employee()])).update_own_profile(employee_auth, {"department": "Sales"})


def test_employee_from_api_parses_nested_documents():
    emp = Employee.from_api(
        {
            "_id": OBJECT_ID,
            "employee_id": "EMP001",
            "email": "asha@example.com",
            "role": "Super User",
            "profile": {"full_name": "Asha Rao", "date_of_joining": "2024-03-01T00:00:00.000Z"},
            "salary_structure": {"basic": "30000", "hra": 12000, "pf": None},
            "team": {"_id": "t1", "team_name": "Platform"},
        }
    )

    assert emp.role == Role.EMPLOYEE
    assert emp.team_name == "Platform"
    assert emp.salary_structure.gross == Decimal("42000")
    assert emp.salary_structure.pf == Decimal("0")
    assert emp.profile.date_of_joining.isoformat() == "2024-03-01"
