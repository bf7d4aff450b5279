from __future__ import annotations

import pytest

from src.hrms_client.hrms_client.auth.model import AuthSession
from src.hrms_client.hrms_client.core.enums import Role


def make_auth(role: Role = Role.ADMIN, *, employee_id: str = "ADM001", token: str = "tok-admin") -> AuthSession:
    return AuthSession(
        user_id="u-" + employee_id.lower(),
        name="Test " + role.value,
        email=f"{employee_id.lower()}@example.com",
        employee_id=employee_id,
        role=role,
        token=token,
    )


@pytest.fixture
def admin_auth() -> AuthSession:
    return make_auth(Role.ADMIN)


@pytest.fixture
def hr_auth() -> AuthSession:
    return make_auth(Role.HR_OFFICER, employee_id="HR001", token="tok-hr")


@pytest.fixture
def employee_auth() -> AuthSession:
    return make_auth(Role.EMPLOYEE, employee_id="EMP001", token="tok-emp")
