from __future__ import annotations

import pytest

from src.hrms_client.hrms_client.auth.service import AuthService, NewAccount
from src.hrms_client.hrms_client.core.enums import Role
from src.hrms_client.hrms_client.core.exceptions import ApiError, AuthenticationError, ValidationError

LOGIN_OK = {
    "_id": "u1",
    "name": "Asha Rao",
    "email": "asha@example.com",
    "employee_id": "EMP001",
    "role": "Employee",
    "token": "jwt-token",
}


class FakeAuthRepo:
    def __init__(self, response=None, error=None):
        self.response = response if response is not None else dict(LOGIN_OK)
        self.error = error
        self.login_calls = []
        self.register_payloads = []

    def login(self, *, email, employee_id, password):
        self.login_calls.append({"email": email, "employee_id": employee_id, "password": password})
        if self.error:
            raise self.error
        return self.response

    def register(self, payload):
        self.register_payloads.append(payload)
        if self.error:
            raise self.error
        return self.response


def account(**overrides):
    values = dict(
        employee_id="EMP009",
        email="new@example.com",
        password="Secret#123",
        confirm_password="Secret#123",
        role=Role.EMPLOYEE,
        first_name="New",
        last_name="Hire",
        company_code="ACME42",
    )
    values.update(overrides)
    return NewAccount(**values)


def test_login_with_email_sends_email_field():
    repo = FakeAuthRepo()
    session = AuthService(repo).login("asha@example.com", "pw")

    assert repo.login_calls[0]["email"] == "asha@example.com"
    assert repo.login_calls[0]["employee_id"] is None
    assert session.token == "jwt-token"
    assert session.role == Role.EMPLOYEE


def test_login_with_employee_code_sends_employee_id():
    repo = FakeAuthRepo()
    AuthService(repo).login("  EMP001 ", "pw")

    assert repo.login_calls[0] == {"email": None, "employee_id": "EMP001", "password": "pw"}


def test_login_rejects_blank_input():
    with pytest.raises(ValidationError):
        AuthService(FakeAuthRepo()).login("", "pw")
    with pytest.raises(ValidationError):
        AuthService(FakeAuthRepo()).login("EMP001", "")


def test_login_unauthorized_becomes_authentication_error():
    repo = FakeAuthRepo(error=ApiError("Invalid email or password", status_code=401))
    with pytest.raises(AuthenticationError, match="Invalid email or password"):
        AuthService(repo).login("EMP001", "wrong")


def test_login_server_failure_propagates():
    repo = FakeAuthRepo(error=ApiError("boom", status_code=500))
    with pytest.raises(ApiError):
        AuthService(repo).login("EMP001", "pw")


def test_login_without_token_is_rejected():
    repo = FakeAuthRepo(response={"message": "ok"})
    with pytest.raises(AuthenticationError):
        AuthService(repo).login("EMP001", "pw")


def test_register_employee_joins_company_by_code():
    repo = FakeAuthRepo()
    AuthService(repo).register(account())

    payload = repo.register_payloads[0]
    assert payload["company_code"] == "ACME42"
    assert "company_name" not in payload
    assert payload["role"] == "Employee"


def test_register_admin_requires_company_name():
    with pytest.raises(ValidationError, match="Company name"):
        AuthService(FakeAuthRepo()).register(account(role=Role.ADMIN, company_code=None))


def test_register_password_mismatch():
    with pytest.raises(ValidationError, match="do not match"):
        AuthService(FakeAuthRepo()).register(account(confirm_password="Secret#124"))


def test_register_weak_password():
    with pytest.raises(ValidationError):
        AuthService(FakeAuthRepo()).register(account(password="short", confirm_password="short"))


def test_register_server_rejection_is_validation_error():
    repo = FakeAuthRepo(error=ApiError("User already exists", status_code=400))
    with pytest.raises(ValidationError, match="already exists"):
        AuthService(repo).register(account())
