from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..common.validators import require_non_empty, require_strong_password
from ..core.enums import Role
from ..core.exceptions import ApiError, AuthenticationError, ValidationError
from .model import AuthSession
from .repository import AuthRepository


@dataclass(frozen=True)
class NewAccount:
    employee_id: str
    email: str
    password: str
    confirm_password: str
    role: Role
    first_name: str
    last_name: str
    gender: Optional[str] = None
    company_name: Optional[str] = None
    company_code: Optional[str] = None


class AuthService:
    """Use case: authenticate (login) and self-registration."""

    def __init__(self, auth: AuthRepository):
        self._auth = auth

    def login(self, identifier: str, password: str) -> AuthSession:
        identifier = require_non_empty(identifier, "Email or Employee ID")
        if not password:
            raise ValidationError("Password is required")

        is_email = "@" in identifier
        try:
            data = self._auth.login(
                email=identifier if is_email else None,
                employee_id=None if is_email else identifier,
                password=password,
            )
        except ApiError as e:
            if e.status_code in (400, 401):
                raise AuthenticationError(e.message or "Invalid credentials") from e
            raise

        if not isinstance(data, dict) or not data.get("token"):
            raise AuthenticationError("Invalid credentials")
        return AuthSession.from_api(data)

    def register(self, account: NewAccount) -> AuthSession:
        require_non_empty(account.employee_id, "Employee ID")
        require_non_empty(account.email, "Email")
        require_non_empty(account.first_name, "First name")
        require_strong_password(account.password)
        if account.password != account.confirm_password:
            raise ValidationError("Passwords do not match")

        payload = {
            "employee_id": account.employee_id.strip(),
            "email": account.email.strip(),
            "password": account.password,
            "role": account.role.value,
            "first_name": account.first_name.strip(),
            "last_name": (account.last_name or "").strip(),
            "gender": account.gender or None,
        }
        # Admins found a company, everyone else joins one by code.
        if account.role == Role.ADMIN:
            payload["company_name"] = require_non_empty(account.company_name or "", "Company name")
        else:
            payload["company_code"] = require_non_empty(account.company_code or "", "Company code")

        try:
            data = self._auth.register(payload)
        except ApiError as e:
            if e.status_code == 400:
                raise ValidationError(e.message) from e
            raise
        if not isinstance(data, dict) or not data.get("token"):
            raise ValidationError("Registration failed")
        return AuthSession.from_api(data)
