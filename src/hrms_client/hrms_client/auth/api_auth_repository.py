from __future__ import annotations

from typing import Optional

from ..api.base import ApiRepository
from .repository import AuthRepository


class ApiAuthRepository(ApiRepository, AuthRepository):
    def login(self, *, email: Optional[str], employee_id: Optional[str], password: str) -> dict:
        payload = {"employee_id": employee_id} if employee_id else {"email": email}
        payload["password"] = password
        return self._api.post("/auth/login", payload)

    def register(self, payload: dict) -> dict:
        return self._api.post("/auth/register", payload)
