from __future__ import annotations

from typing import Optional, Protocol


class AuthRepository(Protocol):
    def login(self, *, email: Optional[str], employee_id: Optional[str], password: str) -> dict:
        raise NotImplementedError

    def register(self, payload: dict) -> dict:
        raise NotImplementedError
