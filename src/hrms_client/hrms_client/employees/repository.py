from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    def get_by_id(self, auth, employee_id: str) -> Optional[Employee]:
        raise NotImplementedError

    def list_all(self, auth) -> Sequence[Employee]:
        raise NotImplementedError

    def create(self, auth, payload: dict) -> Employee:
        raise NotImplementedError

    def update(self, auth, employee_id: str, payload: dict) -> Employee:
        raise NotImplementedError

    def get_own_profile(self, auth) -> Employee:
        raise NotImplementedError

    def update_own_profile(self, auth, payload: dict) -> Employee:
        raise NotImplementedError
