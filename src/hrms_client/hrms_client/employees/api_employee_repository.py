from __future__ import annotations

from typing import Optional, Sequence

from ..api.base import ApiRepository, unwrap_list
from ..core.exceptions import ApiError
from .model import Employee
from .repository import EmployeeRepository


def _unwrap_one(data, key: str) -> dict:
    if isinstance(data, dict) and isinstance(data.get(key), dict):
        return data[key]
    return data if isinstance(data, dict) else {}


class ApiEmployeeRepository(ApiRepository, EmployeeRepository):
    def get_by_id(self, auth, employee_id: str) -> Optional[Employee]:
        try:
            data = self._client(auth).get(f"/users/{employee_id}")
        except ApiError as e:
            # A malformed object id answers 400/500 on this endpoint, not 404.
            if e.status_code in (400, 404, 500):
                return None
            raise
        if not isinstance(data, dict) or not data:
            return None
        return Employee.from_api(data)

    def list_all(self, auth) -> Sequence[Employee]:
        data = self._client(auth).get("/employees")
        return [Employee.from_api(row) for row in unwrap_list(data, "employees") if isinstance(row, dict)]

    def create(self, auth, payload: dict) -> Employee:
        data = self._client(auth).post("/employees", payload)
        return Employee.from_api(_unwrap_one(data, "employee"))

    def update(self, auth, employee_id: str, payload: dict) -> Employee:
        data = self._client(auth).put(f"/users/{employee_id}", payload)
        return Employee.from_api(_unwrap_one(data, "user"))

    def get_own_profile(self, auth) -> Employee:
        return Employee.from_api(_unwrap_one(self._client(auth).get("/users/profile"), "user"))

    def update_own_profile(self, auth, payload: dict) -> Employee:
        return Employee.from_api(_unwrap_one(self._client(auth).put("/users/profile", payload), "user"))
