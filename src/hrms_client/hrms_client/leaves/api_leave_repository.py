from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..api.base import ApiRepository, unwrap_list
from ..core.enums import RequestStatus
from .model import LeaveRecord
from .repository import LeaveRepository


class ApiLeaveRepository(ApiRepository, LeaveRepository):
    def create(self, auth, payload: dict) -> LeaveRecord:
        return LeaveRecord.from_api(self._client(auth).post("/leaves", payload) or {})

    def list_mine(self, auth) -> Sequence[LeaveRecord]:
        data = self._client(auth).get("/leaves/my-status")
        return [LeaveRecord.from_api(row) for row in unwrap_list(data, "leaves") if isinstance(row, dict)]

    def list_all(
        self,
        auth,
        *,
        status: Optional[RequestStatus] = None,
        employee_id: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[LeaveRecord]:
        data = self._client(auth).get(
            "/leaves",
            status=status.value if status else None,
            employee_id=employee_id,
            startDate=start_date.isoformat() if start_date else None,
            endDate=end_date.isoformat() if end_date else None,
        )
        return [LeaveRecord.from_api(row) for row in unwrap_list(data, "leaves") if isinstance(row, dict)]

    def decide(self, auth, *, leave_id: str, status: RequestStatus, admin_remarks: Optional[str]) -> LeaveRecord:
        data = self._client(auth).put(
            f"/leaves/{leave_id}/status",
            {"status": status.value, "admin_remarks": admin_remarks or ""},
        )
        return LeaveRecord.from_api(data or {})
