from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..api.base import ApiRepository, unwrap_list
from ..core.exceptions import ApiError
from .model import AttendanceRecord
from .repository import AttendanceRepository


class ApiAttendanceRepository(ApiRepository, AttendanceRepository):
    def get_today(self, auth) -> Optional[AttendanceRecord]:
        try:
            data = self._client(auth).get("/attendance/today")
        except ApiError as e:
            if e.status_code == 404:
                return None
            raise
        if not isinstance(data, dict) or not data:
            return None
        return AttendanceRecord.from_api(data)

    def check_in(self, auth) -> AttendanceRecord:
        return AttendanceRecord.from_api(self._client(auth).post("/attendance/checkin") or {})

    def check_out(self, auth) -> AttendanceRecord:
        return AttendanceRecord.from_api(self._client(auth).put("/attendance/checkout") or {})

    def list_records(
        self,
        auth,
        *,
        employee_id: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        month: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        data = self._client(auth).get(
            "/attendance",
            employee_id=employee_id,
            startDate=start_date.isoformat() if start_date else None,
            endDate=end_date.isoformat() if end_date else None,
            month=month,
        )
        return [AttendanceRecord.from_api(row) for row in unwrap_list(data, "attendance") if isinstance(row, dict)]
