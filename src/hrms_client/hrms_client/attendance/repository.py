from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_today(self, auth) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def check_in(self, auth) -> AttendanceRecord:
        raise NotImplementedError

    def check_out(self, auth) -> AttendanceRecord:
        raise NotImplementedError

    def list_records(
        self,
        auth,
        *,
        employee_id: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        month: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError
