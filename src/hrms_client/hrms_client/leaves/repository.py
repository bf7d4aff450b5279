from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import RequestStatus
from .model import LeaveRecord


class LeaveRepository(Protocol):
    def create(self, auth, payload: dict) -> LeaveRecord:
        raise NotImplementedError

    def list_mine(self, auth) -> Sequence[LeaveRecord]:
        raise NotImplementedError

    def list_all(
        self,
        auth,
        *,
        status: Optional[RequestStatus] = None,
        employee_id: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[LeaveRecord]:
        raise NotImplementedError

    def decide(self, auth, *, leave_id: str, status: RequestStatus, admin_remarks: Optional[str]) -> LeaveRecord:
        raise NotImplementedError
