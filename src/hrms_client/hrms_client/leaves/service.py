from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..auth.model import AuthSession
from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_date_order, require_non_empty
from ..core.enums import LeaveType, RequestStatus
from ..core.exceptions import AuthorizationError, ValidationError
from .model import LeaveRecord
from .repository import LeaveRepository

logger = logging.getLogger(__name__)


class LeaveService:
    def __init__(self, leaves: LeaveRepository):
        self._leaves = leaves

    def apply(
        self,
        auth: AuthSession,
        *,
        leave_type: str,
        start_date: str,
        end_date: str,
        reason: str,
        attachment_url: Optional[str] = None,
    ) -> LeaveRecord:
        try:
            kind = LeaveType(leave_type)
        except ValueError:
            raise ValidationError("Invalid leave type")
        try:
            start = parse_iso_date(start_date)
            end = parse_iso_date(end_date)
        except (TypeError, ValueError):
            raise ValidationError("Invalid date (YYYY-MM-DD)")
        require_date_order(start, end)
        reason = require_non_empty(reason, "Reason")

        return self._leaves.create(
            auth,
            {
                "leave_type": kind.value,
                "start_date": start.isoformat(),
                "end_date": end.isoformat(),
                "reason": reason,
                "attachment_url": (attachment_url or "").strip(),
            },
        )

    def my_leaves(self, auth: AuthSession) -> Sequence[LeaveRecord]:
        return self._leaves.list_mine(auth)

    def list_requests(
        self,
        auth: AuthSession,
        *,
        status: Optional[RequestStatus] = None,
        employee_id: Optional[str] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[LeaveRecord]:
        return self._leaves.list_all(auth, status=status, employee_id=employee_id, start_date=start, end_date=end)

    def decide(self, auth: AuthSession, *, leave_id: str, status: str, admin_remarks: str = "") -> LeaveRecord:
        if not auth.is_admin_or_hr:
            raise AuthorizationError("You are not allowed to review leave requests")
        try:
            decision = RequestStatus(status)
        except ValueError:
            raise ValidationError("Invalid decision")
        if decision == RequestStatus.PENDING:
            raise ValidationError("A leave request can only be approved or rejected")

        leave = self._leaves.decide(
            auth,
            leave_id=require_non_empty(leave_id, "Leave request"),
            status=decision,
            admin_remarks=(admin_remarks or "").strip() or None,
        )
        logger.info("leave %s %s by %s", leave_id, decision.value, auth.employee_id)
        return leave

    @staticmethod
    def search(leaves: Sequence[LeaveRecord], term: str) -> list[LeaveRecord]:
        term = (term or "").strip().lower()
        if not term:
            return list(leaves)
        out = []
        for leave in leaves:
            emp = leave.employee
            if emp and (term in (emp.full_name or "").lower() or term in (emp.email or "").lower()):
                out.append(leave)
        return out
