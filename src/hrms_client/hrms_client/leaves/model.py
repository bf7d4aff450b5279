from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional, Union

from ..common.coerce import optional_str
from ..common.datetime_utils import parse_api_date
from ..core.enums import LeaveType, RequestStatus
from ..employees.model import EmployeeBrief


def _enum_or_raw(enum_cls, value):
    try:
        return enum_cls(value)
    except ValueError:
        return str(value or "")


@dataclass(frozen=True)
class LeaveRecord:
    id: Optional[str]
    start_date: Optional[date]
    end_date: Optional[date]
    leave_type: Union[LeaveType, str]
    status: Union[RequestStatus, str]
    reason: str = ""
    admin_remarks: Optional[str] = None
    attachment_url: Optional[str] = None
    employee: Optional[EmployeeBrief] = None

    def covers(self, day: date) -> bool:
        return bool(self.start_date and self.end_date and self.start_date <= day <= self.end_date)

    @classmethod
    def from_api(cls, data: dict) -> "LeaveRecord":
        return cls(
            id=optional_str(data.get("_id")),
            start_date=parse_api_date(data.get("start_date")),
            end_date=parse_api_date(data.get("end_date")),
            leave_type=_enum_or_raw(LeaveType, data.get("leave_type")),
            status=_enum_or_raw(RequestStatus, data.get("status") or RequestStatus.PENDING.value),
            reason=str(data.get("reason") or ""),
            admin_remarks=optional_str(data.get("admin_remarks")),
            attachment_url=optional_str(data.get("attachment_url")),
            employee=EmployeeBrief.from_api(data.get("employee_id")),
        )
