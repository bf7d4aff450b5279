from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Union

from ..common.coerce import coerce_decimal, optional_str
from ..common.datetime_utils import parse_api_date, parse_api_timestamp
from ..core.enums import AttendanceStatus
from ..employees.model import EmployeeBrief


def parse_status(value) -> Union[AttendanceStatus, str]:
    """Known statuses become the enum; anything else is kept as the raw string."""
    try:
        return AttendanceStatus(value)
    except ValueError:
        return str(value or "")


@dataclass(frozen=True)
class AttendanceRecord:
    """Read-only snapshot of one attendance document for one employee-day."""

    date: Optional[date]
    status: Union[AttendanceStatus, str]
    check_in: Optional[datetime] = None
    check_out: Optional[datetime] = None
    total_hours: Optional[Decimal] = None
    employee: Optional[EmployeeBrief] = None
    id: Optional[str] = None

    @classmethod
    def from_api(cls, data: dict) -> "AttendanceRecord":
        raw_hours = data.get("total_hours")
        return cls(
            id=optional_str(data.get("_id")),
            date=parse_api_date(data.get("date")),
            status=parse_status(data.get("status")),
            check_in=parse_api_timestamp(data.get("check_in")),
            check_out=parse_api_timestamp(data.get("check_out")),
            total_hours=None if raw_hours in (None, "") else coerce_decimal(raw_hours, default=None),
            employee=EmployeeBrief.from_api(data.get("employee_id")),
        )
