from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ..auth.model import AuthSession
from ..common.coerce import coerce_decimal
from ..common.datetime_utils import month_bounds, weekdays_in_month
from ..core.constants import PLACEHOLDER, TARGET_HOURS_PER_WORKDAY
from ..core.enums import AttendanceStatus
from ..core.exceptions import ApiError, ValidationError
from .model import AttendanceRecord
from .repository import AttendanceRepository


@dataclass(frozen=True)
class MonthlyStats:
    worked: Decimal
    target: int

    @property
    def progress_percent(self) -> Decimal:
        if self.target <= 0:
            return Decimal("0")
        return min(self.worked / self.target * 100, Decimal("100")).quantize(Decimal("0.1"))


class AttendanceService:
    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def check_in(self, auth: AuthSession) -> AttendanceRecord:
        try:
            return self._attendance.check_in(auth)
        except ApiError as e:
            if e.status_code == 400:
                raise ValidationError(e.message) from e
            raise

    def check_out(self, auth: AuthSession) -> AttendanceRecord:
        try:
            return self._attendance.check_out(auth)
        except ApiError as e:
            if e.status_code in (400, 404):
                raise ValidationError(e.message) from e
            raise

    def get_today_record(self, auth: AuthSession) -> Optional[AttendanceRecord]:
        return self._attendance.get_today(auth)

    def history(
        self,
        auth: AuthSession,
        *,
        employee_id: Optional[str] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
        month: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        return self._attendance.list_records(
            auth, employee_id=employee_id, start_date=start, end_date=end, month=month
        )

    @staticmethod
    def monthly_stats(records: Sequence[AttendanceRecord], today: date) -> MonthlyStats:
        """Hours worked this month against 8h per weekday of the month."""
        start, end = month_bounds(today.year, today.month)
        worked = Decimal("0")
        for r in records:
            if r.date and start <= r.date <= end and r.total_hours:
                worked += coerce_decimal(r.total_hours)
        target = weekdays_in_month(today.year, today.month) * TARGET_HOURS_PER_WORKDAY
        return MonthlyStats(worked=worked.quantize(Decimal("0.1")), target=target)

    def get_history_ui(self, records: Sequence[AttendanceRecord]) -> list[dict]:
        return [self._to_ui(r) for r in records]

    def _to_ui(self, r: AttendanceRecord) -> dict:
        status = r.status.value if isinstance(r.status, AttendanceStatus) else (r.status or "Unknown")
        css = {
            AttendanceStatus.PRESENT: "bg-success",
            AttendanceStatus.ABSENT: "bg-danger",
            AttendanceStatus.LATE: "bg-warning text-dark",
            AttendanceStatus.HALF_DAY: "bg-info",
        }.get(r.status, "bg-secondary")

        return {
            "date": r.date.strftime("%a, %b %d, %Y") if r.date else PLACEHOLDER,
            "check_in": r.check_in.strftime("%I:%M %p") if r.check_in else PLACEHOLDER,
            "check_out": r.check_out.strftime("%I:%M %p") if r.check_out else PLACEHOLDER,
            "hours": f"{r.total_hours}" if r.total_hours is not None else PLACEHOLDER,
            "status": status,
            "css_class": css,
        }
