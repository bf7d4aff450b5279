from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import inclusive_day_count
from ..employees.model import Employee
from ..leaves.model import LeaveRecord


@dataclass(frozen=True)
class DateRange:
    """Inclusive [start, end] range. Not validated: end may precede start."""

    start: date
    end: date

    @property
    def total_days(self) -> int:
        return inclusive_day_count(self.start, self.end)

    @property
    def label(self) -> str:
        return f"{self.start.isoformat()} to {self.end.isoformat()}"


@dataclass(frozen=True)
class AttendanceSummary:
    present: int
    absent: int
    half_day: int
    total_days: int
    total_hours: Decimal
    attendance_rate: Decimal


@dataclass(frozen=True)
class LeaveSummary:
    approved: int
    pending: int
    rejected: int
    total: int


@dataclass(frozen=True)
class SalaryEstimate:
    """Display estimate prorated over a fixed baseline month; not the payroll value."""

    gross: Decimal
    working_days: Decimal
    earned: Decimal
    deductions: Decimal
    net: Decimal


@dataclass(frozen=True)
class PerformanceSummary:
    attendance: AttendanceSummary
    leaves: LeaveSummary
    salary: Optional[SalaryEstimate] = None


@dataclass(frozen=True)
class PerformanceReport:
    """Summary plus the untouched input records, for detail tables and export."""

    date_range: DateRange
    summary: PerformanceSummary
    attendance_records: tuple[AttendanceRecord, ...] = field(default_factory=tuple)
    leave_records: tuple[LeaveRecord, ...] = field(default_factory=tuple)
    employee: Optional[Employee] = None
