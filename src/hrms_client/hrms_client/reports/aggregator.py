from __future__ import annotations

from collections import Counter
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from ..attendance.model import AttendanceRecord
from ..common.coerce import coerce_decimal
from ..core.constants import HALF_DAY_WEIGHT
from ..core.enums import AttendanceStatus, RequestStatus
from ..employees.model import Employee, SalaryStructure
from ..leaves.model import LeaveRecord
from .calculator.base import SalaryEstimator
from .calculator.prorated_estimator import ProratedSalaryEstimator
from .model import AttendanceSummary, DateRange, LeaveSummary, PerformanceReport, PerformanceSummary

HALF = Decimal(HALF_DAY_WEIGHT)
ONE_DECIMAL = Decimal("0.1")
TWO_DECIMALS = Decimal("0.01")


class ReportAggregator:
    """Builds the per-employee performance summary from raw API records.

    Pure: no I/O, inputs are never mutated, and missing or malformed optional
    fields count as zero instead of raising.
    """

    def __init__(self, *, estimator: Optional[SalaryEstimator] = None):
        self._estimator = estimator or ProratedSalaryEstimator()

    def aggregate(
        self,
        attendance_records: Optional[Iterable[AttendanceRecord]],
        leave_records: Optional[Iterable[LeaveRecord]],
        date_range: DateRange,
        salary_structure: Optional[SalaryStructure] = None,
        *,
        employee: Optional[Employee] = None,
    ) -> PerformanceReport:
        attendance = tuple(attendance_records or ())
        leaves = tuple(leave_records or ())

        attendance_summary = self.summarize_attendance(attendance, date_range)
        leave_summary = self.summarize_leaves(leaves)

        salary = None
        if salary_structure is not None:
            working_days = attendance_summary.present + HALF * attendance_summary.half_day + leave_summary.approved
            salary = self._estimator.estimate(
                salary_structure,
                working_days=working_days,
                total_days=attendance_summary.total_days,
            )

        return PerformanceReport(
            date_range=date_range,
            summary=PerformanceSummary(attendance=attendance_summary, leaves=leave_summary, salary=salary),
            attendance_records=attendance,
            leave_records=leaves,
            employee=employee,
        )

    @staticmethod
    def summarize_attendance(records: tuple[AttendanceRecord, ...], date_range: DateRange) -> AttendanceSummary:
        counts = Counter(r.status for r in records)
        present = counts[AttendanceStatus.PRESENT]
        absent = counts[AttendanceStatus.ABSENT]
        half_day = counts[AttendanceStatus.HALF_DAY]

        total_hours = sum((coerce_decimal(r.total_hours) for r in records), Decimal("0"))

        # Rate is over calendar days in the range, never over len(records).
        # It is not clamped: bad upstream data can push it past 100.
        total_days = date_range.total_days
        if total_days > 0:
            rate = (present + HALF * half_day) / total_days * 100
        else:
            rate = Decimal("0")

        return AttendanceSummary(
            present=present,
            absent=absent,
            half_day=half_day,
            total_days=total_days,
            total_hours=total_hours.quantize(TWO_DECIMALS, rounding=ROUND_HALF_UP),
            attendance_rate=rate.quantize(ONE_DECIMAL, rounding=ROUND_HALF_UP),
        )

    @staticmethod
    def summarize_leaves(records: tuple[LeaveRecord, ...]) -> LeaveSummary:
        counts = Counter(r.status for r in records)
        return LeaveSummary(
            approved=counts[RequestStatus.APPROVED],
            pending=counts[RequestStatus.PENDING],
            rejected=counts[RequestStatus.REJECTED],
            total=len(records),
        )
