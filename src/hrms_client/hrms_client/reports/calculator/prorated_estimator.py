from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from ...core.constants import SALARY_BASELINE_DAYS
from ...employees.model import SalaryStructure
from ..model import SalaryEstimate
from .base import SalaryEstimator

CENTS = Decimal("0.01")


class ProratedSalaryEstimator(SalaryEstimator):
    """Standard rule: earned = gross / baseline_days * working_days; net = earned - deductions.

    Earned is 0 for an empty or inverted range.
    """

    def __init__(self, baseline_days: int = SALARY_BASELINE_DAYS):
        self._baseline_days = int(baseline_days)

    def estimate(self, salary: SalaryStructure, *, working_days: Decimal, total_days: int) -> SalaryEstimate:
        gross = salary.gross
        if total_days > 0:
            earned = gross / self._baseline_days * working_days
        else:
            earned = Decimal("0")
        deductions = salary.total_deductions
        return SalaryEstimate(
            gross=gross,
            working_days=working_days,
            earned=earned.quantize(CENTS, rounding=ROUND_HALF_UP),
            deductions=deductions,
            net=(earned - deductions).quantize(CENTS, rounding=ROUND_HALF_UP),
        )
