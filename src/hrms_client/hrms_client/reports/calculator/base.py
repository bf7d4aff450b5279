from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal

from ...employees.model import SalaryStructure
from ..model import SalaryEstimate


class SalaryEstimator(ABC):
    """Estimator interface (Strategy Pattern for the performance report salary block)."""

    @abstractmethod
    def estimate(self, salary: SalaryStructure, *, working_days: Decimal, total_days: int) -> SalaryEstimate:
        raise NotImplementedError
