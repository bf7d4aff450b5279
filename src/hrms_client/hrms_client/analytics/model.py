from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..common.coerce import coerce_int, dig
from ..leaves.model import LeaveRecord


@dataclass(frozen=True)
class DashboardAnalytics:
    """Pre-aggregated overview from ``/analytics/dashboard``; the raw payload is kept for templates."""

    raw: dict
    recent_leaves: tuple[LeaveRecord, ...] = field(default_factory=tuple)

    @property
    def pending_leaves(self) -> int:
        return coerce_int(dig(self.raw, "leaves", "pending"))

    @property
    def department_stats(self) -> list:
        stats = self.raw.get("departmentStats")
        return stats if isinstance(stats, list) else []

    @classmethod
    def from_api(cls, data: Any) -> "DashboardAnalytics":
        if isinstance(data, dict) and isinstance(data.get("analytics"), dict):
            data = data["analytics"]
        data = data if isinstance(data, dict) else {}
        leaves = dig(data, "recentActivities", "leaves", default=[])
        return cls(
            raw=data,
            recent_leaves=tuple(LeaveRecord.from_api(l) for l in leaves if isinstance(l, dict)),
        )


@dataclass(frozen=True)
class DailySnapshot:
    """Daily data for all employees; exported verbatim."""

    date: str
    raw: Any

    @property
    def summary(self) -> dict:
        s = dig(self.raw, "summary")
        return s if isinstance(s, dict) else {}

    @property
    def employees(self) -> list:
        rows = dig(self.raw, "employees")
        return [r for r in rows if isinstance(r, dict)] if isinstance(rows, list) else []
