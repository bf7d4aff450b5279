from __future__ import annotations

from typing import Protocol

from .model import DailySnapshot, DashboardAnalytics


class AnalyticsRepository(Protocol):
    def get_dashboard(self, auth) -> DashboardAnalytics:
        raise NotImplementedError

    def get_daily_data(self, auth, *, day: str) -> DailySnapshot:
        raise NotImplementedError
