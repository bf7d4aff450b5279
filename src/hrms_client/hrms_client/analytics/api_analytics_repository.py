from __future__ import annotations

from ..api.base import ApiRepository
from .model import DailySnapshot, DashboardAnalytics
from .repository import AnalyticsRepository


class ApiAnalyticsRepository(ApiRepository, AnalyticsRepository):
    def get_dashboard(self, auth) -> DashboardAnalytics:
        return DashboardAnalytics.from_api(self._client(auth).get("/analytics/dashboard"))

    def get_daily_data(self, auth, *, day: str) -> DailySnapshot:
        return DailySnapshot(date=day, raw=self._client(auth).get("/analytics/daily-data", date=day))
