from __future__ import annotations

from datetime import date
from typing import Optional

from ..auth.model import AuthSession
from ..common.datetime_utils import parse_iso_date
from ..core.constants import ON_LEAVE_TODAY_LIMIT
from ..core.enums import RequestStatus
from ..core.exceptions import AuthorizationError, ValidationError
from ..leaves.model import LeaveRecord
from .model import DailySnapshot, DashboardAnalytics
from .repository import AnalyticsRepository


class AnalyticsService:
    def __init__(self, analytics: AnalyticsRepository):
        self._analytics = analytics

    def dashboard(self, auth: AuthSession) -> DashboardAnalytics:
        if not auth.is_admin_or_hr:
            raise AuthorizationError("You are not allowed to view analytics")
        return self._analytics.get_dashboard(auth)

    def daily_data(self, auth: AuthSession, *, day: Optional[str] = None) -> DailySnapshot:
        if not auth.is_admin_or_hr:
            raise AuthorizationError("You are not allowed to view analytics")
        if day:
            try:
                parse_iso_date(day)
            except ValueError:
                raise ValidationError("Invalid date (YYYY-MM-DD)")
        else:
            day = date.today().isoformat()
        return self._analytics.get_daily_data(auth, day=day)

    @staticmethod
    def on_leave_today(analytics: DashboardAnalytics, today: date) -> list[LeaveRecord]:
        on_leave = [l for l in analytics.recent_leaves if l.status == RequestStatus.APPROVED and l.covers(today)]
        return on_leave[:ON_LEAVE_TODAY_LIMIT]
