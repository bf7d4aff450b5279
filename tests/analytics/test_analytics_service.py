from __future__ import annotations

from datetime import date

import pytest

from src.hrms_client.hrms_client.analytics.model import DailySnapshot, DashboardAnalytics
from src.hrms_client.hrms_client.analytics.service import AnalyticsService
from src.hrms_client.hrms_client.core.exceptions import AuthorizationError, ValidationError


def leave(i, status="Approved", start="2025-01-10", end="2025-01-12"):
    return {"_id": f"l{i}", "status": status, "start_date": start, "end_date": end, "leave_type": "Paid"}


class FakeAnalyticsRepo:
    def __init__(self, dashboard=None):
        self.dashboard = dashboard
        self.days = []

    def get_dashboard(self, auth):
        return self.dashboard

    def get_daily_data(self, auth, *, day):
        self.days.append(day)
        return DailySnapshot(date=day, raw={"employees": []})


def test_dashboard_unwraps_envelope():
    analytics = DashboardAnalytics.from_api(
        {
            "success": True,
            "analytics": {
                "leaves": {"pending": "4"},
                "departmentStats": [{"_id": "Engineering", "count": 3}],
                "recentActivities": {"leaves": [leave(1), "junk"]},
            },
        }
    )

    assert analytics.pending_leaves == 4
    assert analytics.department_stats == [{"_id": "Engineering", "count": 3}]
    assert [l.id for l in analytics.recent_leaves] == ["l1"]


def test_on_leave_today_is_approved_covering_and_capped():
    rows = [leave(i) for i in range(8)]
    rows.append(leave(90, status="Pending"))
    rows.append(leave(91, start="2025-01-01", end="2025-01-02"))
    analytics = DashboardAnalytics.from_api({"recentActivities": {"leaves": rows}})

    today = AnalyticsService.on_leave_today(analytics, date(2025, 1, 11))

    assert [l.id for l in today] == ["l0", "l1", "l2", "l3", "l4", "l5"]


def test_dashboard_and_daily_data_are_admin_or_hr_only(employee_auth):
    service = AnalyticsService(FakeAnalyticsRepo())
    with pytest.raises(AuthorizationError):
        service.dashboard(employee_auth)
    with pytest.raises(AuthorizationError):
        service.daily_data(employee_auth)


def test_daily_data_validates_and_defaults_the_day(hr_auth):
    repo = FakeAnalyticsRepo()
    service = AnalyticsService(repo)

    with pytest.raises(ValidationError):
        service.daily_data(hr_auth, day="31-01-2025")

    service.daily_data(hr_auth, day="2025-01-31")
    service.daily_data(hr_auth)
    assert repo.days == ["2025-01-31", date.today().isoformat()]


def test_daily_snapshot_ignores_malformed_sections():
    snap = DailySnapshot(date="2025-01-31", raw={"summary": [1], "employees": [{"name": "A"}, 3]})
    assert snap.summary == {}
    assert snap.employees == [{"name": "A"}]
