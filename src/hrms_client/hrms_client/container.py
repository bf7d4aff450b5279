from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import requests

from .analytics.api_analytics_repository import ApiAnalyticsRepository
from .analytics.service import AnalyticsService
from .api.client import ApiClient, ApiConfig
from .attendance.api_attendance_repository import ApiAttendanceRepository
from .attendance.service import AttendanceService
from .auth.api_auth_repository import ApiAuthRepository
from .auth.model import AuthSession
from .auth.service import AuthService
from .core.constants import DASHBOARD_IDLE_CYCLES, DEFAULT_HTTP_TIMEOUT, DEFAULT_REFRESH_SECONDS
from .employees.api_employee_repository import ApiEmployeeRepository
from .employees.service import EmployeeService
from .leaves.api_leave_repository import ApiLeaveRepository
from .leaves.service import LeaveService
from .live.poller import DashboardPoller, PollerRegistry
from .payroll.api_payroll_repository import ApiPayrollRepository
from .payroll.service import PayrollService
from .reports.aggregator import ReportAggregator
from .reports.service import PerformanceReportService
from .reports.view_state import ReportViewCache
from .teams.api_team_repository import ApiTeamRepository
from .teams.service import TeamService


@dataclass(frozen=True)
class Container:
    api: ApiClient

    auth_repo: ApiAuthRepository
    employees_repo: ApiEmployeeRepository
    attendance_repo: ApiAttendanceRepository
    leaves_repo: ApiLeaveRepository
    teams_repo: ApiTeamRepository
    payroll_repo: ApiPayrollRepository
    analytics_repo: ApiAnalyticsRepository

    auth_service: AuthService
    employee_service: EmployeeService
    attendance_service: AttendanceService
    leave_service: LeaveService
    team_service: TeamService
    payroll_service: PayrollService
    analytics_service: AnalyticsService
    performance_report_service: PerformanceReportService

    pollers: PollerRegistry
    report_views: ReportViewCache
    refresh_interval: float = DEFAULT_REFRESH_SECONDS

    def end_session(self, auth: AuthSession) -> None:
        """Drop everything kept server-side for one login: its poller and cached reports."""
        self.pollers.stop(auth)
        self.report_views.discard_if(lambda key: key[0] == auth.token)


def build_container(
    *,
    api_config: dict,
    refresh_interval: float = DEFAULT_REFRESH_SECONDS,
    session: Optional[requests.Session] = None,
) -> Container:
    config = ApiConfig(
        base_url=str(api_config["base_url"]),
        timeout=float(api_config.get("timeout", DEFAULT_HTTP_TIMEOUT)),
    )
    api = ApiClient(config, session=session)

    auth_repo = ApiAuthRepository(api)
    employees_repo = ApiEmployeeRepository(api)
    attendance_repo = ApiAttendanceRepository(api)
    leaves_repo = ApiLeaveRepository(api)
    teams_repo = ApiTeamRepository(api)
    payroll_repo = ApiPayrollRepository(api)
    analytics_repo = ApiAnalyticsRepository(api)

    auth_service = AuthService(auth_repo)
    employee_service = EmployeeService(employees_repo)
    attendance_service = AttendanceService(attendance_repo)
    leave_service = LeaveService(leaves_repo)
    team_service = TeamService(teams_repo)
    payroll_service = PayrollService(payroll_repo)
    analytics_service = AnalyticsService(analytics_repo)
    performance_report_service = PerformanceReportService(
        employee_service,
        attendance_repo,
        leaves_repo,
        aggregator=ReportAggregator(),
    )

    def dashboard_poller(auth: AuthSession) -> DashboardPoller:
        return DashboardPoller(
            lambda: analytics_service.dashboard(auth),
            interval=refresh_interval,
            idle_timeout=refresh_interval * DASHBOARD_IDLE_CYCLES,
            name=f"dashboard-poller-{auth.employee_id}",
        )

    return Container(
        api=api,
        auth_repo=auth_repo,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        teams_repo=teams_repo,
        payroll_repo=payroll_repo,
        analytics_repo=analytics_repo,
        auth_service=auth_service,
        employee_service=employee_service,
        attendance_service=attendance_service,
        leave_service=leave_service,
        team_service=team_service,
        payroll_service=payroll_service,
        analytics_service=analytics_service,
        performance_report_service=performance_report_service,
        pollers=PollerRegistry(dashboard_poller),
        report_views=ReportViewCache(),
        refresh_interval=refresh_interval,
    )
