from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..attendance.service import AttendanceService
from ..common.datetime_utils import format_hhmm
from ..core.constants import DASHBOARD_SALARY_LIMIT, DASHBOARD_TREND_DAYS
from ..core.enums import SalaryStatus
from ..leaves.repository import LeaveRepository
from ..payroll.repository import SalaryRepository


class DashboardService:
    """Read-only summary for the employee home page."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        leaves: LeaveRepository,
        salaries: SalaryRepository,
        attendance_service: AttendanceService,
    ):
        self._attendance = attendance
        self._leaves = leaves
        self._salaries = salaries
        self._attendance_service = attendance_service

    def for_employee(self, user_id: int, *, now: Optional[datetime] = None) -> dict:
        salary_rows = list(self._salaries.latest_for_user(user_id, limit=DASHBOARD_SALARY_LIMIT))
        salary_status = salary_rows[0]["status"] if salary_rows else SalaryStatus.UNPAID.value

        recent = self._attendance.get_recent_for_user(user_id, DASHBOARD_TREND_DAYS)
        trend = [
            {
                "date": r.date.isoformat(),
                "check_in": format_hhmm(r.check_in),
                "check_out": format_hhmm(r.check_out),
            }
            for r in reversed(recent)
        ]

        return {
            "presentDays": self._attendance.count_present_days(user_id),
            "leavesTaken": self._leaves.count_for_user(user_id),
            "salaryStatus": salary_status,
            "salaryBreakdown": salary_rows,
            "attendanceTrend": trend,
            "todayStatus": self._attendance_service.today_status(user_id, now=now),
        }
