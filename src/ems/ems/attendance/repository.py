from __future__ import annotations

from datetime import date, time
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_recent_for_user(self, user_id: int, limit: Optional[int] = None) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def count_present_days(self, user_id: int) -> int:
        raise NotImplementedError

    def create_checkin(self, *, user_id: int, work_date: date, check_in: time) -> int:
        raise NotImplementedError

    def set_checkin(self, *, attendance_id: int, check_in: time) -> bool:
        raise NotImplementedError

    def set_checkout(self, *, attendance_id: int, check_out: time) -> bool:
        raise NotImplementedError

    def list_admin_view(self) -> Sequence[dict]:
        raise NotImplementedError

    def admin_update_status(self, *, attendance_id: int, status: str) -> bool:
        """Admin override of the stored status column."""

        raise NotImplementedError
