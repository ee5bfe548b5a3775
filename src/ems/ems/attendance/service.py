from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_TIMEZONE
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError, ValidationError
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Daily check-in/check-out. A day is 'present' once a check-in time exists."""

    def __init__(self, attendance: AttendanceRepository, *, tz_name: str = DEFAULT_TIMEZONE):
        self._attendance = attendance
        self._tz_name = tz_name

    def _now(self, now: Optional[datetime]) -> datetime:
        return now or now_local(self._tz_name)

    def check_in(self, user_id: int, *, now: Optional[datetime] = None) -> None:
        now = self._now(now)
        today = now.date()
        check_in = now.time().replace(microsecond=0)

        existing = self._attendance.get_for_user_and_date(user_id, today)
        if existing and existing.check_in:
            raise ValidationError("Already checked in today")

        if existing:
            self._attendance.set_checkin(attendance_id=existing.id, check_in=check_in)
        else:
            self._attendance.create_checkin(user_id=user_id, work_date=today, check_in=check_in)
        logger.debug("User %s checked in at %s %s", user_id, today, check_in)

    def check_out(self, user_id: int, *, now: Optional[datetime] = None) -> None:
        now = self._now(now)
        today = now.date()

        record = self._attendance.get_for_user_and_date(user_id, today)
        if not record or not record.check_in:
            raise ValidationError("You need to check in first")
        if record.check_out:
            raise ValidationError("Already checked out today")

        self._attendance.set_checkout(attendance_id=record.id, check_out=now.time().replace(microsecond=0))

    def today_status(self, user_id: int, *, now: Optional[datetime] = None) -> dict:
        record = self._attendance.get_for_user_and_date(user_id, self._now(now).date())
        if not record:
            return {"checkedIn": False, "checkedOut": False}
        return {"checkedIn": record.check_in is not None, "checkedOut": record.check_out is not None}

    def history(self, user_id: int) -> list[dict]:
        return [r.to_dict() for r in self._attendance.get_recent_for_user(user_id)]

    def list_all(self) -> Sequence[dict]:
        return self._attendance.list_admin_view()

    def update_status(self, attendance_id: int, status: Optional[str]) -> None:
        try:
            value = AttendanceStatus(str(status or "").strip().lower())
        except ValueError:
            raise ValidationError("Invalid status. Must be 'present' or 'absent'")
        if not self._attendance.admin_update_status(attendance_id=attendance_id, status=value.value):
            raise NotFoundError("Attendance record not found")
