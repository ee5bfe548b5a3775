from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus
from .model import LeaveRequest


class LeaveRepository(Protocol):
    def create_leave(self, *, user_id: int, start_date: date, end_date: date, reason: str) -> int:
        raise NotImplementedError

    def get_by_id(self, leave_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_for_user(self, user_id: int) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def count_for_user(self, user_id: int) -> int:
        raise NotImplementedError

    def list_admin_view(self, *, status: Optional[LeaveStatus] = None) -> Sequence[dict]:
        """Return rows joined with the employee name."""

        raise NotImplementedError

    def set_status(self, *, leave_id: int, status: LeaveStatus) -> bool:
        raise NotImplementedError
