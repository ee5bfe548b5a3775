from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..common.datetime_utils import require_iso_date
from ..common.validators import require_non_empty
from ..core.enums import LeaveStatus
from ..core.exceptions import NotFoundError, ValidationError
from .model import LeaveRequest
from .repository import LeaveRepository

logger = logging.getLogger(__name__)


class LeaveService:
    def __init__(self, leaves: LeaveRepository):
        self._leaves = leaves

    def apply(self, *, user_id: int, start_date: Any, end_date: Any, reason: Optional[str]) -> int:
        start = require_iso_date(start_date, "start_date")
        end = require_iso_date(end_date, "end_date")
        if end < start:
            raise ValidationError("end_date cannot be before start_date")
        reason = require_non_empty(reason, "reason")

        leave_id = self._leaves.create_leave(user_id=int(user_id), start_date=start, end_date=end, reason=reason)
        logger.info("Leave %s requested by user %s (%s..%s)", leave_id, user_id, start, end)
        return leave_id

    def list_mine(self, user_id: int) -> Sequence[LeaveRequest]:
        return self._leaves.list_for_user(int(user_id))

    def list_all(self, *, status: Optional[str] = None) -> Sequence[dict]:
        status_filter = self.parse_status(status) if status else None
        return self._leaves.list_admin_view(status=status_filter)

    def decide(self, leave_id: int, status: Any) -> None:
        new_status = self.parse_status(status)
        if not self._leaves.get_by_id(leave_id):
            raise NotFoundError("Leave request not found")
        self._leaves.set_status(leave_id=leave_id, status=new_status)
        logger.info("Leave %s set to %s", leave_id, new_status.value)

    @staticmethod
    def parse_status(value: Any) -> LeaveStatus:
        try:
            return LeaveStatus(str(value or "").strip().lower())
        except ValueError:
            raise ValidationError("Invalid status")
