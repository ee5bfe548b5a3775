from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one day."""

    id: int
    user_id: int
    date: date
    check_in: Optional[time] = None
    check_out: Optional[time] = None

    @property
    def status(self) -> AttendanceStatus:
        return AttendanceStatus.PRESENT if self.check_in else AttendanceStatus.ABSENT

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "check_in": self.check_in.strftime("%H:%M:%S") if self.check_in else None,
            "check_out": self.check_out.strftime("%H:%M:%S") if self.check_out else None,
            "status": self.status.value,
        }
