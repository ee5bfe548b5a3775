from __future__ import annotations

from datetime import date
from typing import Any, Optional, Sequence

from ..core.enums import LeaveStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import all_rows, db_cursor, first_row
from .model import LeaveRequest
from .repository import LeaveRepository


def _to_leave(r: dict[str, Any]) -> LeaveRequest:
    return LeaveRequest(
        id=int(r["id"]),
        user_id=int(r["user_id"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        reason=r["reason"],
        status=LeaveStatus(r["status"]),
        created_at=r.get("created_at"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create_leave(self, *, user_id: int, start_date: date, end_date: date, reason: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leaves(user_id, start_date, end_date, reason, status)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (int(user_id), start_date, end_date, reason, LeaveStatus.PENDING.value),
            )
            return int(cur.lastrowid)

    def get_by_id(self, leave_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, user_id, start_date, end_date, reason, status, created_at
                FROM leaves WHERE id=%s
                """,
                (int(leave_id),),
            )
            r = first_row(cur)
            return _to_leave(r) if r else None

    def list_for_user(self, user_id: int) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, user_id, start_date, end_date, reason, status, created_at
                FROM leaves
                WHERE user_id=%s
                ORDER BY start_date DESC
                """,
                (int(user_id),),
            )
            return [_to_leave(r) for r in all_rows(cur)]

    def count_for_user(self, user_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM leaves WHERE user_id=%s", (int(user_id),))
            row = first_row(cur)
            return int(row["n"]) if row else 0

    def list_admin_view(self, *, status: Optional[LeaveStatus] = None) -> Sequence[dict]:
        clauses = ["1=1"]
        params: list[object] = []
        if status is not None:
            clauses.append("l.status=%s")
            params.append(status.value)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT l.id, l.user_id, l.start_date, l.end_date, l.reason, l.status, l.created_at, u.name
                FROM leaves l
                JOIN users u ON u.id = l.user_id
                WHERE {" AND ".join(clauses)}
                ORDER BY l.created_at DESC
                """,
                tuple(params),
            )
            return all_rows(cur)

    def set_status(self, *, leave_id: int, status: LeaveStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE leaves SET status=%s WHERE id=%s", (status.value, int(leave_id)))
            return cur.rowcount > 0
