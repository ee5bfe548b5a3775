from __future__ import annotations

from datetime import date, time
from typing import Any, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import all_rows, as_time, db_cursor, first_row
from .model import AttendanceRecord
from .repository import AttendanceRepository


def _to_record(r: dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        id=int(r["id"]),
        user_id=int(r["user_id"]),
        date=r["date"],
        check_in=as_time(r.get("check_in")),
        check_out=as_time(r.get("check_out")),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, user_id, date, check_in, check_out
                FROM attendance
                WHERE user_id=%s AND date=%s
                """,
                (int(user_id), work_date),
            )
            r = first_row(cur)
            return _to_record(r) if r else None

    def get_recent_for_user(self, user_id: int, limit: Optional[int] = None) -> Sequence[AttendanceRecord]:
        sql = """
            SELECT id, user_id, date, check_in, check_out
            FROM attendance
            WHERE user_id=%s
            ORDER BY date DESC
        """
        params: tuple = (int(user_id),)
        if limit is not None:
            sql += " LIMIT %s"
            params = (int(user_id), int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return [_to_record(r) for r in all_rows(cur)]

    def count_present_days(self, user_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT COUNT(*) AS n FROM attendance WHERE user_id=%s AND check_in IS NOT NULL",
                (int(user_id),),
            )
            row = first_row(cur)
            return int(row["n"]) if row else 0

    def create_checkin(self, *, user_id: int, work_date: date, check_in: time) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO attendance(user_id, date, check_in) VALUES(%s,%s,%s)",
                (int(user_id), work_date, check_in),
            )
            return int(cur.lastrowid)

    def set_checkin(self, *, attendance_id: int, check_in: time) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE attendance SET check_in=%s WHERE id=%s", (check_in, int(attendance_id)))
            return cur.rowcount > 0

    def set_checkout(self, *, attendance_id: int, check_out: time) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE attendance SET check_out=%s WHERE id=%s", (check_out, int(attendance_id)))
            return cur.rowcount > 0

    def list_admin_view(self) -> Sequence[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT a.id, a.user_id, a.date, a.check_in, a.check_out, u.name
                FROM attendance a
                JOIN users u ON u.id = a.user_id
                ORDER BY a.date DESC
                """
            )
            out: list[dict] = []
            for r in all_rows(cur):
                row = _to_record(r).to_dict()
                row["user_id"] = int(r["user_id"])
                row["name"] = r["name"]
                out.append(row)
            return out

    def admin_update_status(self, *, attendance_id: int, status: str) -> bool:
        # attendance.status is write-only: reads derive present/absent from check_in.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE attendance SET status=%s WHERE id=%s", (status, int(attendance_id)))
            return cur.rowcount > 0
