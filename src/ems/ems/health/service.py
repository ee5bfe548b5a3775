from __future__ import annotations

from ..database.bootstrap import list_tables
from ..database.connection import DatabaseConnection
from ..database.mysql_base import all_rows, db_cursor, first_row


class HealthService:
    """Database connectivity probe for administrators."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def check(self) -> dict:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT 1 AS ok")
            first_row(cur)
            cur.execute("SELECT role, COUNT(*) AS count FROM users GROUP BY role")
            user_counts = {r["role"]: int(r["count"]) for r in all_rows(cur)}
            cur.execute("SELECT COUNT(*) AS n FROM departments")
            departments = int(first_row(cur)["n"])
            cur.execute("SELECT COUNT(*) AS n FROM positions")
            positions = int(first_row(cur)["n"])

        return {
            "status": "Database connection successful",
            "tables": list_tables(self._conn_factory),
            "userCounts": user_counts,
            "departmentCount": departments,
            "positionCount": positions,
        }
