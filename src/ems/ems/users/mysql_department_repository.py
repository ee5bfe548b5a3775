from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import all_rows, db_cursor
from .department_model import Department, Position
from .department_repository import DepartmentRepository, PositionRepository


class MySQLDepartmentRepository(DepartmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Department]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name FROM departments ORDER BY name")
            rows = all_rows(cur)
            return [Department(id=int(r["id"]), name=r["name"]) for r in rows]

    def create(self, *, name: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO departments(name) VALUES(%s)", (name,))
            return int(cur.lastrowid)

    def delete_by_id(self, dept_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM departments WHERE id=%s", (int(dept_id),))
            return cur.rowcount > 0


class MySQLPositionRepository(PositionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Position]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name FROM positions ORDER BY name")
            rows = all_rows(cur)
            return [Position(id=int(r["id"]), name=r["name"]) for r in rows]

    def create(self, *, name: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO positions(name) VALUES(%s)", (name,))
            return int(cur.lastrowid)

    def delete_by_id(self, position_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM positions WHERE id=%s", (int(position_id),))
            return cur.rowcount > 0
