from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import all_rows, db_cursor, first_row
from .model import EmployeeInput, User
from .repository import UserRepository

_USER_COLUMNS = "id, name, email, password, role, department_id, position_id, phone, photo, salary"


def _to_user(row: dict[str, Any]) -> User:
    return User(
        id=int(row["id"]),
        name=row["name"],
        email=row["email"],
        password_hash=row["password"],
        role=Role(row["role"]),
        department_id=row.get("department_id"),
        position_id=row.get("position_id"),
        phone=row.get("phone"),
        photo=row.get("photo"),
        salary=Decimal(str(row.get("salary") or 0)),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE id=%s", (int(user_id),))
            row = first_row(cur)
            return _to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE email=%s", (email,))
            row = first_row(cur)
            return _to_user(row) if row else None

    def email_taken(self, email: str, *, exclude_id: Optional[int] = None) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            if exclude_id is None:
                cur.execute("SELECT id FROM users WHERE email=%s", (email,))
            else:
                cur.execute("SELECT id FROM users WHERE email=%s AND id<>%s", (email, int(exclude_id)))
            return first_row(cur) is not None

    def list_employees(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_USER_COLUMNS} FROM users WHERE role=%s ORDER BY id",
                (Role.EMPLOYEE.value,),
            )
            return [_to_user(r) for r in all_rows(cur)]

    def list_admin_view(self) -> Sequence[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT u.id, u.name, u.email, u.department_id, u.position_id,
                       u.phone, u.photo, u.salary,
                       d.name AS department_name, p.name AS position_name
                FROM users u
                LEFT JOIN departments d ON d.id = u.department_id
                LEFT JOIN positions p ON p.id = u.position_id
                WHERE u.role=%s
                ORDER BY u.name
                """,
                (Role.EMPLOYEE.value,),
            )
            out: list[dict] = []
            for r in all_rows(cur):
                r["department"] = r.get("department_name")
                r["position"] = r.get("position_name")
                out.append(r)
            return out

    def get_profile(self, user_id: int) -> Optional[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT u.id, u.name, u.email, u.role, u.department_id, u.position_id,
                       u.phone, u.photo, u.salary,
                       d.name AS department, p.name AS position
                FROM users u
                LEFT JOIN departments d ON d.id = u.department_id
                LEFT JOIN positions p ON p.id = u.position_id
                WHERE u.id=%s
                """,
                (int(user_id),),
            )
            return first_row(cur)

    def create_employee(self, data: EmployeeInput, *, password_hash: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(name, email, password, role, department_id, position_id, phone, photo, salary)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    data.name,
                    data.email,
                    password_hash,
                    Role.EMPLOYEE.value,
                    data.department_id,
                    data.position_id,
                    data.phone,
                    data.photo,
                    data.salary,
                ),
            )
            return int(cur.lastrowid)

    def update_employee(self, user_id: int, data: EmployeeInput, *, password_hash: Optional[str] = None) -> bool:
        sets = ["name=%s", "email=%s", "department_id=%s", "position_id=%s", "phone=%s", "photo=%s", "salary=%s"]
        params: list[object] = [
            data.name,
            data.email,
            data.department_id,
            data.position_id,
            data.phone,
            data.photo,
            data.salary,
        ]
        if password_hash:
            sets.append("password=%s")
            params.append(password_hash)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE users SET {', '.join(sets)} WHERE id=%s", tuple(params + [int(user_id)]))
            return cur.rowcount > 0

    def update_profile(self, user_id: int, *, name: str, phone: Optional[str], photo: Optional[str]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE users SET name=%s, phone=%s, photo=%s WHERE id=%s",
                (name, phone, photo, int(user_id)),
            )
            return cur.rowcount > 0

    def update_password(self, user_id: int, *, password_hash: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET password=%s WHERE id=%s", (password_hash, int(user_id)))
            return cur.rowcount > 0

    def count_linked_records(self, user_id: int) -> dict[str, int]:
        counts: dict[str, int] = {}
        with db_cursor(self._conn_factory) as (_, cur):
            for table in ("salaries", "leaves", "attendance"):
                cur.execute(f"SELECT COUNT(*) AS n FROM {table} WHERE user_id=%s", (int(user_id),))
                row = first_row(cur)
                counts[table] = int(row["n"]) if row else 0
        return counts

    def delete_by_id(self, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM users WHERE id=%s", (int(user_id),))
            return cur.rowcount > 0
