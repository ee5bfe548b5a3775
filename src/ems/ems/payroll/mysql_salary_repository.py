from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..core.enums import MONTH_NAMES, Role, SalaryStatus
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import all_rows, db_cursor, first_row, in_placeholders, is_duplicate_key
from .model import NewSalary, SalaryRecord, SalaryStats, SalaryUpdate
from .repository import SalaryRepository

logger = logging.getLogger(__name__)

_NET = "s.basic + COALESCE(s.bonus, 0) - COALESCE(s.deductions, 0)"
_MONTH_ORDER = "FIELD(s.month, " + ", ".join(f"'{m}'" for m in MONTH_NAMES) + ")"

_INSERT_SQL = """
    INSERT INTO salaries (user_id, month, year, basic, bonus, deductions, status)
    VALUES (%s, %s, %s, %s, %s, %s, %s)
"""


def _dec(value: Any) -> Decimal:
    return Decimal(str(value)) if value is not None else Decimal("0")


def _to_record(row: dict[str, Any]) -> SalaryRecord:
    return SalaryRecord(
        id=int(row["id"]),
        user_id=int(row["user_id"]),
        month=row["month"],
        year=int(row["year"]),
        basic=_dec(row.get("basic")),
        bonus=_dec(row.get("bonus")),
        deductions=_dec(row.get("deductions")),
        status=SalaryStatus(row["status"]),
    )


def _params(s: NewSalary) -> tuple:
    return (s.user_id, s.month, s.year, s.basic, s.bonus, s.deductions, s.status.value)


class MySQLSalaryRepository(SalaryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, salary_id: int) -> Optional[SalaryRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, user_id, month, year, basic, bonus, deductions, status
                FROM salaries WHERE id=%s
                """,
                (int(salary_id),),
            )
            row = first_row(cur)
            return _to_record(row) if row else None

    def find_for_period(
        self,
        *,
        user_id: int,
        month: str,
        year: int,
        exclude_id: Optional[int] = None,
    ) -> Optional[SalaryRecord]:
        sql = """
            SELECT id, user_id, month, year, basic, bonus, deductions, status
            FROM salaries
            WHERE user_id=%s AND month=%s AND year=%s
        """
        params: list[object] = [int(user_id), month, int(year)]
        if exclude_id is not None:
            sql += " AND id<>%s"
            params.append(int(exclude_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            row = first_row(cur)
            return _to_record(row) if row else None

    def user_ids_for_period(self, *, month: str, year: int) -> set[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT user_id FROM salaries WHERE month=%s AND year=%s", (month, int(year)))
            return {int(r["user_id"]) for r in all_rows(cur)}

    def insert(self, salary: NewSalary) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(_INSERT_SQL, _params(salary))
                return int(cur.lastrowid)
        except IntegrityError as e:
            if is_duplicate_key(e):
                raise ConflictError("Salary record already exists for this employee in this period") from e
            raise

    def insert_many(self, salaries: Sequence[NewSalary]) -> int:
        if not salaries:
            return 0
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                # mysql-connector rewrites this into a single multi-row INSERT.
                cur.executemany(_INSERT_SQL, [_params(s) for s in salaries])
                return len(salaries)
        except IntegrityError as e:
            if is_duplicate_key(e):
                logger.warning("Bulk salary insert rolled back: %s", e)
                raise ConflictError("Salary records were created concurrently for this period, nothing generated") from e
            raise

    def update(self, salary_id: int, changes: SalaryUpdate) -> bool:
        sets: list[str] = []
        params: list[object] = []
        for column in ("user_id", "month", "year", "basic", "deductions", "bonus"):
            value = getattr(changes, column)
            if value is not None:
                sets.append(f"{column}=%s")
                params.append(value)
        if changes.status is not None:
            sets.append("status=%s")
            params.append(changes.status.value)
        if not sets:
            return False

        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(f"UPDATE salaries SET {', '.join(sets)} WHERE id=%s", tuple(params + [int(salary_id)]))
                return cur.rowcount > 0
        except IntegrityError as e:
            if is_duplicate_key(e):
                raise ConflictError("Salary record already exists for this employee in this period") from e
            raise

    def update_status(self, salary_ids: Sequence[int], status: SalaryStatus) -> int:
        ids = [int(i) for i in salary_ids]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE salaries SET status=%s WHERE id IN ({in_placeholders(ids)})",
                tuple([status.value] + ids),
            )
            return int(cur.rowcount)

    def delete_by_id(self, salary_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM salaries WHERE id=%s", (int(salary_id),))
            return cur.rowcount > 0

    def stats(self, *, month: Optional[str] = None, year: Optional[int] = None) -> SalaryStats:
        where = ""
        params: tuple = ()
        if month and year:
            where = "WHERE s.month=%s AND s.year=%s"
            params = (month, int(year))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    COUNT(*) AS total_records,
                    COUNT(CASE WHEN s.status='paid' THEN 1 END) AS paid_count,
                    COUNT(CASE WHEN s.status='unpaid' THEN 1 END) AS unpaid_count,
                    COALESCE(SUM({_NET}), 0) AS total_amount,
                    COALESCE(SUM(CASE WHEN s.status='paid' THEN {_NET} ELSE 0 END), 0) AS paid_amount,
                    COALESCE(SUM(CASE WHEN s.status='unpaid' THEN {_NET} ELSE 0 END), 0) AS unpaid_amount
                FROM salaries s
                JOIN users u ON u.id = s.user_id
                {where}
                """,
                params,
            )
            row = first_row(cur)
            if not row:
                return SalaryStats()
            return SalaryStats(
                total_records=int(row["total_records"] or 0),
                paid_count=int(row["paid_count"] or 0),
                unpaid_count=int(row["unpaid_count"] or 0),
                total_amount=_dec(row["total_amount"]),
                paid_amount=_dec(row["paid_amount"]),
                unpaid_amount=_dec(row["unpaid_amount"]),
            )

    def list_admin_view(self) -> Sequence[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT s.*, u.name AS employee_name, u.email,
                       d.name AS department_name, p.name AS position_name
                FROM salaries s
                JOIN users u ON u.id = s.user_id
                LEFT JOIN departments d ON d.id = u.department_id
                LEFT JOIN positions p ON p.id = u.position_id
                WHERE u.role=%s
                ORDER BY s.year DESC, {_MONTH_ORDER} DESC, u.name ASC
                """,
                (Role.EMPLOYEE.value,),
            )
            return all_rows(cur)

    def list_for_user(self, user_id: int) -> Sequence[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT s.*, ({_NET}) AS net_salary
                FROM salaries s
                WHERE s.user_id=%s
                ORDER BY s.year DESC, {_MONTH_ORDER} DESC
                """,
                (int(user_id),),
            )
            return all_rows(cur)

    def latest_for_user(self, user_id: int, *, limit: int) -> Sequence[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT s.month, s.year, s.basic, s.bonus, s.deductions, s.status
                FROM salaries s
                WHERE s.user_id=%s
                ORDER BY s.year DESC, {_MONTH_ORDER} DESC, s.id DESC
                LIMIT %s
                """,
                (int(user_id), int(limit)),
            )
            return all_rows(cur)

    def get_payslip(self, salary_id: int) -> Optional[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT s.*, u.name AS employee_name, u.email, u.phone,
                       d.name AS department_name, p.name AS position_name,
                       ({_NET}) AS net_salary
                FROM salaries s
                JOIN users u ON u.id = s.user_id
                LEFT JOIN departments d ON d.id = u.department_id
                LEFT JOIN positions p ON p.id = u.position_id
                WHERE s.id=%s
                """,
                (int(salary_id),),
            )
            return first_row(cur)
