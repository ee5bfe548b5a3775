from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

from werkzeug.security import generate_password_hash

from .connection import DatabaseConnection, DBConfig

logger = logging.getLogger(__name__)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a SQL script on ';' outside quoted strings; skips '--' comment lines."""
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    lines = [ln for ln in sql.splitlines() if not ln.lstrip().startswith("--")]
    for ch in "\n".join(lines):
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
        elif ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _run_script(conn_factory: DatabaseConnection, path: Path) -> int:
    sql = _strip_create_db_and_use(path.read_text(encoding="utf-8"))
    conn = conn_factory.connect()
    count = 0
    try:
        cur = conn.cursor()
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
            count += 1
        conn.commit()
    finally:
        conn.close()
    return count


def ensure_database_exists(conn_factory: DatabaseConnection) -> None:
    database = conn_factory.config.database
    conn = conn_factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    conn_factory = DatabaseConnection(DBConfig.from_dict(db_config))
    ensure_database_exists(conn_factory)
    count = _run_script(conn_factory, Path(schema_path))
    logger.info("Applied %d schema statements from %s", count, schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    conn_factory = DatabaseConnection(DBConfig.from_dict(db_config))
    count = _run_script(conn_factory, Path(seed_path))
    logger.info("Applied %d seed statements from %s", count, seed_path)


def ensure_demo_users(db_config: dict) -> None:
    """Create (or refresh) the demo admin and employee accounts used by the seed data."""
    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    try:
        cur = conn.cursor(dictionary=True)

        def get_id(table: str, name: str) -> int:
            if table not in {"departments", "positions"}:
                raise RuntimeError(f"Unsupported lookup table: {table}")
            cur.execute(f"SELECT id FROM {table} WHERE name=%s", (name,))
            row = cur.fetchone()
            if not row:
                raise RuntimeError(f"Missing {table} row for name={name}")
            return int(row["id"])

        dept_it = get_id("departments", "Engineering")
        dept_hr = get_id("departments", "Human Resources")
        pos_dev = get_id("positions", "Software Engineer")
        pos_mgr = get_id("positions", "HR Manager")

        def upsert_user(name: str, email: str, password: str, role: str, dept_id: int, pos_id: int, salary: int) -> None:
            password_hash = generate_password_hash(password)
            cur.execute("SELECT id FROM users WHERE email=%s", (email,))
            if cur.fetchone():
                cur.execute(
                    """
                    UPDATE users
                    SET name=%s, password=%s, role=%s, department_id=%s, position_id=%s, salary=%s
                    WHERE email=%s
                    """,
                    (name, password_hash, role, dept_id, pos_id, salary, email),
                )
            else:
                cur.execute(
                    """
                    INSERT INTO users (name, email, password, role, department_id, position_id, salary)
                    VALUES (%s, %s, %s, %s, %s, %s, %s)
                    """,
                    (name, email, password_hash, role, dept_id, pos_id, salary),
                )

        upsert_user("Admin Demo", "admin@ems.local", "admin123", "admin", dept_hr, pos_mgr, 0)
        upsert_user("Sita Sharma", "sita@ems.local", "employee123", "employee", dept_it, pos_dev, 750000)
        upsert_user("Ram Thapa", "ram@ems.local", "employee123", "employee", dept_hr, pos_mgr, 450000)

        conn.commit()
    finally:
        conn.close()


def list_tables(conn_factory: DatabaseConnection) -> list[str]:
    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
