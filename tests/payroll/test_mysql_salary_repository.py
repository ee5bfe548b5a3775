from __future__ import annotations

from decimal import Decimal

import pytest
from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError

from src.ems.ems.core.enums import SalaryStatus
from src.ems.ems.core.exceptions import ConflictError
from src.ems.ems.payroll.model import NewSalary, SalaryUpdate
from src.ems.ems.payroll.mysql_salary_repository import MySQLSalaryRepository


class StubCursor:
    def __init__(self, error=None, row=None):
        self.error = error
        self.row = row
        self.executed: list[str] = []
        self.lastrowid = 1
        self.rowcount = 1

    def execute(self, sql, params=()):
        self.executed.append(sql)
        if self.error is not None:
            raise self.error

    def executemany(self, sql, seq):
        self.execute(sql)

    def fetchone(self):
        return self.row

    def fetchall(self):
        return [self.row] if self.row else []

    def close(self):
        pass


class StubConnection:
    def __init__(self, cursor):
        self._cursor = cursor
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=True):
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class StubConnFactory:
    def __init__(self, cursor):
        self.connections: list[StubConnection] = []
        self._cursor = cursor

    def connect(self):
        conn = StubConnection(self._cursor)
        self.connections.append(conn)
        return conn


def _repo(error=None, row=None):
    factory = StubConnFactory(StubCursor(error=error, row=row))
    return MySQLSalaryRepository(factory), factory


def _salary(user_id=1):
    return NewSalary(
        user_id=user_id,
        month="May",
        year=2025,
        basic=Decimal(1000),
        bonus=Decimal(0),
        deductions=Decimal(10),
    )


def _duplicate():
    return IntegrityError(msg="Duplicate entry '1-May-2025'", errno=errorcode.ER_DUP_ENTRY)


def _foreign_key():
    return IntegrityError(msg="Cannot add or update a child row", errno=errorcode.ER_NO_REFERENCED_ROW_2)


def test_insert_duplicate_key_becomes_conflict_and_rolls_back():
    repo, factory = _repo(error=_duplicate())

    with pytest.raises(ConflictError):
        repo.insert(_salary())

    conn = factory.connections[-1]
    assert conn.rolled_back
    assert not conn.committed
    assert conn.closed


def test_insert_many_duplicate_key_rolls_back_whole_batch():
    repo, factory = _repo(error=_duplicate())

    with pytest.raises(ConflictError):
        repo.insert_many([_salary(1), _salary(2)])

    assert len(factory.connections) == 1
    assert factory.connections[0].rolled_back
    assert not factory.connections[0].committed


def test_update_duplicate_key_becomes_conflict():
    repo, factory = _repo(error=_duplicate())

    with pytest.raises(ConflictError):
        repo.update(1, SalaryUpdate(month="June"))
    assert factory.connections[-1].rolled_back


@pytest.mark.parametrize(
    "call",
    [
        lambda repo: repo.insert(_salary()),
        lambda repo: repo.insert_many([_salary()]),
        lambda repo: repo.update(1, SalaryUpdate(user_id=99)),
    ],
)
def test_other_integrity_errors_propagate(call):
    repo, factory = _repo(error=_foreign_key())

    with pytest.raises(IntegrityError) as excinfo:
        call(repo)

    assert not isinstance(excinfo.value, ConflictError)
    assert factory.connections[-1].rolled_back


def test_successful_insert_commits():
    repo, factory = _repo()

    assert repo.insert(_salary()) == 1
    assert factory.connections[-1].committed
    assert not factory.connections[-1].rolled_back


def test_insert_many_with_nothing_to_write_skips_the_database():
    repo, factory = _repo()

    assert repo.insert_many([]) == 0
    assert factory.connections == []


def test_stats_on_empty_table_is_all_zero():
    row = {
        "total_records": 0,
        "paid_count": 0,
        "unpaid_count": 0,
        "total_amount": 0,
        "paid_amount": 0,
        "unpaid_amount": 0,
    }
    repo, _ = _repo(row=row)

    stats = repo.stats()

    assert (stats.total_records, stats.paid_count, stats.unpaid_count) == (0, 0, 0)
    assert stats.total_amount == stats.paid_amount == stats.unpaid_amount == Decimal(0)


def test_bulk_status_uses_one_placeholder_per_id():
    repo, factory = _repo()

    repo.update_status([3, 4, 5], SalaryStatus.PAID)

    assert "IN (%s, %s, %s)" in factory.connections[-1]._cursor.executed[-1]
