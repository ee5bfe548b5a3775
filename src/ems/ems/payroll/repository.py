from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import SalaryStatus
from .model import NewSalary, SalaryRecord, SalaryStats, SalaryUpdate


class SalaryRepository(Protocol):
    def get_by_id(self, salary_id: int) -> Optional[SalaryRecord]:
        raise NotImplementedError

    def find_for_period(
        self,
        *,
        user_id: int,
        month: str,
        year: int,
        exclude_id: Optional[int] = None,
    ) -> Optional[SalaryRecord]:
        raise NotImplementedError

    def user_ids_for_period(self, *, month: str, year: int) -> set[int]:
        raise NotImplementedError

    def insert(self, salary: NewSalary) -> int:
        """Insert one record; raises ConflictError if the period is taken."""

        raise NotImplementedError

    def insert_many(self, salaries: Sequence[NewSalary]) -> int:
        """Insert all records in one transaction (all or nothing)."""

        raise NotImplementedError

    def update(self, salary_id: int, changes: SalaryUpdate) -> bool:
        raise NotImplementedError

    def update_status(self, salary_ids: Sequence[int], status: SalaryStatus) -> int:
        raise NotImplementedError

    def delete_by_id(self, salary_id: int) -> bool:
        raise NotImplementedError

    def stats(self, *, month: Optional[str] = None, year: Optional[int] = None) -> SalaryStats:
        raise NotImplementedError

    def list_admin_view(self) -> Sequence[dict]:
        raise NotImplementedError

    def list_for_user(self, user_id: int) -> Sequence[dict]:
        raise NotImplementedError

    def latest_for_user(self, user_id: int, *, limit: int) -> Sequence[dict]:
        raise NotImplementedError

    def get_payslip(self, salary_id: int) -> Optional[dict]:
        raise NotImplementedError
