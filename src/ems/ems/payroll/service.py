from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional, Sequence

from ..common.validators import coerce_amount, normalize_month, normalize_year, require_int
from ..core.enums import Role, SalaryStatus
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..users.model import User
from ..users.repository import UserRepository
from .calculator.base import DeductionCalculator
from .calculator.progressive_calculator import ProgressiveTaxCalculator
from .model import BulkGenerationResult, GeneratedSalary, NewSalary, SalaryStats, SalaryUpdate
from .repository import SalaryRepository

logger = logging.getLogger(__name__)

_CENT = Decimal("0.01")
_DUPLICATE_PERIOD = "Salary record already exists for this employee in this period"


def parse_status(value: Any) -> SalaryStatus:
    try:
        return SalaryStatus(str(value).strip().lower())
    except ValueError:
        raise ValidationError("Invalid status. Must be 'paid' or 'unpaid'")


class PayrollService:
    """Salary records: creation, bulk generation, status changes and statistics.

    Deductions are a snapshot computed from the basic salary at the moment the
    record is written; later changes to an employee's salary never touch old
    records.
    """

    def __init__(
        self,
        salaries: SalaryRepository,
        users: UserRepository,
        *,
        calculator: Optional[DeductionCalculator] = None,
    ):
        self._salaries = salaries
        self._users = users
        self._calculator = calculator or ProgressiveTaxCalculator()

    def _require_employee(self, user_id: int) -> User:
        employee = self._users.get_by_id(user_id)
        if not employee or employee.role != Role.EMPLOYEE:
            raise NotFoundError("Employee not found")
        return employee

    def create_salary(
        self,
        *,
        user_id: Any,
        month: Any,
        year: Any,
        bonus: Any = None,
        status: Any = None,
    ) -> NewSalary:
        if not user_id or not month or not year:
            raise ValidationError("Please provide user_id, month, and year")
        user_id = require_int(user_id, "user_id")
        month = normalize_month(month)
        year = normalize_year(year)
        salary_status = parse_status(status) if status else SalaryStatus.UNPAID

        employee = self._require_employee(user_id)

        if self._salaries.find_for_period(user_id=user_id, month=month, year=year):
            raise ConflictError(_DUPLICATE_PERIOD)

        basic = coerce_amount(employee.salary)
        record = NewSalary(
            user_id=user_id,
            month=month,
            year=year,
            basic=basic,
            bonus=coerce_amount(bonus),
            deductions=self._calculator.deductions(basic),
            status=salary_status,
        )
        # The unique key on (user_id, month, year) still guards a concurrent insert.
        self._salaries.insert(record)
        logger.info(
            "Salary created for user %s %s/%s: basic=%s bonus=%s deductions=%s",
            user_id, month, year, record.basic, record.bonus, record.deductions,
        )
        return record

    def bulk_generate(self, *, month: Any, year: Any, bonus_percentage: Any = None) -> BulkGenerationResult:
        if not month or not year:
            raise ValidationError("Please provide month and year")
        month = normalize_month(month)
        year = normalize_year(year)
        pct = coerce_amount(bonus_percentage)

        employees = list(self._users.list_employees())
        if not employees:
            raise ValidationError("No employees found")

        existing = self._salaries.user_ids_for_period(month=month, year=year)
        pending = [e for e in employees if e.id not in existing]
        if not pending:
            raise ValidationError("Salary records already exist for all employees in this period")

        rows: list[NewSalary] = []
        details: list[GeneratedSalary] = []
        for emp in pending:
            basic = coerce_amount(emp.salary)
            # DECIMAL(12,2) column; round here so details match the stored row.
            bonus = (basic * pct / 100).quantize(_CENT, rounding=ROUND_HALF_UP) if pct else Decimal("0")
            deductions = self._calculator.deductions(basic)
            rows.append(NewSalary(user_id=emp.id, month=month, year=year, basic=basic, bonus=bonus, deductions=deductions))
            details.append(GeneratedSalary(name=emp.name, basic=basic, bonus=bonus, deductions=deductions))

        self._salaries.insert_many(rows)
        skipped = len(employees) - len(pending)
        logger.info("Generated %d salary records for %s/%s (skipped %d)", len(rows), month, year, skipped)
        return BulkGenerationResult(month=month, year=year, generated=len(rows), skipped=skipped, details=details)

    def bulk_update_status(self, *, salary_ids: Any, status: Any) -> int:
        if not isinstance(salary_ids, (list, tuple)) or not salary_ids:
            raise ValidationError("Please provide salary IDs array")
        salary_status = parse_status(status)
        ids = [require_int(i, "salary id") for i in salary_ids]

        updated = self._salaries.update_status(ids, salary_status)
        logger.info("Marked %d of %d salary records as %s", updated, len(ids), salary_status.value)
        return updated

    def update_salary(self, salary_id: int, body: dict[str, Any]) -> None:
        current = self._salaries.get_by_id(salary_id)
        if not current:
            raise NotFoundError("Salary record not found")

        changes = SalaryUpdate()
        if body.get("user_id"):
            changes.user_id = require_int(body["user_id"], "user_id")
            self._require_employee(changes.user_id)
        if body.get("month"):
            changes.month = normalize_month(body["month"])
        if body.get("year"):
            changes.year = normalize_year(body["year"])
        if body.get("basic") is not None:
            changes.basic = coerce_amount(body["basic"])
            changes.deductions = self._calculator.deductions(changes.basic)
        if body.get("bonus") is not None:
            changes.bonus = coerce_amount(body["bonus"])
        if body.get("status"):
            changes.status = parse_status(body["status"])

        if changes.is_empty():
            raise ValidationError("No fields to update")

        if changes.user_id or changes.month or changes.year:
            duplicate = self._salaries.find_for_period(
                user_id=changes.user_id or current.user_id,
                month=changes.month or current.month,
                year=changes.year or current.year,
                exclude_id=salary_id,
            )
            if duplicate:
                raise ConflictError(_DUPLICATE_PERIOD)

        self._salaries.update(salary_id, changes)

    def delete_salary(self, salary_id: int) -> None:
        if not self._salaries.get_by_id(salary_id):
            raise NotFoundError("Salary record not found")
        self._salaries.delete_by_id(salary_id)

    def stats(self, *, month: Any = None, year: Any = None) -> SalaryStats:
        if month and year:
            return self._salaries.stats(month=normalize_month(month), year=normalize_year(year))
        return self._salaries.stats()

    def list_salaries(self) -> Sequence[dict]:
        return self._salaries.list_admin_view()

    def list_for_employee(self, user_id: int) -> Sequence[dict]:
        return self._salaries.list_for_user(user_id)

    def payslip(self, salary_id: int) -> dict:
        slip = self._salaries.get_payslip(salary_id)
        if not slip:
            raise NotFoundError("Salary record not found")
        return slip
