from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from ..core.enums import SalaryStatus


@dataclass(frozen=True)
class SalaryRecord:
    """Domain entity: one employee's salary for one period (month, year)."""

    id: int
    user_id: int
    month: str
    year: int
    basic: Decimal
    bonus: Decimal
    deductions: Decimal
    status: SalaryStatus

    @property
    def net(self) -> Decimal:
        return self.basic + self.bonus - self.deductions


@dataclass(frozen=True)
class NewSalary:
    """Computed field values for a record that has not been persisted yet."""

    user_id: int
    month: str
    year: int
    basic: Decimal
    bonus: Decimal
    deductions: Decimal
    status: SalaryStatus = SalaryStatus.UNPAID


@dataclass
class SalaryUpdate:
    """Partial update; None means 'leave unchanged'."""

    user_id: Optional[int] = None
    month: Optional[str] = None
    year: Optional[int] = None
    basic: Optional[Decimal] = None
    bonus: Optional[Decimal] = None
    deductions: Optional[Decimal] = None
    status: Optional[SalaryStatus] = None

    def is_empty(self) -> bool:
        return all(
            v is None
            for v in (self.user_id, self.month, self.year, self.basic, self.bonus, self.deductions, self.status)
        )


@dataclass(frozen=True)
class GeneratedSalary:
    name: str
    basic: Decimal
    bonus: Decimal
    deductions: Decimal


@dataclass(frozen=True)
class BulkGenerationResult:
    month: str
    year: int
    generated: int
    skipped: int
    details: list[GeneratedSalary] = field(default_factory=list)


@dataclass(frozen=True)
class SalaryStats:
    total_records: int = 0
    paid_count: int = 0
    unpaid_count: int = 0
    total_amount: Decimal = Decimal("0")
    paid_amount: Decimal = Decimal("0")
    unpaid_amount: Decimal = Decimal("0")
