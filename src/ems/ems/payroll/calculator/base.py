from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal


class DeductionCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll deductions)."""

    @abstractmethod
    def deductions(self, basic: Decimal) -> Decimal:
        raise NotImplementedError
