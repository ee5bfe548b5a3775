from __future__ import annotations

from decimal import Decimal
from typing import Sequence, Tuple

from .base import DeductionCalculator

TaxBand = Tuple[Decimal, Decimal]

# (capacity, rate), applied in order. Income above the last band is not taxed.
TAX_BANDS: Tuple[TaxBand, ...] = (
    (Decimal("500000"), Decimal("0.01")),
    (Decimal("200000"), Decimal("0.10")),
    (Decimal("300000"), Decimal("0.20")),
    (Decimal("1000000"), Decimal("0.30")),
)


def compute_deductions(basic: Decimal, bands: Sequence[TaxBand] = TAX_BANDS) -> Decimal:
    """Progressive tax on a basic salary. No rounding; callers round for display."""
    remaining = basic if isinstance(basic, Decimal) else Decimal(str(basic))
    deduction = Decimal("0")
    if remaining <= 0:
        return deduction

    for capacity, rate in bands:
        taxed = min(remaining, capacity)
        deduction += taxed * rate
        remaining -= taxed
        if remaining <= 0:
            break
    return deduction


class ProgressiveTaxCalculator(DeductionCalculator):
    """Standard rule: fixed progressive bands over the basic salary."""

    def __init__(self, bands: Sequence[TaxBand] = TAX_BANDS):
        self._bands = tuple(bands)

    def deductions(self, basic: Decimal) -> Decimal:
        return compute_deductions(basic, self._bands)
