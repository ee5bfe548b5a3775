from decimal import Decimal

import pytest

from src.ems.ems.payroll.calculator.progressive_calculator import (
    TAX_BANDS,
    ProgressiveTaxCalculator,
    compute_deductions,
)


@pytest.mark.parametrize("basic", [0, 1, 1000, 250000, 499999.5, 500000])
def test_first_band_is_one_percent(basic):
    amount = Decimal(str(basic))
    assert compute_deductions(amount) == amount * Decimal("0.01")


@pytest.mark.parametrize(
    "basic,expected",
    [
        (700000, 25000),
        (1000000, 85000),
        (2000000, 385000),
    ],
)
def test_band_boundaries(basic, expected):
    assert compute_deductions(Decimal(basic)) == Decimal(expected)


def test_income_above_last_band_is_not_taxed():
    assert compute_deductions(Decimal(3000000)) == Decimal(385000)


def test_partial_second_band():
    # 5000 from the first band + 50000 * 10%
    assert compute_deductions(Decimal(550000)) == Decimal(10000)


def test_negative_basic_yields_zero():
    assert compute_deductions(Decimal(-100)) == Decimal(0)


def test_accepts_plain_numbers():
    assert compute_deductions(700000) == Decimal(25000)


def test_band_table_is_immutable_tuple():
    assert isinstance(TAX_BANDS, tuple)
    assert sum(capacity for capacity, _ in TAX_BANDS) == Decimal(2000000)


def test_calculator_uses_custom_bands():
    calc = ProgressiveTaxCalculator(bands=[(Decimal(100), Decimal("0.5"))])
    assert calc.deductions(Decimal(300)) == Decimal(50)


def test_default_calculator_matches_function():
    calc = ProgressiveTaxCalculator()
    assert calc.deductions(Decimal(1000000)) == compute_deductions(Decimal(1000000))
