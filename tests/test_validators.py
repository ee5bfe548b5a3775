from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from src.ems.ems.common.datetime_utils import format_hhmm, require_iso_date
from src.ems.ems.common.validators import (
    coerce_amount,
    normalize_month,
    normalize_year,
    require_int,
)
from src.ems.ems.core.exceptions import ValidationError


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("1500", Decimal(1500)),
        (250.5, Decimal("250.5")),
        ("", Decimal(0)),
        (None, Decimal(0)),
        ("abc", Decimal(0)),
        ("-10", Decimal(0)),
        ("NaN", Decimal(0)),
    ],
)
def test_coerce_amount(raw, expected):
    assert coerce_amount(raw) == expected


@pytest.mark.parametrize("raw,expected", [("january", "January"), ("MAY", "May"), (3, "March"), ("12", "December")])
def test_normalize_month(raw, expected):
    assert normalize_month(raw) == expected


@pytest.mark.parametrize("raw", ["", None, "13", "0", "Smarch"])
def test_normalize_month_rejects(raw):
    with pytest.raises(ValidationError):
        normalize_month(raw)


def test_normalize_year():
    assert normalize_year("2025") == 2025
    with pytest.raises(ValidationError):
        normalize_year("twenty")
    with pytest.raises(ValidationError):
        normalize_year(25)


def test_int_helpers():
    assert require_int("4", "id") == 4
    with pytest.raises(ValidationError):
        require_int(None, "id")


def test_dates_and_times():
    assert require_iso_date("2025-02-28T10:00:00", "d") == date(2025, 2, 28)
    assert require_iso_date(date(2025, 1, 1), "d") == date(2025, 1, 1)
    with pytest.raises(ValidationError):
        require_iso_date("2025-02-30", "d")
    assert format_hhmm(None) is None
