from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from ..core.enums import MONTH_NAMES
from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_int(value: Any, field_name: str) -> int:
    if value is None or value == "":
        raise ValidationError(f"{field_name} is required")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")


def coerce_amount(value: Any) -> Decimal:
    """Parse a money amount, falling back to zero for blank, invalid or negative input."""
    if value is None or value == "":
        return Decimal("0")
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return Decimal("0")
    if not amount.is_finite() or amount < 0:
        return Decimal("0")
    return amount


def normalize_month(value: Any) -> str:
    """Accept a month name (any case) or a number 1..12 and return the English name."""
    if value is None or str(value).strip() == "":
        raise ValidationError("month is required")
    text = str(value).strip()
    if text.isdigit():
        number = int(text)
        if 1 <= number <= 12:
            return MONTH_NAMES[number - 1]
        raise ValidationError(f"Invalid month: {text}")
    for name in MONTH_NAMES:
        if name.lower() == text.lower():
            return name
    raise ValidationError(f"Invalid month: {text}")


def normalize_year(value: Any) -> int:
    year = require_int(value, "year")
    if year < 1900 or year > 9999:
        raise ValidationError(f"Invalid year: {year}")
    return year
