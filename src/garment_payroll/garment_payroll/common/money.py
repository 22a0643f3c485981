from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

ZERO = Decimal(0)


def to_decimal(value: Any) -> Decimal:
    """Coerce DB/JSON numbers to Decimal; None and blanks become 0."""
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return ZERO
    try:
        return Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        return ZERO


def round_rupiah(value: Decimal) -> Decimal:
    """Round half-up to whole rupiah."""
    return value.quantize(Decimal(1), rounding=ROUND_HALF_UP)
