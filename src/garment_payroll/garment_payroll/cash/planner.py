from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_FLOOR, Decimal
from typing import Iterable, Sequence

from ..common.money import ZERO, to_decimal
from ..core.constants import CASH_DENOMINATIONS, CASH_HALF_UNIT, CASH_ROUNDING_UNIT

logger = logging.getLogger(__name__)


def round_up_stepped(value) -> Decimal:
    """Round up to the next 500 (remainder < 500) or the next 1.000 (remainder >= 500).

    100.000 -> 100.000, 100.001 -> 100.500, 100.499 -> 100.500, 100.500 -> 101.000
    """
    value = to_decimal(value)
    base = (value / CASH_ROUNDING_UNIT).to_integral_value(rounding=ROUND_FLOOR) * CASH_ROUNDING_UNIT
    remainder = value - base
    if remainder == 0:
        return value
    if remainder < CASH_HALF_UNIT:
        return base + CASH_HALF_UNIT
    return base + CASH_ROUNDING_UNIT


@dataclass(frozen=True)
class CashRequirement:
    """Notes/coins to prepare for a batch of payouts."""

    counts: dict[int, int]
    total: Decimal
    rounded_amounts: tuple[Decimal, ...] = ()

    def subtotal(self, denomination: int) -> Decimal:
        return Decimal(self.counts.get(denomination, 0) * denomination)


class CashDenominationPlanner:
    def __init__(self, denominations: Sequence[int] = CASH_DENOMINATIONS):
        self._denominations = tuple(sorted((int(d) for d in denominations), reverse=True))

    @property
    def denominations(self) -> tuple[int, ...]:
        return self._denominations

    def plan(self, amounts: Iterable) -> CashRequirement:
        counts = {d: 0 for d in self._denominations}
        total = ZERO
        rounded_amounts: list[Decimal] = []

        for amount in amounts:
            value = to_decimal(amount)
            if value < 0:
                logger.warning("[cash] negative net amount %s is not payable in cash, counted as 0", value)
                value = ZERO

            remaining = round_up_stepped(value)
            rounded_amounts.append(remaining)
            total += remaining

            for denom in self._denominations:
                if remaining >= denom:
                    count = int(remaining // denom)
                    counts[denom] += count
                    remaining -= count * denom

        return CashRequirement(counts=counts, total=total, rounded_amounts=tuple(rounded_amounts))
