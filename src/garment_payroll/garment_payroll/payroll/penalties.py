from __future__ import annotations

from decimal import Decimal

from ..core.constants import FLAT_PENALTY, PROGRESSIVE_PENALTY_BASE, PROGRESSIVE_PENALTY_STEP


def progressive_penalty(n: int) -> Decimal:
    """Escalating fine for a run of penalised days: 10.000, 12.000, 14.000, ..."""
    if n <= 0:
        return Decimal(0)
    # Arithmetic series: n * base + step * (0 + 1 + ... + n-1)
    return n * PROGRESSIVE_PENALTY_BASE + PROGRESSIVE_PENALTY_STEP * (n * (n - 1) // 2)


def flat_penalty(n: int) -> Decimal:
    """Constant fine per isolated occurrence."""
    if n <= 0:
        return Decimal(0)
    return n * FLAT_PENALTY
