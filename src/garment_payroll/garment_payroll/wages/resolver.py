from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence

from ..common.validators import normalize_key, normalize_month
from ..core.enums import WarningCode
from .model import ResolvedRates, WageGrade

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateResolution:
    rates: ResolvedRates
    wage: Optional[WageGrade] = None
    warning: Optional[WarningCode] = None

    @property
    def found(self) -> bool:
        return self.wage is not None


def month_matches(row_month: str, month: str) -> bool:
    """Tolerate "Oktober" vs "Oktober 2025" by containment in either direction."""
    a = normalize_month(row_month)
    b = normalize_month(month)
    if not a or not b:
        return False
    return a in b or b in a


class WageRateResolver:
    """Looks up an employee's rates from the wage-grade master table."""

    def __init__(self, rows: Sequence[WageGrade]):
        self._by_grade: dict[str, list[WageGrade]] = {}
        for row in rows:
            self._by_grade.setdefault(normalize_key(row.grade), []).append(row)

    def resolve(self, grade: Optional[str], month: str, *, allow_latest_fallback: bool = False) -> RateResolution:
        candidates = self._by_grade.get(normalize_key(grade), []) if normalize_key(grade) else []

        # An exact month label wins over a loose "Oktober" / "Oktober 2025" match.
        matches = [row for row in candidates if month_matches(row.month, month)]
        exact = [row for row in matches if normalize_month(row.month) == normalize_month(month)]
        if exact or matches:
            row = (exact or matches)[0]
            return RateResolution(rates=row.resolve_rates(), wage=row)

        if allow_latest_fallback and candidates:
            latest = max(candidates, key=lambda r: r.created_at or datetime.min)
            logger.warning(
                "[wages] no rate for grade=%s month=%s, using latest row from %s",
                grade,
                month,
                latest.month,
            )
            return RateResolution(rates=latest.resolve_rates(), wage=latest, warning=WarningCode.WAGE_FALLBACK_USED)

        logger.warning("[wages] no rate for grade=%r month=%s", grade, month)
        return RateResolution(rates=ResolvedRates(), warning=WarningCode.MISSING_RATE)
