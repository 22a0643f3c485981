from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..common.money import ZERO, round_rupiah, to_decimal
from ..core.constants import WORK_DAYS_PER_MONTH, WORK_HOURS_PER_DAY


@dataclass(frozen=True)
class WageGrade:
    """Master gaji row, keyed by (grade, month).

    Optional rates are derived from the monthly amounts when left empty.
    """

    grade: str
    month: str
    monthly_base: Decimal = ZERO
    daily_rate: Optional[Decimal] = None
    hourly_rate: Optional[Decimal] = None
    overtime_rate: Decimal = ZERO
    meal_allowance: Decimal = ZERO
    attendance_allowance: Decimal = ZERO
    bonus: Decimal = ZERO
    meal_daily: Optional[Decimal] = None
    attendance_daily: Optional[Decimal] = None
    created_at: Optional[datetime] = None

    def resolve_rates(self) -> "ResolvedRates":
        monthly_base = to_decimal(self.monthly_base)
        daily = to_decimal(self.daily_rate) or round_rupiah(monthly_base / WORK_DAYS_PER_MONTH)
        hourly = to_decimal(self.hourly_rate) or round_rupiah(daily / WORK_HOURS_PER_DAY)
        meal = to_decimal(self.meal_allowance)
        attendance = to_decimal(self.attendance_allowance)
        return ResolvedRates(
            monthly_base=monthly_base,
            daily_rate=daily,
            hourly_rate=hourly,
            overtime_rate=to_decimal(self.overtime_rate),
            meal_allowance=meal,
            attendance_allowance=attendance,
            bonus=to_decimal(self.bonus),
            meal_daily=to_decimal(self.meal_daily) or round_rupiah(meal / WORK_DAYS_PER_MONTH),
            attendance_daily=to_decimal(self.attendance_daily) or round_rupiah(attendance / WORK_DAYS_PER_MONTH),
        )


@dataclass(frozen=True)
class ResolvedRates:
    """Rates actually used by the calculators (all fallbacks applied)."""

    monthly_base: Decimal = ZERO
    daily_rate: Decimal = ZERO
    hourly_rate: Decimal = ZERO
    overtime_rate: Decimal = ZERO
    meal_allowance: Decimal = ZERO
    attendance_allowance: Decimal = ZERO
    bonus: Decimal = ZERO
    meal_daily: Decimal = ZERO
    attendance_daily: Decimal = ZERO
