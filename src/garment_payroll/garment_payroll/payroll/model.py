from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from ..attendance.model import ClassifiedAttendance
from ..common.money import ZERO
from ..core.enums import EmployeeClass, Period, SalaryComponent, WarningCode
from ..wages.model import ResolvedRates


@dataclass(frozen=True)
class ManualAdjustment:
    """Kasbon and bonus adjustment typed in by admins; never written by the engine."""

    kasbon: Decimal = ZERO
    penyesuaian_bonus: Decimal = ZERO


@dataclass(frozen=True)
class PriorPeriodCounts:
    """Period 1 quantities carried into the Period 2 calculation."""

    lp: int = 0
    tm: int = 0
    h: int = 0
    set_h: Decimal = ZERO


@dataclass(frozen=True)
class SalaryInput:
    attendance: ClassifiedAttendance
    rates: ResolvedRates
    employee_class: EmployeeClass
    period: Period
    prior: PriorPeriodCounts = PriorPeriodCounts()
    adjustment: ManualAdjustment = ManualAdjustment()


@dataclass(frozen=True)
class LineItem:
    """One row of the salary breakdown; deductions carry a negative amount."""

    component: SalaryComponent
    label: str
    amount: Decimal
    quantity: Optional[Decimal] = None
    rate: Optional[Decimal] = None


@dataclass(frozen=True)
class SalaryComputation:
    gapok: Decimal
    gaji_lembur: Decimal
    uang_makan: Decimal
    uang_kehadiran: Decimal
    uang_bonus: Decimal
    kasbon: Decimal
    penyesuaian_bonus: Decimal
    hasil_gaji: Decimal
    breakdown: tuple[LineItem, ...] = ()

    def lines_for(self, component: SalaryComponent) -> list[LineItem]:
        return [item for item in self.breakdown if item.component == component]


@dataclass(frozen=True)
class EmployeeSalaryRecord:
    """Stored salary row, keyed by (month, employee_code, period, company)."""

    month: str
    employee_code: str
    period: Period
    company: str
    name: str
    division: Optional[str]
    grade: str
    attendance: ClassifiedAttendance
    computation: SalaryComputation
    warnings: tuple[WarningCode, ...] = field(default_factory=tuple)

    @property
    def key(self) -> tuple[str, str, Period, str]:
        return (self.month, self.employee_code, self.period, self.company)

    @property
    def hasil_gaji(self) -> Decimal:
        return self.computation.hasil_gaji
