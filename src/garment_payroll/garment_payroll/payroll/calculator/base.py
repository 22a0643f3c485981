from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Iterable

from ...common.money import ZERO
from ...core.enums import SalaryComponent
from ..model import LineItem, SalaryComputation, SalaryInput


class SalaryCalculator(ABC):
    """Calculator interface (Strategy Pattern for factory-site salary rules)."""

    @abstractmethod
    def calculate(self, data: SalaryInput) -> SalaryComputation:
        raise NotImplementedError

    @staticmethod
    def overtime_line(data: SalaryInput) -> LineItem:
        hours = data.attendance.lembur
        rate = data.rates.overtime_rate
        return LineItem(
            component=SalaryComponent.GAJI_LEMBUR,
            label="Lembur",
            amount=hours * rate,
            quantity=hours,
            rate=rate,
        )

    @staticmethod
    def build(
        data: SalaryInput,
        *,
        gapok: Decimal,
        gaji_lembur: Decimal,
        uang_makan: Decimal = ZERO,
        uang_kehadiran: Decimal = ZERO,
        uang_bonus: Decimal = ZERO,
        breakdown: Iterable[LineItem] = (),
    ) -> SalaryComputation:
        kasbon = data.adjustment.kasbon
        penyesuaian = data.adjustment.penyesuaian_bonus
        hasil = gapok + gaji_lembur + uang_makan + uang_kehadiran + uang_bonus - kasbon + penyesuaian
        return SalaryComputation(
            gapok=gapok,
            gaji_lembur=gaji_lembur,
            uang_makan=uang_makan,
            uang_kehadiran=uang_kehadiran,
            uang_bonus=uang_bonus,
            kasbon=kasbon,
            penyesuaian_bonus=penyesuaian,
            hasil_gaji=hasil,
            breakdown=tuple(breakdown),
        )
