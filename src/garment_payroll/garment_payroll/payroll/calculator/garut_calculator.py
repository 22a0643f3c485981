from __future__ import annotations

from ...core.enums import Period, SalaryComponent
from ..model import LineItem, SalaryComputation, SalaryInput
from .base import SalaryCalculator


class GarutSalaryCalculator(SalaryCalculator):
    """Additive rule: pay per credited day, no attendance fines.

    LP/TM days earn base pay but not allowances. Period 1 pays base pay and
    overtime only; allowances and bonus for the whole month settle in Period 2.
    """

    def calculate(self, data: SalaryInput) -> SalaryComputation:
        att = data.attendance
        rates = data.rates

        worked_days = att.h + att.set_h
        gapok_days = worked_days + att.lp + att.tm
        gapok = gapok_days * rates.daily_rate
        overtime = self.overtime_line(data)

        lines = [
            LineItem(SalaryComponent.GAPOK, "Hadir + Setengah Hari", worked_days * rates.daily_rate, worked_days, rates.daily_rate),
            LineItem(SalaryComponent.GAPOK, "Libur Perusahaan (LP)", att.lp * rates.daily_rate, att.lp, rates.daily_rate),
            LineItem(SalaryComponent.GAPOK, "Tanggal Merah (TM)", att.tm * rates.daily_rate, att.tm, rates.daily_rate),
            overtime,
        ]

        if data.period == Period.PERIOD_1:
            return self.build(data, gapok=gapok, gaji_lembur=overtime.amount, breakdown=lines)

        allowance_days = worked_days + data.prior.h + data.prior.set_h
        uang_makan = allowance_days * rates.meal_daily
        uang_kehadiran = allowance_days * rates.attendance_daily
        lines += [
            LineItem(SalaryComponent.UANG_MAKAN, "Uang Makan per Hari Hadir", uang_makan, allowance_days, rates.meal_daily),
            LineItem(SalaryComponent.UANG_KEHADIRAN, "Uang Kehadiran per Hari Hadir", uang_kehadiran, allowance_days, rates.attendance_daily),
            LineItem(SalaryComponent.UANG_BONUS, "Bonus", rates.bonus),
        ]
        return self.build(
            data,
            gapok=gapok,
            gaji_lembur=overtime.amount,
            uang_makan=uang_makan,
            uang_kehadiran=uang_kehadiran,
            uang_bonus=rates.bonus,
            breakdown=lines,
        )
