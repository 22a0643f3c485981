from __future__ import annotations

from decimal import Decimal

from ...common.money import ZERO
from ...core.constants import WORK_DAYS_PER_MONTH, WORK_HOURS_PER_DAY
from ...core.enums import EmployeeClass, Period, SalaryComponent
from ..model import LineItem, SalaryComputation, SalaryInput
from ..penalties import flat_penalty, progressive_penalty
from .base import SalaryCalculator


class GeneralSalaryCalculator(SalaryCalculator):
    """Subtractive rule: monthly amounts minus attendance fines.

    Staff receive the master values untouched. Non-Staff lose a daily rate per
    absence day, missing hours of a partial day, escalating fines on the
    allowances and the whole bonus on any sick/late/leave incident. Fines and
    the monthly base settle in Period 2; Period 1 pays overtime only.

    With `deduct_holidays` (factory variant) LP/TM days of both periods are
    also deducted from the meal and attendance allowances.
    """

    def __init__(self, *, deduct_holidays: bool = False):
        self._deduct_holidays = bool(deduct_holidays)

    @property
    def deduct_holidays(self) -> bool:
        return self._deduct_holidays

    def calculate(self, data: SalaryInput) -> SalaryComputation:
        overtime = self.overtime_line(data)

        if data.period == Period.PERIOD_1:
            return self.build(data, gapok=ZERO, gaji_lembur=overtime.amount, breakdown=[overtime])

        rates = data.rates
        if data.employee_class == EmployeeClass.STAFF:
            lines = [
                LineItem(SalaryComponent.GAPOK, "Gaji Pokok", rates.monthly_base),
                overtime,
                LineItem(SalaryComponent.UANG_MAKAN, "Uang Makan", rates.meal_allowance),
                LineItem(SalaryComponent.UANG_KEHADIRAN, "Uang Kehadiran", rates.attendance_allowance),
                LineItem(SalaryComponent.UANG_BONUS, "Bonus", rates.bonus),
            ]
            return self.build(
                data,
                gapok=rates.monthly_base,
                gaji_lembur=overtime.amount,
                uang_makan=rates.meal_allowance,
                uang_kehadiran=rates.attendance_allowance,
                uang_bonus=rates.bonus,
                breakdown=lines,
            )

        lines: list[LineItem] = []
        gapok = self._gapok(data, lines)
        lines.append(overtime)
        uang_makan = self._meal(data, lines)
        uang_kehadiran = self._attendance(data, lines)
        uang_bonus = self._bonus(data, lines)

        return self.build(
            data,
            gapok=gapok,
            gaji_lembur=overtime.amount,
            uang_makan=uang_makan,
            uang_kehadiran=uang_kehadiran,
            uang_bonus=uang_bonus,
            breakdown=lines,
        )

    def _gapok(self, data: SalaryInput, lines: list[LineItem]) -> Decimal:
        att = data.attendance
        base = data.rates.monthly_base
        per_day = base / WORK_DAYS_PER_MONTH
        per_hour = per_day / WORK_HOURS_PER_DAY

        absence_days = att.absence_days
        pot_hari = absence_days * per_day

        # set_h holds hours credited on partial days; more than 8 credited
        # hours turns the docking into a credit, only gapok is clamped.
        missing_hours = WORK_HOURS_PER_DAY - att.set_h
        pot_jam = missing_hours * per_hour

        lines.append(LineItem(SalaryComponent.GAPOK, "Gaji Pokok", base))
        if absence_days:
            lines.append(LineItem(SalaryComponent.GAPOK, f"Potongan Hari Tidak Masuk ({absence_days} hari)", -pot_hari, Decimal(absence_days), per_day))
        if missing_hours > 0:
            lines.append(LineItem(SalaryComponent.GAPOK, f"Potongan Jam Kurang ({missing_hours} jam)", -pot_jam, missing_hours, per_hour))
        elif missing_hours < 0:
            lines.append(LineItem(SalaryComponent.GAPOK, f"Kelebihan Jam ({-missing_hours} jam)", -pot_jam, -missing_hours, per_hour))

        return max(ZERO, base - pot_hari - pot_jam)

    def _holiday_days(self, data: SalaryInput) -> tuple[int, int]:
        if not self._deduct_holidays:
            return 0, 0
        return data.attendance.lp + data.prior.lp, data.attendance.tm + data.prior.tm

    def _meal(self, data: SalaryInput, lines: list[LineItem]) -> Decimal:
        att = data.attendance
        rates = data.rates
        component = SalaryComponent.UANG_MAKAN

        fines = [
            (f"Sakit Berpengaruh ({att.s_b}x)", progressive_penalty(att.s_b)),
            (f"Izin Berpengaruh ({att.i_b}x)", progressive_penalty(att.i_b)),
            (f"Tanpa Keterangan Berurutan ({att.t_b}x)", progressive_penalty(att.t_b)),
            (f"Tidak Berurutan I/S/T ({att.i_tb + att.s_tb + att.t_tb}x)", flat_penalty(att.i_tb + att.s_tb + att.t_tb)),
        ]
        total_lp, total_tm = self._holiday_days(data)
        fines += [
            (f"Libur Perusahaan ({total_lp} hari)", total_lp * rates.meal_daily),
            (f"Tanggal Merah ({total_tm} hari)", total_tm * rates.meal_daily),
        ]
        return self._apply_fines(component, "Uang Makan", rates.meal_allowance, fines, lines)

    def _attendance(self, data: SalaryInput, lines: list[LineItem]) -> Decimal:
        att = data.attendance
        rates = data.rates
        component = SalaryComponent.UANG_KEHADIRAN

        # Isolated sick days (s_tb) do not reduce the attendance allowance.
        fines = [
            (f"Izin Berpengaruh ({att.i_b}x)", progressive_penalty(att.i_b)),
            (f"Tanpa Keterangan Berurutan ({att.t_b}x)", progressive_penalty(att.t_b)),
            (f"Izin/Tanpa Keterangan Tidak Berurutan ({att.i_tb + att.t_tb}x)", flat_penalty(att.i_tb + att.t_tb)),
        ]
        total_lp, total_tm = self._holiday_days(data)
        fines += [
            (f"Libur Perusahaan ({total_lp} hari)", total_lp * rates.attendance_daily),
            (f"Tanggal Merah ({total_tm} hari)", total_tm * rates.attendance_daily),
        ]
        return self._apply_fines(component, "Uang Kehadiran", rates.attendance_allowance, fines, lines)

    def _bonus(self, data: SalaryInput, lines: list[LineItem]) -> Decimal:
        att = data.attendance
        # i_b is not part of the forfeiture trigger.
        incidents = att.i_tb + att.s_b + att.s_tb + att.t_b + att.t_tb
        if incidents > 0:
            lines.append(LineItem(SalaryComponent.UANG_BONUS, f"Bonus Hangus ({incidents} kejadian)", ZERO))
            return ZERO
        lines.append(LineItem(SalaryComponent.UANG_BONUS, "Bonus", data.rates.bonus))
        return data.rates.bonus

    @staticmethod
    def _apply_fines(
        component: SalaryComponent,
        label: str,
        base: Decimal,
        fines: list[tuple[str, Decimal]],
        lines: list[LineItem],
    ) -> Decimal:
        lines.append(LineItem(component, label, base))
        total = ZERO
        for fine_label, amount in fines:
            if amount:
                lines.append(LineItem(component, fine_label, -amount))
                total += amount
        return max(ZERO, base - total)
