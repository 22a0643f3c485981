"""Example: run the calculation core without a database.

Goal: show that the rules are plain functions/classes; MySQL is only an adapter.
"""

from datetime import date, timedelta
from decimal import Decimal

from src.garment_payroll.garment_payroll.attendance.classifier import AttendanceClassifier
from src.garment_payroll.garment_payroll.attendance.model import AttendanceMarker
from src.garment_payroll.garment_payroll.cash.planner import CashDenominationPlanner
from src.garment_payroll.garment_payroll.core.enums import EmployeeClass, Period, RuleStyle
from src.garment_payroll.garment_payroll.payroll.calculator.factory import SalaryCalculatorFactory
from src.garment_payroll.garment_payroll.payroll.model import ManualAdjustment, SalaryInput
from src.garment_payroll.garment_payroll.wages.model import WageGrade


def main():
    statuses = ["H"] * 10 + ["S", "S"] + ["H"] * 5 + ["I"] + ["H"] * 5 + ["8"]
    markers = [
        AttendanceMarker(
            employee_code="K001",
            work_date=date(2025, 10, 16) + timedelta(days=i),
            month="Oktober 2025",
            period=Period.PERIOD_2,
            status=s,
            overtime="1" if i < 3 else None,
        )
        for i, s in enumerate(statuses)
    ]
    attendance = AttendanceClassifier().classify(markers)

    wage = WageGrade(
        grade="A",
        month="Oktober 2025",
        monthly_base=Decimal(2600000),
        overtime_rate=Decimal(15000),
        meal_allowance=Decimal(130000),
        attendance_allowance=Decimal(130000),
        bonus=Decimal(50000),
    )

    calculator = SalaryCalculatorFactory().for_style(RuleStyle.GENERAL_STAFF)
    result = calculator.calculate(
        SalaryInput(
            attendance=attendance,
            rates=wage.resolve_rates(),
            employee_class=EmployeeClass.NON_STAFF,
            period=Period.PERIOD_2,
            adjustment=ManualAdjustment(kasbon=Decimal(20000)),
        )
    )

    for line in result.breakdown:
        print(f"{line.component.value:<15} {line.label:<45} {line.amount:>12,}")
    print(f"{'hasil_gaji':<61} {result.hasil_gaji:>12,}")

    cash = CashDenominationPlanner().plan([result.hasil_gaji])
    print({denom: count for denom, count in cash.counts.items() if count})


if __name__ == "__main__":
    main()
