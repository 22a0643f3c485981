from datetime import date, timedelta
from decimal import Decimal

import pytest

from src.garment_payroll.garment_payroll.attendance.classifier import AttendanceClassifier, StreakAccumulator, parse_overtime
from src.garment_payroll.garment_payroll.attendance.model import AttendanceMarker
from src.garment_payroll.garment_payroll.core.enums import Period
from src.garment_payroll.garment_payroll.core.exceptions import ValidationError


def markers(*statuses, overtime=None):
    start = date(2025, 10, 1)
    return [
        AttendanceMarker(
            employee_code="K001",
            work_date=start + timedelta(days=i),
            month="Oktober 2025",
            period=Period.PERIOD_2,
            status=s,
            overtime=(overtime[i] if overtime else None),
        )
        for i, s in enumerate(statuses)
    ]


def classify(*statuses, **kwargs):
    return AttendanceClassifier().classify(markers(*statuses, **kwargs))


def test_consecutive_sick_days_are_penalty_affecting():
    result = classify("S", "S", "S")
    assert result.s_b == 3
    assert result.s_tb == 0


def test_single_sick_day_is_isolated():
    result = classify("S")
    assert result.s_b == 0
    assert result.s_tb == 1


def test_present_day_breaks_the_streak():
    result = classify("S", "H", "S")
    assert result.s_tb == 2
    assert result.s_b == 0
    assert result.h == 1


def test_company_holiday_does_not_break_the_streak():
    result = classify("I", "LP", "I")
    assert result.i_b == 2
    assert result.i_tb == 0
    assert result.lp == 1


def test_public_holiday_is_transparent_too():
    result = classify("T", "TM", "TM", "T", "H")
    assert result.t_b == 2
    assert result.tm == 2


def test_different_absence_status_starts_new_streak():
    result = classify("I", "I", "S", "T", "T", "T")
    assert result.i_b == 2
    assert result.s_tb == 1
    assert result.t_b == 3


def test_status_is_case_and_whitespace_insensitive():
    result = classify(" s", "S ", "h", " lp ")
    assert result.s_b == 2
    assert result.h == 1
    assert result.lp == 1


def test_fractional_statuses_are_summed_and_break_streaks():
    result = classify("I", "0.5", "I", "0.5", "H")
    assert result.set_h == Decimal("1.0")
    assert result.i_tb == 2
    assert result.h == 1


def test_unrecognized_status_is_counted_but_ignored():
    result = classify("S", "X", "S", "", None)
    assert result.s_tb == 2
    assert result.unrecognized == 1


def test_overtime_sums_numeric_part_and_skips_garbage():
    result = classify("H", "H", "H", "H", overtime=["2", "1.5 jam", "abc", None])
    assert result.lembur == Decimal("3.5")
    assert result.malformed_overtime == 1


def test_empty_month_yields_zero_counts():
    result = AttendanceClassifier().classify([])
    assert result.h == 0
    assert result.set_h == 0
    assert result.lembur == 0
    assert result.absence_days == 0


def test_unordered_markers_are_rejected():
    items = markers("H", "S")
    with pytest.raises(ValidationError):
        AttendanceClassifier().classify(list(reversed(items)))


def test_streak_accumulator_finalize_is_idempotent():
    acc = StreakAccumulator()
    acc.push("I")
    acc.push("I")
    acc.finalize()
    acc.finalize()
    assert acc.count_for("I").berpengaruh == 2
    assert acc.current_status == ""


def test_parse_overtime_values():
    assert parse_overtime(None) == 0
    assert parse_overtime("") == 0
    assert parse_overtime(3) == 3
    assert parse_overtime("2 jam") == 2
    assert parse_overtime("-") is None
