from __future__ import annotations

from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Optional

from src.garment_payroll.garment_payroll.attendance.model import AttendanceMarker, ClassifiedAttendance, PayrollTarget
from src.garment_payroll.garment_payroll.core.enums import Period, RuleStyle, WarningCode
from src.garment_payroll.garment_payroll.core.exceptions import StorageError
from src.garment_payroll.garment_payroll.employees.model import EmployeeProfile
from src.garment_payroll.garment_payroll.payroll.model import EmployeeSalaryRecord, ManualAdjustment, PriorPeriodCounts
from src.garment_payroll.garment_payroll.payroll.service import PayrollService
from src.garment_payroll.garment_payroll.wages.model import WageGrade

MONTH = "Oktober 2025"


class InMemoryAttendance:
    def __init__(self):
        self.markers: list[AttendanceMarker] = []

    def add(self, code, company, period, statuses, *, start, overtime=None):
        for i, status in enumerate(statuses):
            self.markers.append(
                AttendanceMarker(
                    employee_code=code,
                    work_date=start + timedelta(days=i),
                    month=MONTH,
                    period=period,
                    status=status,
                    overtime=(overtime or {}).get(i),
                    company=company,
                )
            )

    def list_markers(self, *, month, employee_code, period, company=None):
        rows = [
            m
            for m in self.markers
            if m.month == month
            and m.employee_code == employee_code
            and m.period == period
            and (company is None or m.company == company)
        ]
        return sorted(rows, key=lambda m: m.work_date)

    def list_targets(self, *, month, company=None):
        seen = []
        for m in self.markers:
            target = PayrollTarget(month=m.month, employee_code=m.employee_code, company=m.company)
            if m.month == month and (company is None or m.company == company) and target not in seen:
                seen.append(target)
        return seen


class InMemoryEmployees:
    def __init__(self, *profiles: EmployeeProfile):
        self._profiles = {(p.employee_code, p.company): p for p in profiles}

    def get_profile(self, *, month, employee_code, company) -> Optional[EmployeeProfile]:
        return self._profiles.get((employee_code, company))


class InMemoryWages:
    def __init__(self, *rows: WageGrade):
        self._rows = list(rows)

    def list_all(self):
        return list(self._rows)


class InMemoryAdjustments:
    def __init__(self, values=None):
        self._values = dict(values or {})

    def get_adjustment(self, *, month, employee_code, company, period) -> Optional[ManualAdjustment]:
        return self._values.get((employee_code, company, period))


class InMemorySalaries:
    def __init__(self):
        self.records: dict[tuple, EmployeeSalaryRecord] = {}
        self.upserts = 0

    def upsert(self, record: EmployeeSalaryRecord) -> None:
        self.upserts += 1
        self.records[record.key] = record

    def get_prior_counts(self, *, month, employee_code, company) -> Optional[PriorPeriodCounts]:
        record = self.records.get((month, employee_code, Period.PERIOD_1, company))
        if not record:
            return None
        att = record.attendance
        return PriorPeriodCounts(lp=att.lp, tm=att.tm, h=att.h, set_h=att.set_h)

    def list_records(self, *, month, period=None, company=None):
        return [
            r
            for r in self.records.values()
            if r.month == month and (period is None or r.period == period) and (company is None or r.company == company)
        ]

    def delete_orphans(self, *, month, keep, company=None):
        stale = {
            (r.employee_code, r.company)
            for r in self.records.values()
            if r.month == month and (company is None or r.company == company) and (r.employee_code, r.company) not in keep
        }
        for key in [k for k, r in self.records.items() if r.month == month and (r.employee_code, r.company) in stale]:
            del self.records[key]
        return len(stale)


GRADE_A = WageGrade(
    grade="A",
    month=MONTH,
    monthly_base=Decimal(2600000),
    daily_rate=Decimal(100000),
    overtime_rate=Decimal(15000),
    meal_allowance=Decimal(130000),
    attendance_allowance=Decimal(130000),
    bonus=Decimal(50000),
    created_at=datetime(2025, 10, 1),
)


def scenario_attendance() -> InMemoryAttendance:
    attendance = InMemoryAttendance()
    attendance.add("K001", "PT MAJU", Period.PERIOD_1, ["H", "LP", "H", "H"], start=date(2025, 10, 1))
    attendance.add(
        "K001",
        "PT MAJU",
        Period.PERIOD_2,
        ["H"] * 10 + ["S", "S"] + ["H"] * 5 + ["I"] + ["H"] * 5 + ["8"],
        start=date(2025, 10, 16),
        overtime={0: "1", 1: "1 jam", 2: "1"},
    )
    return attendance


def build_service(attendance, employees, *, wages=None, adjustments=None, salaries=None, **kwargs):
    return PayrollService(
        attendance,
        employees,
        wages or InMemoryWages(GRADE_A),
        adjustments or InMemoryAdjustments(),
        salaries or InMemorySalaries(),
        **kwargs,
    )


def profile(code="K001", company="PT MAJU", division="PRODUKSI", grade="A"):
    return EmployeeProfile(employee_code=code, name=f"Karyawan {code}", company=company, division=division, grade_p1=grade, grade_p2=grade)


def test_month_recalculation_end_to_end():
    salaries = InMemorySalaries()
    adjustments = InMemoryAdjustments({("K001", "PT MAJU", Period.PERIOD_2): ManualAdjustment(kasbon=Decimal(20000))})
    svc = build_service(scenario_attendance(), InMemoryEmployees(profile()), adjustments=adjustments, salaries=salaries)

    report = svc.recalculate_month(month=MONTH)

    assert report.ok
    assert report.employees == 1
    assert [r.period for r in report.records] == [Period.PERIOD_1, Period.PERIOD_2]

    p2 = salaries.records[(MONTH, "K001", Period.PERIOD_2, "PT MAJU")]
    assert p2.attendance.h == 20
    assert p2.attendance.s_b == 2
    assert p2.attendance.i_tb == 1
    assert p2.computation.gapok == 2300000
    assert p2.computation.uang_makan == 98000
    assert p2.computation.uang_kehadiran == 120000
    assert p2.computation.uang_bonus == 0
    assert p2.computation.gaji_lembur == 45000
    assert p2.hasil_gaji == 2543000
    assert p2.warnings == ()


def test_recalculation_is_idempotent_and_keeps_adjustments():
    salaries = InMemorySalaries()
    adjustments = InMemoryAdjustments(
        {("K001", "PT MAJU", Period.PERIOD_2): ManualAdjustment(kasbon=Decimal(20000), penyesuaian_bonus=Decimal(5000))}
    )
    svc = build_service(scenario_attendance(), InMemoryEmployees(profile()), adjustments=adjustments, salaries=salaries)

    first = svc.recalculate_month(month=MONTH).records
    second = svc.recalculate_month(month=MONTH).records

    assert first == second
    assert len(salaries.records) == 2
    p2 = salaries.records[(MONTH, "K001", Period.PERIOD_2, "PT MAJU")]
    assert p2.computation.kasbon == 20000
    assert p2.computation.penyesuaian_bonus == 5000


def test_period_two_without_period_one_is_flagged():
    svc = build_service(scenario_attendance(), InMemoryEmployees(profile()))

    record = svc.compute_period(month=MONTH, employee_code="K001", company="PT MAJU", period=Period.PERIOD_2, persist=False)

    assert WarningCode.MISSING_PRIOR_PERIOD in record.warnings
    assert record.hasil_gaji == 2563000


def test_factory_style_reads_period_one_holidays():
    svc = build_service(scenario_attendance(), InMemoryEmployees(profile()), style=RuleStyle.GENERAL_FACTORY)

    svc.recalculate_month(month=MONTH)
    record = svc.compute_period(month=MONTH, employee_code="K001", company="PT MAJU", period=Period.PERIOD_2, persist=False)

    # one LP day in Period 1 costs 5.000 from each allowance
    assert record.computation.uang_makan == 93000
    assert record.computation.uang_kehadiran == 115000


def test_missing_wage_row_is_reported():
    svc = build_service(scenario_attendance(), InMemoryEmployees(profile(grade="Z")))

    record = svc.compute_period(month=MONTH, employee_code="K001", company="PT MAJU", period=Period.PERIOD_1)

    assert WarningCode.MISSING_RATE in record.warnings
    assert record.computation.gapok == 0
    assert record.computation.gaji_lembur == 0


def test_preview_does_not_write_or_fall_back():
    salaries = InMemorySalaries()
    september_only = WageGrade(grade="A", month="September 2025", monthly_base=Decimal(2000000), created_at=datetime(2025, 9, 1))
    svc = build_service(
        scenario_attendance(),
        InMemoryEmployees(profile()),
        wages=InMemoryWages(september_only),
        salaries=salaries,
    )

    preview = svc.compute_period(month=MONTH, employee_code="K001", company="PT MAJU", period=Period.PERIOD_1, persist=False)
    stored = svc.compute_period(month=MONTH, employee_code="K001", company="PT MAJU", period=Period.PERIOD_1)

    assert WarningCode.MISSING_RATE in preview.warnings
    assert WarningCode.WAGE_FALLBACK_USED in stored.warnings
    assert salaries.upserts == 1


def test_one_failing_employee_does_not_abort_the_batch():
    attendance = scenario_attendance()
    attendance.add("K404", "PT MAJU", Period.PERIOD_1, ["H", "H"], start=date(2025, 10, 1))
    svc = build_service(attendance, InMemoryEmployees(profile()), max_workers=2)

    report = svc.recalculate_month(month=MONTH)

    assert report.employees == 2
    assert not report.ok
    assert [f.employee_code for f in report.failures] == ["K404"]
    assert {r.employee_code for r in report.records} == {"K001"}


def test_unrecognized_markers_are_warned_not_fatal():
    attendance = InMemoryAttendance()
    attendance.add("K002", "PT MAJU", Period.PERIOD_1, ["H", "??", "H"], start=date(2025, 10, 1), overtime={0: "x"})
    svc = build_service(attendance, InMemoryEmployees(profile(code="K002")))

    record = svc.compute_period(month=MONTH, employee_code="K002", company="PT MAJU", period=Period.PERIOD_1)

    assert record.attendance.h == 2
    assert WarningCode.UNRECOGNIZED_STATUS in record.warnings
    assert WarningCode.MALFORMED_OVERTIME in record.warnings


class FixedAllocator:
    def __init__(self):
        self.calls = []

    def allocate(self, *, month, employee_code, period, markers):
        self.calls.append((employee_code, period, len(markers)))
        return {
            "PT MAJU": ClassifiedAttendance(h=6),
            "PT JAYA": ClassifiedAttendance(h=4),
        }


def test_allocator_splits_multi_company_employee():
    attendance = InMemoryAttendance()
    attendance.add("K003", "PT MAJU", Period.PERIOD_1, ["H"] * 5, start=date(2025, 10, 1))
    attendance.add("K003", "PT JAYA", Period.PERIOD_1, ["H"] * 5, start=date(2025, 10, 6))
    allocator = FixedAllocator()
    employees = InMemoryEmployees(
        profile(code="K003", company="PT MAJU"),
        profile(code="K003", company="PT JAYA"),
    )
    svc = build_service(attendance, employees, style=RuleStyle.GARUT, allocator=allocator)

    report = svc.recalculate_month(month=MONTH)

    assert report.ok
    assert allocator.calls[0] == ("K003", Period.PERIOD_1, 10)
    p1 = {r.company: r for r in report.records if r.period == Period.PERIOD_1}
    assert p1["PT MAJU"].computation.gapok == 6 * 100000
    assert p1["PT JAYA"].computation.gapok == 4 * 100000


def test_cash_requirement_uses_stored_net_pay():
    salaries = InMemorySalaries()
    svc = build_service(scenario_attendance(), InMemoryEmployees(profile()), salaries=salaries)
    svc.recalculate_month(month=MONTH)

    requirement = svc.cash_requirement(month=MONTH, period=Period.PERIOD_2)

    assert requirement.total == 2563000
    assert requirement.counts[100000] == 25
    assert requirement.counts[50000] == 1
    assert requirement.counts[10000] == 1
    assert requirement.counts[2000] == 1
    assert requirement.counts[1000] == 1


def test_piece_rate_rows_are_left_out_of_the_month():
    attendance = scenario_attendance()
    attendance.add("B001", "BORONGAN", Period.PERIOD_1, ["H", "H", "H"], start=date(2025, 10, 1))
    salaries = InMemorySalaries()
    employees = InMemoryEmployees(profile(), profile(code="B001", company="BORONGAN"))
    svc = build_service(attendance, employees, salaries=salaries)

    report = svc.recalculate_month(month=MONTH)

    assert report.ok
    assert report.employees == 1
    assert {r.company for r in report.records} == {"PT MAJU"}
    assert all(key[3] != "BORONGAN" for key in salaries.records)


def test_rerun_drops_records_without_attendance():
    attendance = scenario_attendance()
    attendance.add("K009", "PT MAJU", Period.PERIOD_1, ["H", "H"], start=date(2025, 10, 1))
    salaries = InMemorySalaries()
    svc = build_service(attendance, InMemoryEmployees(profile(), profile(code="K009")), salaries=salaries)
    svc.recalculate_month(month=MONTH)
    assert {r.employee_code for r in salaries.list_records(month=MONTH)} == {"K001", "K009"}

    attendance.markers = [m for m in attendance.markers if m.employee_code != "K009"]
    svc.recalculate_month(month=MONTH)

    assert {r.employee_code for r in salaries.list_records(month=MONTH)} == {"K001"}
    assert svc.cash_requirement(month=MONTH).total == 2563000


class PriorReadFailingSalaries(InMemorySalaries):
    def get_prior_counts(self, *, month, employee_code, company):
        raise StorageError("connection lost")


def test_failure_in_period_two_reports_period_and_keeps_period_one():
    salaries = PriorReadFailingSalaries()
    svc = build_service(scenario_attendance(), InMemoryEmployees(profile()), salaries=salaries)

    report = svc.recalculate_month(month=MONTH)

    assert not report.ok
    assert [(f.employee_code, f.period) for f in report.failures] == [("K001", Period.PERIOD_2)]
    assert [r.period for r in report.records] == [Period.PERIOD_1]
    assert (MONTH, "K001", Period.PERIOD_1, "PT MAJU") in salaries.records
