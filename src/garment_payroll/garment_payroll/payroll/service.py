from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Mapping, Optional, Sequence

from ..attendance.allocation import CompanyAllocator
from ..attendance.classifier import AttendanceClassifier
from ..attendance.model import ClassifiedAttendance
from ..attendance.repository import AttendanceRepository
from ..cash.planner import CashDenominationPlanner, CashRequirement
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_RECALC_BATCH_SIZE, PIECE_RATE_COMPANY
from ..core.enums import Period, RuleStyle, WarningCode
from ..core.exceptions import EmployeeNotFoundError
from ..employees.repository import EmployeeRepository
from ..wages.repository import WageGradeRepository
from ..wages.resolver import WageRateResolver
from .calculator.base import SalaryCalculator
from .calculator.factory import SalaryCalculatorFactory
from .model import EmployeeSalaryRecord, ManualAdjustment, PriorPeriodCounts, SalaryInput
from .repository import AdjustmentRepository, SalaryRecordRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmployeeFailure:
    month: str
    employee_code: str
    error: str
    period: Optional[Period] = None


@dataclass
class BatchReport:
    month: str
    employees: int = 0
    records: list[EmployeeSalaryRecord] = field(default_factory=list)
    failures: list[EmployeeFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def records_with_warnings(self) -> list[EmployeeSalaryRecord]:
        return [r for r in self.records if r.warnings]


class PayrollService:
    """Computes and stores salary records period by period.

    Period 2 of an employee always reads the stored Period 1 quantities of the
    same month/company, so Period 1 is computed first. Employees are
    independent and a month is recalculated as a bounded parallel batch.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        wages: WageGradeRepository,
        adjustments: AdjustmentRepository,
        salaries: SalaryRecordRepository,
        *,
        style: RuleStyle | str = RuleStyle.GENERAL_STAFF,
        calculator: Optional[SalaryCalculator] = None,
        classifier: Optional[AttendanceClassifier] = None,
        allocator: Optional[CompanyAllocator] = None,
        cash_planner: Optional[CashDenominationPlanner] = None,
        max_workers: int = DEFAULT_RECALC_BATCH_SIZE,
        allow_latest_wage_fallback: bool = True,
    ):
        self._attendance = attendance
        self._employees = employees
        self._wages = wages
        self._adjustments = adjustments
        self._salaries = salaries
        self._calculator = calculator or SalaryCalculatorFactory().for_style(style)
        self._classifier = classifier or AttendanceClassifier()
        self._allocator = allocator
        self._cash_planner = cash_planner or CashDenominationPlanner()
        self._max_workers = max(1, int(max_workers))
        self._allow_latest_wage_fallback = bool(allow_latest_wage_fallback)

    def compute_period(
        self,
        *,
        month: str,
        employee_code: str,
        company: str,
        period: Period,
        classified: Optional[ClassifiedAttendance] = None,
        resolver: Optional[WageRateResolver] = None,
        persist: bool = True,
    ) -> EmployeeSalaryRecord:
        """Build one salary record; with `persist=False` it is a read-only breakdown preview."""

        month = require_non_empty(month, "month")
        profile = self._employees.get_profile(month=month, employee_code=employee_code, company=company)
        if not profile:
            raise EmployeeNotFoundError(f"No employee data for {employee_code} ({company}) in {month}")

        warnings: list[WarningCode] = []

        if classified is None:
            markers = self._attendance.list_markers(month=month, employee_code=employee_code, period=period, company=company)
            classified = self._classifier.classify(markers)
        if classified.unrecognized:
            warnings.append(WarningCode.UNRECOGNIZED_STATUS)
        if classified.malformed_overtime:
            warnings.append(WarningCode.MALFORMED_OVERTIME)

        grade = profile.grade_for(period)
        resolver = resolver or WageRateResolver(self._wages.list_all())
        # The latest-row fallback belongs to the batch run, never to a preview.
        resolution = resolver.resolve(grade, month, allow_latest_fallback=self._allow_latest_wage_fallback and persist)
        if resolution.warning:
            warnings.append(resolution.warning)

        prior = PriorPeriodCounts()
        if period == Period.PERIOD_2:
            stored = self._salaries.get_prior_counts(month=month, employee_code=employee_code, company=company)
            if stored is None:
                warnings.append(WarningCode.MISSING_PRIOR_PERIOD)
            else:
                prior = stored

        adjustment = self._adjustments.get_adjustment(
            month=month, employee_code=employee_code, company=company, period=period
        ) or ManualAdjustment()

        computation = self._calculator.calculate(
            SalaryInput(
                attendance=classified,
                rates=resolution.rates,
                employee_class=profile.employee_class,
                period=period,
                prior=prior,
                adjustment=adjustment,
            )
        )

        record = EmployeeSalaryRecord(
            month=month,
            employee_code=employee_code,
            period=period,
            company=company,
            name=profile.name,
            division=profile.division,
            grade=grade,
            attendance=classified,
            computation=computation,
            warnings=tuple(warnings),
        )

        if warnings:
            logger.warning(
                "[payroll] %s %s (%s) %s: %s",
                month,
                employee_code,
                company,
                period.value,
                ", ".join(w.value for w in warnings),
            )
        if persist:
            self._salaries.upsert(record)
        return record

    def recalculate_employee(
        self,
        *,
        month: str,
        employee_code: str,
        companies: Sequence[str],
        resolver: Optional[WageRateResolver] = None,
    ) -> list[EmployeeSalaryRecord]:
        resolver = resolver or WageRateResolver(self._wages.list_all())
        records: list[EmployeeSalaryRecord] = []

        for period in (Period.PERIOD_1, Period.PERIOD_2):
            self._recalculate_period(
                month=month,
                employee_code=employee_code,
                companies=companies,
                period=period,
                resolver=resolver,
                records=records,
            )
        return records

    def recalculate_month(self, *, month: str, company: Optional[str] = None) -> BatchReport:
        """Recalculate every employee with attendance in `month`.

        Stored records without attendance rows any more are removed first.
        Piece-rate rows belong to a separate payroll and are skipped.
        """

        month = require_non_empty(month, "month")
        targets = [
            t
            for t in self._attendance.list_targets(month=month, company=company)
            if t.company != PIECE_RATE_COMPANY
        ]

        companies_by_employee: dict[str, list[str]] = {}
        for t in targets:
            companies = companies_by_employee.setdefault(t.employee_code, [])
            if t.company not in companies:
                companies.append(t.company)

        removed = self._salaries.delete_orphans(
            month=month,
            keep={(t.employee_code, t.company) for t in targets},
            company=company,
        )
        if removed:
            logger.info("[payroll] %s: removed %s stale employee/company records", month, removed)

        report = BatchReport(month=month, employees=len(companies_by_employee))
        if not companies_by_employee:
            logger.info("[payroll] %s: no attendance rows, nothing to recalculate", month)
            return report

        resolver = WageRateResolver(self._wages.list_all())
        logger.info("[payroll] %s: recalculating %s employees (workers=%s)", month, report.employees, self._max_workers)

        with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
            futures = [
                pool.submit(
                    self._run_employee,
                    month=month,
                    employee_code=code,
                    companies=companies,
                    resolver=resolver,
                )
                for code, companies in companies_by_employee.items()
            ]
            for future in as_completed(futures):
                records, failure = future.result()
                report.records.extend(records)
                if failure:
                    report.failures.append(failure)

        report.records.sort(key=lambda r: (r.employee_code, r.company, r.period.value))
        report.failures.sort(key=lambda f: f.employee_code)
        logger.info(
            "[payroll] %s: done, records=%s failures=%s warnings=%s",
            month,
            len(report.records),
            len(report.failures),
            len(report.records_with_warnings),
        )
        return report

    def cash_requirement(
        self,
        *,
        month: str,
        period: Optional[Period] = None,
        company: Optional[str] = None,
    ) -> CashRequirement:
        records = self._salaries.list_records(month=month, period=period, company=company)
        requirement = self._cash_planner.plan(r.hasil_gaji for r in records)
        logger.info("[cash] %s %s: %s payouts, total=%s", month, period.value if period else "all periods", len(records), requirement.total)
        return requirement

    def _recalculate_period(
        self,
        *,
        month: str,
        employee_code: str,
        companies: Sequence[str],
        period: Period,
        resolver: WageRateResolver,
        records: list[EmployeeSalaryRecord],
    ) -> None:
        allocated = self._allocate(month=month, employee_code=employee_code, companies=companies, period=period)
        for company in companies:
            records.append(
                self.compute_period(
                    month=month,
                    employee_code=employee_code,
                    company=company,
                    period=period,
                    classified=allocated.get(company) if allocated is not None else None,
                    resolver=resolver,
                )
            )

    def _run_employee(
        self,
        *,
        month: str,
        employee_code: str,
        companies: Sequence[str],
        resolver: WageRateResolver,
    ) -> tuple[list[EmployeeSalaryRecord], Optional[EmployeeFailure]]:
        # Records already stored before a failure stay in the report.
        records: list[EmployeeSalaryRecord] = []
        for period in (Period.PERIOD_1, Period.PERIOD_2):
            try:
                self._recalculate_period(
                    month=month,
                    employee_code=employee_code,
                    companies=companies,
                    period=period,
                    resolver=resolver,
                    records=records,
                )
            except Exception as ex:
                logger.exception("[payroll] %s: employee %s failed in %s: %s", month, employee_code, period.value, ex)
                return records, EmployeeFailure(month=month, employee_code=employee_code, error=str(ex), period=period)
        return records, None

    def _allocate(
        self,
        *,
        month: str,
        employee_code: str,
        companies: Sequence[str],
        period: Period,
    ) -> Optional[Mapping[str, ClassifiedAttendance]]:
        if self._allocator is None or len(companies) < 2:
            return None

        markers = self._attendance.list_markers(month=month, employee_code=employee_code, period=period)
        allocated = dict(self._allocator.allocate(month=month, employee_code=employee_code, period=period, markers=markers))
        for company in companies:
            if company not in allocated:
                logger.warning("[payroll] allocator returned no share for %s in %s", employee_code, company)
                allocated[company] = ClassifiedAttendance()
        return allocated
