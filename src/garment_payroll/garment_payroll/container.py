from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.allocation import CompanyAllocator
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .cash.planner import CashDenominationPlanner
from .core.constants import DEFAULT_RECALC_BATCH_SIZE
from .core.enums import RuleStyle
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .payroll.calculator.factory import SalaryCalculatorFactory
from .payroll.mysql_salary_repository import MySQLAdjustmentRepository, MySQLSalaryRecordRepository
from .payroll.service import PayrollService
from .wages.mysql_wage_repository import MySQLWageGradeRepository


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    attendance_repo: MySQLAttendanceRepository
    employees_repo: MySQLEmployeeRepository
    wages_repo: MySQLWageGradeRepository
    adjustments_repo: MySQLAdjustmentRepository
    salaries_repo: MySQLSalaryRecordRepository

    payroll_service: PayrollService


def build_container(
    *,
    db_config: dict,
    rule_style: RuleStyle | str = RuleStyle.GENERAL_FACTORY,
    batch_size: int = DEFAULT_RECALC_BATCH_SIZE,
    wage_fallback_to_latest: bool = True,
    allocator: Optional[CompanyAllocator] = None,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    attendance_repo = MySQLAttendanceRepository(conn)
    employees_repo = MySQLEmployeeRepository(conn)
    wages_repo = MySQLWageGradeRepository(conn)
    adjustments_repo = MySQLAdjustmentRepository(conn)
    salaries_repo = MySQLSalaryRecordRepository(conn)

    payroll_service = PayrollService(
        attendance_repo,
        employees_repo,
        wages_repo,
        adjustments_repo,
        salaries_repo,
        calculator=SalaryCalculatorFactory().for_style(rule_style),
        allocator=allocator,
        cash_planner=CashDenominationPlanner(),
        max_workers=batch_size,
        allow_latest_wage_fallback=wage_fallback_to_latest,
    )

    return Container(
        conn=conn,
        attendance_repo=attendance_repo,
        employees_repo=employees_repo,
        wages_repo=wages_repo,
        adjustments_repo=adjustments_repo,
        salaries_repo=salaries_repo,
        payroll_service=payroll_service,
    )
