from __future__ import annotations

from typing import AbstractSet, Optional, Protocol, Sequence

from ..core.enums import Period
from .model import EmployeeSalaryRecord, ManualAdjustment, PriorPeriodCounts


class AdjustmentRepository(Protocol):
    """Read-only access to manually entered kasbon/penyesuaian values."""

    def get_adjustment(
        self,
        *,
        month: str,
        employee_code: str,
        company: str,
        period: Period,
    ) -> Optional[ManualAdjustment]:
        raise NotImplementedError


class SalaryRecordRepository(Protocol):
    def upsert(self, record: EmployeeSalaryRecord) -> None:
        """Insert or overwrite by (month, employee_code, company, period)."""

        raise NotImplementedError

    def get_prior_counts(self, *, month: str, employee_code: str, company: str) -> Optional[PriorPeriodCounts]:
        """Period 1 quantities for the same employee/month/company, if computed."""

        raise NotImplementedError

    def list_records(
        self,
        *,
        month: str,
        period: Optional[Period] = None,
        company: Optional[str] = None,
    ) -> Sequence[EmployeeSalaryRecord]:
        raise NotImplementedError

    def delete_orphans(
        self,
        *,
        month: str,
        keep: AbstractSet[tuple[str, str]],
        company: Optional[str] = None,
    ) -> int:
        """Drop the month's records whose (employee_code, company) is not in `keep`.

        Returns the number of (employee_code, company) keys removed.
        """

        raise NotImplementedError
