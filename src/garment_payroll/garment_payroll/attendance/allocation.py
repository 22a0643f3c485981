from __future__ import annotations

from typing import Mapping, Protocol, Sequence

from ..core.enums import Period
from .model import AttendanceMarker, ClassifiedAttendance


class CompanyAllocator(Protocol):
    """Splits one employee's month across the companies they worked for.

    Implementations receive the raw markers of every company for one
    employee/month/period and must return one ClassifiedAttendance per company
    whose counts sum back to the employee's true totals. The splitting rule
    itself lives outside this package.
    """

    def allocate(
        self,
        *,
        month: str,
        employee_code: str,
        period: Period,
        markers: Sequence[AttendanceMarker],
    ) -> Mapping[str, ClassifiedAttendance]:
        raise NotImplementedError
