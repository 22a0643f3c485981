from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..common.validators import normalize_key
from ..core.enums import EmployeeClass, Period


@dataclass(frozen=True)
class EmployeeProfile:
    """Domain entity: employee master row for one month and company.

    The grade may change halfway through the month, hence one grade per period.
    """

    employee_code: str
    name: str
    company: str
    division: Optional[str] = None
    grade_p1: Optional[str] = None
    grade_p2: Optional[str] = None

    @property
    def employee_class(self) -> EmployeeClass:
        if normalize_key(self.division) == "STAFF":
            return EmployeeClass.STAFF
        return EmployeeClass.NON_STAFF

    def grade_for(self, period: Period) -> str:
        if period == Period.PERIOD_1:
            grade = self.grade_p1 or self.grade_p2
        else:
            grade = self.grade_p2 or self.grade_p1
        return (grade or "").strip()
