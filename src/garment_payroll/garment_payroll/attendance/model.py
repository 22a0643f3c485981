from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional, Union

from ..core.enums import Period


@dataclass(frozen=True)
class AttendanceMarker:
    """Domain entity: one employee's attendance marker for one calendar date.

    `status` and `overtime` are kept raw (as typed by the admins); the classifier
    is responsible for normalising them.
    """

    employee_code: str
    work_date: date
    month: str
    period: Period
    status: Optional[str]
    overtime: Optional[Union[str, int, float, Decimal]] = None
    company: Optional[str] = None


@dataclass(frozen=True)
class AbsenceCount:
    """Occurrences of one absence status split by streak length.

    berpengaruh: days belonging to a run of 2+ consecutive markers.
    tidak_berpengaruh: isolated days (run of 1).
    """

    berpengaruh: int = 0
    tidak_berpengaruh: int = 0

    @property
    def total(self) -> int:
        return self.berpengaruh + self.tidak_berpengaruh


@dataclass(frozen=True)
class ClassifiedAttendance:
    """Per-category counts for one employee/month/period."""

    h: int = 0
    set_h: Decimal = Decimal(0)
    lp: int = 0
    tm: int = 0
    lembur: Decimal = Decimal(0)
    izin: AbsenceCount = AbsenceCount()
    sakit: AbsenceCount = AbsenceCount()
    tanpa_keterangan: AbsenceCount = AbsenceCount()
    unrecognized: int = 0
    malformed_overtime: int = 0

    @property
    def i_b(self) -> int:
        return self.izin.berpengaruh

    @property
    def i_tb(self) -> int:
        return self.izin.tidak_berpengaruh

    @property
    def s_b(self) -> int:
        return self.sakit.berpengaruh

    @property
    def s_tb(self) -> int:
        return self.sakit.tidak_berpengaruh

    @property
    def t_b(self) -> int:
        return self.tanpa_keterangan.berpengaruh

    @property
    def t_tb(self) -> int:
        return self.tanpa_keterangan.tidak_berpengaruh

    @property
    def absence_days(self) -> int:
        return self.izin.total + self.sakit.total + self.tanpa_keterangan.total


@dataclass(frozen=True)
class PayrollTarget:
    """Read-model: one (month, employee, company) that has attendance rows."""

    month: str
    employee_code: str
    company: str
