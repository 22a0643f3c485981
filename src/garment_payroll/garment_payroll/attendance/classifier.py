from __future__ import annotations

import logging
import re
from collections import Counter
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Iterable, Optional

from ..common.validators import normalize_key
from ..core.enums import AttendanceCode
from ..core.exceptions import ValidationError
from .model import AbsenceCount, AttendanceMarker, ClassifiedAttendance

logger = logging.getLogger(__name__)

_NUMERIC_STATUS = re.compile(r"^[0-9]+(\.[0-9]+)?$")
_NON_NUMERIC = re.compile(r"[^0-9.]")

STREAK_CODES = frozenset({AttendanceCode.IZIN.value, AttendanceCode.SAKIT.value, AttendanceCode.TANPA_KETERANGAN.value})
TRANSPARENT_CODES = frozenset({AttendanceCode.LIBUR_PERUSAHAAN.value, AttendanceCode.TANGGAL_MERAH.value})


def parse_overtime(value) -> Optional[Decimal]:
    """Parse the numeric portion of an overtime cell ("2 jam" -> 2).

    Returns None when the value is present but unparseable, 0 when missing.
    """
    if value is None:
        return Decimal(0)
    if isinstance(value, (int, Decimal)):
        return Decimal(value)
    if isinstance(value, float):
        return Decimal(str(value))
    text = str(value).strip()
    if not text:
        return Decimal(0)
    cleaned = _NON_NUMERIC.sub("", text)
    try:
        return Decimal(cleaned)
    except InvalidOperation:
        return None


@dataclass
class StreakAccumulator:
    """Finite-state accumulator for I/S/T runs.

    State is (current_status, current_streak). LP/TM never touch the state;
    every other non-streak status closes the open run.
    """

    current_status: str = ""
    current_streak: int = 0
    berpengaruh: Counter = field(default_factory=Counter)
    tidak_berpengaruh: Counter = field(default_factory=Counter)

    def push(self, code: str) -> None:
        if code == self.current_status:
            self.current_streak += 1
            return
        self.finalize()
        self.current_status = code
        self.current_streak = 1

    def finalize(self) -> None:
        if self.current_status:
            if self.current_streak > 1:
                self.berpengaruh[self.current_status] += self.current_streak
            else:
                self.tidak_berpengaruh[self.current_status] += self.current_streak
        self.current_status = ""
        self.current_streak = 0

    def count_for(self, code: str) -> AbsenceCount:
        return AbsenceCount(
            berpengaruh=self.berpengaruh[code],
            tidak_berpengaruh=self.tidak_berpengaruh[code],
        )


class AttendanceClassifier:
    """Turns one employee's date-ordered markers into ClassifiedAttendance."""

    def classify(self, markers: Iterable[AttendanceMarker]) -> ClassifiedAttendance:
        streaks = StreakAccumulator()
        h = 0
        set_h = Decimal(0)
        lp = 0
        tm = 0
        lembur = Decimal(0)
        unrecognized = 0
        malformed_overtime = 0
        last_date = None

        for marker in markers:
            if last_date is not None and marker.work_date < last_date:
                raise ValidationError(
                    f"Attendance markers for {marker.employee_code} are not in ascending date order "
                    f"({marker.work_date} after {last_date})"
                )
            last_date = marker.work_date

            hours = parse_overtime(marker.overtime)
            if hours is None:
                malformed_overtime += 1
                logger.debug("[attendance] unparseable overtime %r for %s on %s", marker.overtime, marker.employee_code, marker.work_date)
            else:
                lembur += hours

            code = normalize_key(marker.status)

            if code in TRANSPARENT_CODES:
                if code == AttendanceCode.LIBUR_PERUSAHAAN.value:
                    lp += 1
                else:
                    tm += 1
                continue

            if code in STREAK_CODES:
                streaks.push(code)
                continue

            streaks.finalize()
            if code == AttendanceCode.HADIR.value:
                h += 1
            elif _NUMERIC_STATUS.match(code):
                set_h += Decimal(code)
            elif code:
                unrecognized += 1

        streaks.finalize()

        return ClassifiedAttendance(
            h=h,
            set_h=set_h,
            lp=lp,
            tm=tm,
            lembur=lembur,
            izin=streaks.count_for(AttendanceCode.IZIN.value),
            sakit=streaks.count_for(AttendanceCode.SAKIT.value),
            tanpa_keterangan=streaks.count_for(AttendanceCode.TANPA_KETERANGAN.value),
            unrecognized=unrecognized,
            malformed_overtime=malformed_overtime,
        )


def classify_markers(markers: Iterable[AttendanceMarker]) -> ClassifiedAttendance:
    return AttendanceClassifier().classify(markers)
