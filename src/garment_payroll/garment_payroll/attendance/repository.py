from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Period
from .model import AttendanceMarker, PayrollTarget


class AttendanceRepository(Protocol):
    """Read-only source of daily attendance rows.

    Note (DIP): the payroll service depends on this interface, not on a concrete DB.
    """

    def list_markers(
        self,
        *,
        month: str,
        employee_code: str,
        period: Period,
        company: Optional[str] = None,
    ) -> Sequence[AttendanceMarker]:
        """Markers in ascending date order; `company=None` means all companies."""

        raise NotImplementedError

    def list_targets(self, *, month: str, company: Optional[str] = None) -> Sequence[PayrollTarget]:
        """Distinct (month, employee, company) keys; the piece-rate company is excluded."""

        raise NotImplementedError
