from __future__ import annotations

from enum import Enum


class AttendanceCode(str, Enum):
    """Daily attendance markers recognised by the classifier."""

    HADIR = "H"
    LIBUR_PERUSAHAAN = "LP"
    TANGGAL_MERAH = "TM"
    IZIN = "I"
    SAKIT = "S"
    TANPA_KETERANGAN = "T"


class EmployeeClass(str, Enum):
    STAFF = "Staff"
    NON_STAFF = "NonStaff"


class Period(str, Enum):
    """The two pay periods of one calendar month (stored as in the source tables)."""

    PERIOD_1 = "Periode 1"
    PERIOD_2 = "Periode 2"


class RuleStyle(str, Enum):
    """Factory-site salary conventions."""

    GARUT = "garut"
    GENERAL_STAFF = "general_staff"
    GENERAL_FACTORY = "general_factory"


class SalaryComponent(str, Enum):
    GAPOK = "gapok"
    GAJI_LEMBUR = "gaji_lembur"
    UANG_MAKAN = "uang_makan"
    UANG_KEHADIRAN = "uang_kehadiran"
    UANG_BONUS = "uang_bonus"


class WarningCode(str, Enum):
    """Data-quality conditions attached to a salary record instead of raising."""

    MISSING_RATE = "MISSING_RATE"
    WAGE_FALLBACK_USED = "WAGE_FALLBACK_USED"
    MISSING_PRIOR_PERIOD = "MISSING_PRIOR_PERIOD"
    UNRECOGNIZED_STATUS = "UNRECOGNIZED_STATUS"
    MALFORMED_OVERTIME = "MALFORMED_OVERTIME"
