from __future__ import annotations

from typing import Sequence

from ..common.money import to_decimal
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import WageGrade
from .repository import WageGradeRepository


def _optional(value):
    return None if value is None else to_decimal(value)


class MySQLWageGradeRepository(WageGradeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[WageGrade]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT grade, bulan, gaji_pokok, gaji_harian, gaji_per_jam, lembur,
                       uang_makan, uang_kehadiran, bonus, uang_makan_harian, uang_kehadiran_harian,
                       created_at
                FROM master_gaji
                ORDER BY created_at DESC
                """
            )
            return [
                WageGrade(
                    grade=r["grade"],
                    month=r["bulan"],
                    monthly_base=to_decimal(r.get("gaji_pokok")),
                    daily_rate=_optional(r.get("gaji_harian")),
                    hourly_rate=_optional(r.get("gaji_per_jam")),
                    overtime_rate=to_decimal(r.get("lembur")),
                    meal_allowance=to_decimal(r.get("uang_makan")),
                    attendance_allowance=to_decimal(r.get("uang_kehadiran")),
                    bonus=to_decimal(r.get("bonus")),
                    meal_daily=_optional(r.get("uang_makan_harian")),
                    attendance_daily=_optional(r.get("uang_kehadiran_harian")),
                    created_at=r.get("created_at"),
                )
                for r in fetchall(cur)
            ]
