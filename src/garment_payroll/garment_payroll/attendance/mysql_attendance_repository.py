from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import PIECE_RATE_COMPANY
from ..core.enums import Period
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import AttendanceMarker, PayrollTarget
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_markers(
        self,
        *,
        month: str,
        employee_code: str,
        period: Period,
        company: Optional[str] = None,
    ) -> Sequence[AttendanceMarker]:
        clauses = ["bulan=%s", "kode=%s", "periode=%s"]
        params: list[object] = [month, employee_code, period.value]
        if company is not None:
            clauses.append("perusahaan=%s")
            params.append(company)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT kode, tanggal, bulan, periode, perusahaan, kehadiran, lembur
                FROM presensi_harian_pabrik
                WHERE {where}
                ORDER BY tanggal ASC
                """,
                tuple(params),
            )
            rows = fetchall(cur)
            return [
                AttendanceMarker(
                    employee_code=r["kode"],
                    work_date=r["tanggal"],
                    month=r["bulan"],
                    period=Period(r["periode"]),
                    status=r.get("kehadiran"),
                    overtime=r.get("lembur"),
                    company=r.get("perusahaan"),
                )
                for r in rows
            ]

    def list_targets(self, *, month: str, company: Optional[str] = None) -> Sequence[PayrollTarget]:
        clauses = ["bulan=%s", "perusahaan<>%s"]
        params: list[object] = [month, PIECE_RATE_COMPANY]
        if company is not None:
            clauses.append("perusahaan=%s")
            params.append(company)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT DISTINCT bulan, kode, perusahaan
                FROM presensi_harian_pabrik
                WHERE {where}
                ORDER BY kode ASC, perusahaan ASC
                """,
                tuple(params),
            )
            return [
                PayrollTarget(month=r["bulan"], employee_code=r["kode"], company=r["perusahaan"])
                for r in fetchall(cur)
            ]
