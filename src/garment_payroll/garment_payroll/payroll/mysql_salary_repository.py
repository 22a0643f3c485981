from __future__ import annotations

from typing import AbstractSet, Optional, Sequence

from ..attendance.model import AbsenceCount, ClassifiedAttendance
from ..common.money import to_decimal
from ..core.enums import Period, WarningCode
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import EmployeeSalaryRecord, ManualAdjustment, PriorPeriodCounts, SalaryComputation
from .repository import AdjustmentRepository, SalaryRecordRepository


class MySQLAdjustmentRepository(AdjustmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_adjustment(
        self,
        *,
        month: str,
        employee_code: str,
        company: str,
        period: Period,
    ) -> Optional[ManualAdjustment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT kasbon, penyesuaian_bonus
                FROM penyesuaian_gaji_pabrik
                WHERE bulan=%s AND kode=%s AND perusahaan=%s AND periode=%s
                """,
                (month, employee_code, company, period.value),
            )
            r = fetchone(cur)
            if not r:
                return None
            return ManualAdjustment(
                kasbon=to_decimal(r.get("kasbon")),
                penyesuaian_bonus=to_decimal(r.get("penyesuaian_bonus")),
            )


class MySQLSalaryRecordRepository(SalaryRecordRepository):
    """Result sink for laporan_bulanan_pabrik.

    Only computed columns are written; kasbon/penyesuaian are copied from the
    adjustment table at computation time and never edited here.
    """

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def upsert(self, record: EmployeeSalaryRecord) -> None:
        att = record.attendance
        c = record.computation
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO laporan_bulanan_pabrik (
                    bulan, kode, perusahaan, periode, nama, divisi, grade,
                    h, set_h, lp, tm, lembur,
                    i_b, i_tb, s_b, s_tb, t_b, t_tb,
                    gapok, gaji_lembur, uang_makan, uang_kehadiran, uang_bonus,
                    kasbon, penyesuaian_bonus, hasil_gaji, warnings
                )
                VALUES (%s,%s,%s,%s,%s,%s,%s, %s,%s,%s,%s,%s, %s,%s,%s,%s,%s,%s, %s,%s,%s,%s,%s, %s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    nama=VALUES(nama), divisi=VALUES(divisi), grade=VALUES(grade),
                    h=VALUES(h), set_h=VALUES(set_h), lp=VALUES(lp), tm=VALUES(tm), lembur=VALUES(lembur),
                    i_b=VALUES(i_b), i_tb=VALUES(i_tb), s_b=VALUES(s_b), s_tb=VALUES(s_tb),
                    t_b=VALUES(t_b), t_tb=VALUES(t_tb),
                    gapok=VALUES(gapok), gaji_lembur=VALUES(gaji_lembur), uang_makan=VALUES(uang_makan),
                    uang_kehadiran=VALUES(uang_kehadiran), uang_bonus=VALUES(uang_bonus),
                    kasbon=VALUES(kasbon), penyesuaian_bonus=VALUES(penyesuaian_bonus),
                    hasil_gaji=VALUES(hasil_gaji), warnings=VALUES(warnings)
                """,
                (
                    record.month, record.employee_code, record.company, record.period.value,
                    record.name, record.division, record.grade,
                    att.h, att.set_h, att.lp, att.tm, att.lembur,
                    att.i_b, att.i_tb, att.s_b, att.s_tb, att.t_b, att.t_tb,
                    c.gapok, c.gaji_lembur, c.uang_makan, c.uang_kehadiran, c.uang_bonus,
                    c.kasbon, c.penyesuaian_bonus, c.hasil_gaji,
                    ",".join(w.value for w in record.warnings),
                ),
            )

    def get_prior_counts(self, *, month: str, employee_code: str, company: str) -> Optional[PriorPeriodCounts]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT lp, tm, h, set_h
                FROM laporan_bulanan_pabrik
                WHERE bulan=%s AND kode=%s AND perusahaan=%s AND periode=%s
                """,
                (month, employee_code, company, Period.PERIOD_1.value),
            )
            r = fetchone(cur)
            if not r:
                return None
            return PriorPeriodCounts(
                lp=int(r.get("lp") or 0),
                tm=int(r.get("tm") or 0),
                h=int(r.get("h") or 0),
                set_h=to_decimal(r.get("set_h")),
            )

    def list_records(
        self,
        *,
        month: str,
        period: Optional[Period] = None,
        company: Optional[str] = None,
    ) -> Sequence[EmployeeSalaryRecord]:
        clauses = ["bulan=%s"]
        params: list[object] = [month]
        if period is not None:
            clauses.append("periode=%s")
            params.append(period.value)
        if company is not None:
            clauses.append("perusahaan=%s")
            params.append(company)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT *
                FROM laporan_bulanan_pabrik
                WHERE {where}
                ORDER BY kode ASC, perusahaan ASC, periode ASC
                """,
                tuple(params),
            )
            return [self._to_record(r) for r in fetchall(cur)]

    def delete_orphans(
        self,
        *,
        month: str,
        keep: AbstractSet[tuple[str, str]],
        company: Optional[str] = None,
    ) -> int:
        clauses = ["bulan=%s"]
        params: list[object] = [month]
        if company is not None:
            clauses.append("perusahaan=%s")
            params.append(company)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT DISTINCT kode, perusahaan FROM laporan_bulanan_pabrik WHERE {where}",
                tuple(params),
            )
            stale = [
                (month, r["kode"], r["perusahaan"])
                for r in fetchall(cur)
                if (r["kode"], r["perusahaan"]) not in keep
            ]
            if stale:
                cur.executemany(
                    "DELETE FROM laporan_bulanan_pabrik WHERE bulan=%s AND kode=%s AND perusahaan=%s",
                    stale,
                )
            return len(stale)

    @staticmethod
    def _to_record(r: dict) -> EmployeeSalaryRecord:
        attendance = ClassifiedAttendance(
            h=int(r.get("h") or 0),
            set_h=to_decimal(r.get("set_h")),
            lp=int(r.get("lp") or 0),
            tm=int(r.get("tm") or 0),
            lembur=to_decimal(r.get("lembur")),
            izin=AbsenceCount(int(r.get("i_b") or 0), int(r.get("i_tb") or 0)),
            sakit=AbsenceCount(int(r.get("s_b") or 0), int(r.get("s_tb") or 0)),
            tanpa_keterangan=AbsenceCount(int(r.get("t_b") or 0), int(r.get("t_tb") or 0)),
        )
        computation = SalaryComputation(
            gapok=to_decimal(r.get("gapok")),
            gaji_lembur=to_decimal(r.get("gaji_lembur")),
            uang_makan=to_decimal(r.get("uang_makan")),
            uang_kehadiran=to_decimal(r.get("uang_kehadiran")),
            uang_bonus=to_decimal(r.get("uang_bonus")),
            kasbon=to_decimal(r.get("kasbon")),
            penyesuaian_bonus=to_decimal(r.get("penyesuaian_bonus")),
            hasil_gaji=to_decimal(r.get("hasil_gaji")),
        )
        warnings = tuple(WarningCode(w) for w in (r.get("warnings") or "").split(",") if w)
        return EmployeeSalaryRecord(
            month=r["bulan"],
            employee_code=r["kode"],
            period=Period(r["periode"]),
            company=r["perusahaan"],
            name=r["nama"],
            division=r.get("divisi"),
            grade=r.get("grade") or "",
            attendance=attendance,
            computation=computation,
            warnings=warnings,
        )
