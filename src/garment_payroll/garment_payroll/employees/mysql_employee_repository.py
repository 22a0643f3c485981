from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import EmployeeProfile
from .repository import EmployeeRepository


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_profile(self, *, month: str, employee_code: str, company: str) -> Optional[EmployeeProfile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT kode, nama, perusahaan, divisi, grade_p1, grade_p2
                FROM data_karyawan_pabrik
                WHERE bulan=%s AND kode=%s AND perusahaan=%s
                LIMIT 1
                """,
                (month, employee_code, company),
            )
            r = fetchone(cur)
            if not r:
                return None
            return EmployeeProfile(
                employee_code=r["kode"],
                name=r["nama"],
                company=r["perusahaan"],
                division=r.get("divisi"),
                grade_p1=r.get("grade_p1"),
                grade_p2=r.get("grade_p2"),
            )
