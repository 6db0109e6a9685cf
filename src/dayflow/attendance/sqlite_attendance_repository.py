from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.sqlite_base import db_cursor, fetchall, fetchone, from_db_date, to_db_date
from .model import AttendanceRecord
from .repository import AttendanceRepository


class SQLiteAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, user_id, date, status, check_in, check_out
                FROM attendance
                WHERE user_id=? AND date=?
                """,
                (int(user_id), to_db_date(work_date)),
            )
            r = fetchone(cur)
            if not r:
                return None
            return AttendanceRecord(
                attendance_id=int(r["id"]),
                user_id=int(r["user_id"]),
                work_date=from_db_date(r["date"]),
                status=AttendanceStatus(r["status"]),
                check_in=r.get("check_in"),
                check_out=r.get("check_out"),
            )

    def upsert_status(self, *, user_id: int, work_date: date, status: AttendanceStatus) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(user_id, date, status)
                VALUES(?,?,?)
                ON CONFLICT(user_id, date) DO UPDATE SET status=excluded.status
                """,
                (int(user_id), to_db_date(work_date), AttendanceStatus(status).value),
            )

    def set_status_if_exists(self, *, user_id: int, work_date: date, status: AttendanceStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE attendance SET status=? WHERE user_id=? AND date=?",
                (AttendanceStatus(status).value, int(user_id), to_db_date(work_date)),
            )
            return cur.rowcount > 0

    def delete_for_user_and_date(self, user_id: int, work_date: date) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance WHERE user_id=? AND date=?", (int(user_id), to_db_date(work_date)))
            return cur.rowcount > 0

    def list_range(
        self,
        *,
        user_id: Optional[int] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[dict]:
        clauses = ["1=1"]
        params: list[object] = []

        if user_id is not None:
            clauses.append("a.user_id=?")
            params.append(int(user_id))
        if start is not None:
            clauses.append("a.date>=?")
            params.append(to_db_date(start))
        if end is not None:
            clauses.append("a.date<=?")
            params.append(to_db_date(end))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT a.id, a.user_id, a.date, a.status, a.check_in, a.check_out,
                       u.employee_id, p.first_name, p.last_name
                FROM attendance a
                JOIN users u ON u.id = a.user_id
                LEFT JOIN employee_profiles p ON p.user_id = a.user_id
                WHERE {where}
                ORDER BY a.date DESC, a.user_id ASC
                """,
                tuple(params),
            )
            return fetchall(cur)
