from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus, LeaveStatus, LeaveType
from ..database.connection import DatabaseConnection
from ..database.sqlite_base import db_cursor, fetchall, fetchone, from_db_date, to_db_date
from .model import LeaveRequest
from .repository import LeaveRepository

LEAVE_COLUMNS = """
    id, user_id, leave_type, start_date, end_date, status,
    remarks, admin_comment, approved_by, created_at, updated_at
"""


def _to_leave(r: dict) -> LeaveRequest:
    return LeaveRequest(
        request_id=int(r["id"]),
        user_id=int(r["user_id"]),
        leave_type=LeaveType(r["leave_type"]),
        start_date=from_db_date(r["start_date"]),
        end_date=from_db_date(r["end_date"]),
        status=LeaveStatus(r["status"]),
        remarks=r.get("remarks"),
        admin_comment=r.get("admin_comment"),
        approved_by=r.get("approved_by"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class SQLiteLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create_leave(
        self,
        *,
        user_id: int,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        remarks: str,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(user_id, leave_type, start_date, end_date, remarks, status)
                VALUES(?,?,?,?,?,?)
                """,
                (
                    int(user_id),
                    LeaveType(leave_type).value,
                    to_db_date(start_date),
                    to_db_date(end_date),
                    remarks,
                    LeaveStatus.PENDING.value,
                ),
            )
            return int(cur.lastrowid)

    def get_leave(self, *, request_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {LEAVE_COLUMNS} FROM leave_requests WHERE id=?",
                (int(request_id),),
            )
            r = fetchone(cur)
            return _to_leave(r) if r else None

    def list_overlapping(
        self,
        *,
        user_id: int,
        start_date: date,
        end_date: date,
        exclude_request_id: int,
    ) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {LEAVE_COLUMNS}
                FROM leave_requests
                WHERE user_id=? AND id<>? AND status<>?
                  AND start_date<=? AND end_date>=?
                ORDER BY id
                """,
                (
                    int(user_id),
                    int(exclude_request_id),
                    LeaveStatus.REJECTED.value,
                    to_db_date(end_date),
                    to_db_date(start_date),
                ),
            )
            return [_to_leave(r) for r in fetchall(cur)]

    def list_leave_requests(
        self,
        *,
        status: Optional[LeaveStatus] = None,
        user_id: Optional[int] = None,
    ) -> Sequence[dict]:
        clauses = ["1=1"]
        params: list[object] = []

        if status is not None:
            clauses.append("l.status=?")
            params.append(LeaveStatus(status).value)
        if user_id is not None:
            clauses.append("l.user_id=?")
            params.append(int(user_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT l.id, l.user_id, l.leave_type, l.start_date, l.end_date,
                       l.remarks, l.status, l.admin_comment, l.approved_by,
                       l.created_at, l.updated_at,
                       u.employee_id, p.first_name, p.last_name
                FROM leave_requests l
                JOIN users u ON l.user_id = u.id
                LEFT JOIN employee_profiles p ON u.id = p.user_id
                WHERE {where}
                ORDER BY l.created_at DESC, l.id DESC
                """,
                tuple(params),
            )
            return fetchall(cur)

    def decide_leave(
        self,
        *,
        request_id: int,
        status: LeaveStatus,
        decided_by: int,
        admin_comment: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET status=?, approved_by=?, admin_comment=?, updated_at=CURRENT_TIMESTAMP
                WHERE id=?
                """,
                (LeaveStatus(status).value, int(decided_by), admin_comment, int(request_id)),
            )
            return cur.rowcount > 0

    def save_snapshot(self, *, request_id: int, work_date: date, previous_status: Optional[AttendanceStatus]) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_attendance_snapshots(leave_id, date, previous_status)
                VALUES(?,?,?)
                ON CONFLICT(leave_id, date) DO UPDATE SET previous_status=excluded.previous_status
                """,
                (
                    int(request_id),
                    to_db_date(work_date),
                    AttendanceStatus(previous_status).value if previous_status else None,
                ),
            )

    def get_snapshots(self, *, request_id: int) -> dict[date, Optional[AttendanceStatus]]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT date, previous_status FROM leave_attendance_snapshots WHERE leave_id=?",
                (int(request_id),),
            )
            return {
                from_db_date(r["date"]): (AttendanceStatus(r["previous_status"]) if r.get("previous_status") else None)
                for r in fetchall(cur)
            }
