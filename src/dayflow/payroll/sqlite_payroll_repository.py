from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import PayrollStatus
from ..database.connection import DatabaseConnection
from ..database.sqlite_base import db_cursor, fetchall, fetchone
from .model import PayrollRecord
from .repository import PayrollRepository

RECORD_COLUMNS = """
    id, user_id, month, year, base_salary, allowances, deductions,
    net_salary, status, created_at, updated_at
"""


def _to_record(r: dict) -> PayrollRecord:
    return PayrollRecord(
        payroll_id=int(r["id"]),
        user_id=int(r["user_id"]),
        month=int(r["month"]),
        year=int(r["year"]),
        base_salary=float(r["base_salary"]),
        allowances=float(r["allowances"]),
        deductions=float(r["deductions"]),
        net_salary=float(r["net_salary"]),
        status=PayrollStatus(r["status"]),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class SQLitePayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def save_record(
        self,
        *,
        user_id: int,
        month: int,
        year: int,
        base_salary: float,
        allowances: float,
        deductions: float,
        net_salary: float,
        status: PayrollStatus,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO payroll(user_id, month, year, base_salary, allowances, deductions, net_salary, status)
                VALUES(?,?,?,?,?,?,?,?)
                ON CONFLICT(user_id, month, year) DO UPDATE SET
                    base_salary=excluded.base_salary,
                    allowances=excluded.allowances,
                    deductions=excluded.deductions,
                    net_salary=excluded.net_salary,
                    status=excluded.status,
                    updated_at=CURRENT_TIMESTAMP
                """,
                (
                    int(user_id),
                    int(month),
                    int(year),
                    float(base_salary),
                    float(allowances),
                    float(deductions),
                    float(net_salary),
                    PayrollStatus(status).value,
                ),
            )

            # On the update path lastrowid is not the row's id; look it up.
            cur.execute(
                "SELECT id FROM payroll WHERE user_id=? AND month=? AND year=?",
                (int(user_id), int(month), int(year)),
            )
            r = fetchone(cur)
            return int(r["id"]) if r else 0

    def get_record(self, *, payroll_id: int) -> Optional[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {RECORD_COLUMNS} FROM payroll WHERE id=?", (int(payroll_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_for_period(self, *, user_id: int, month: int, year: int) -> Optional[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {RECORD_COLUMNS} FROM payroll WHERE user_id=? AND month=? AND year=?",
                (int(user_id), int(month), int(year)),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def set_status(self, *, payroll_id: int, status: PayrollStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE payroll SET status=?, updated_at=CURRENT_TIMESTAMP WHERE id=?",
                (PayrollStatus(status).value, int(payroll_id)),
            )
            return cur.rowcount > 0

    def list_records(
        self,
        *,
        user_id: Optional[int] = None,
        month: Optional[int] = None,
        year: Optional[int] = None,
    ) -> Sequence[dict]:
        clauses = ["1=1"]
        params: list[object] = []

        if user_id is not None:
            clauses.append("pr.user_id=?")
            params.append(int(user_id))
        if month is not None:
            clauses.append("pr.month=?")
            params.append(int(month))
        if year is not None:
            clauses.append("pr.year=?")
            params.append(int(year))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT pr.id, pr.user_id, pr.month, pr.year, pr.base_salary, pr.allowances,
                       pr.deductions, pr.net_salary, pr.status, pr.created_at, pr.updated_at,
                       u.employee_id, p.first_name, p.last_name, p.department
                FROM payroll pr
                JOIN users u ON u.id = pr.user_id
                LEFT JOIN employee_profiles p ON p.user_id = pr.user_id
                WHERE {where}
                ORDER BY pr.year DESC, pr.month DESC, pr.id DESC
                """,
                tuple(params),
            )
            return fetchall(cur)
