from __future__ import annotations

import sqlite3
from typing import Any, Mapping, Optional, Sequence

from ..core.constants import PRIVILEGED_PROFILE_FIELDS, SELF_PROFILE_FIELDS
from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.sqlite_base import db_cursor, fetchall, fetchone
from .model import User
from .repository import UserRepository

PROFILE_COLUMNS = SELF_PROFILE_FIELDS + PRIVILEGED_PROFILE_FIELDS

EMPLOYEE_SELECT = """
    SELECT u.id, u.employee_id, u.username, u.email, u.role, u.created_at,
           p.first_name, p.last_name, p.phone, p.address, p.profile_picture,
           p.job_title, p.department, p.hire_date, p.employment_type, p.salary
    FROM users u
    LEFT JOIN employee_profiles p ON u.id = p.user_id
"""


def _to_user(row: dict) -> User:
    return User(
        user_id=int(row["id"]),
        employee_id=row["employee_id"],
        username=row.get("username"),
        email=row["email"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
    )


class SQLiteUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id, employee_id, username, email, password_hash, role FROM users WHERE id=?",
                (int(user_id),),
            )
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_employee_id(self, employee_id: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id, employee_id, username, email, password_hash, role FROM users WHERE employee_id=?",
                (employee_id,),
            )
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_login(self, identifier: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, employee_id, username, email, password_hash, role
                FROM users
                WHERE username=? OR lower(email)=lower(?)
                ORDER BY id
                LIMIT 1
                """,
                (identifier, identifier),
            )
            row = fetchone(cur)
            return _to_user(row) if row else None

    def create_user(
        self,
        *,
        employee_id: str,
        username: Optional[str],
        email: str,
        password_hash: str,
        role: Role,
        profile: Optional[Mapping[str, Any]] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(employee_id, username, email, password_hash, role)
                VALUES(?,?,?,?,?)
                """,
                (employee_id, username, email, password_hash, Role(role).value),
            )
            user_id = int(cur.lastrowid)
            fields = {k: v for k, v in (profile or {}).items() if k in PROFILE_COLUMNS}
            columns = ["user_id", *fields]
            cur.execute(
                f"INSERT INTO employee_profiles({', '.join(columns)}) VALUES({', '.join('?' for _ in columns)})",
                (user_id, *fields.values()),
            )
            return user_id

    def get_employee(self, user_id: int) -> Optional[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(EMPLOYEE_SELECT + " WHERE u.id = ?", (int(user_id),))
            return fetchone(cur)

    def list_employees(self) -> Sequence[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(EMPLOYEE_SELECT + " ORDER BY u.created_at DESC, u.id DESC")
            return fetchall(cur)

    def update_profile(self, user_id: int, fields: Mapping[str, Any]) -> None:
        # Column names come from a fixed whitelist; values stay parameterized.
        fields = {k: v for k, v in fields.items() if k in PROFILE_COLUMNS}
        columns = ["user_id", *fields]
        assignments = ", ".join([*(f"{c}=excluded.{c}" for c in fields), "updated_at=CURRENT_TIMESTAMP"])
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO employee_profiles({', '.join(columns)})
                VALUES({', '.join('?' for _ in columns)})
                ON CONFLICT(user_id) DO UPDATE SET {assignments}
                """,
                (int(user_id), *fields.values()),
            )

    def update_username(self, user_id: int, username: str) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("UPDATE users SET username=? WHERE id=?", (username, int(user_id)))
                return cur.rowcount > 0
        except sqlite3.IntegrityError:
            return False
