from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Optional

from werkzeug.security import generate_password_hash

from ..core.enums import Role
from ..users.sqlite_user_repository import SQLiteUserRepository
from .connection import DBConfig, DatabaseConnection

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent / "schema.sql"


@dataclass(frozen=True)
class DemoUser:
    employee_id: str
    username: str
    email: str
    password: str
    role: str
    first_name: str
    last_name: str
    job_title: str
    department: str
    salary: float


DEMO_USERS = (
    DemoUser("EMP0001", "admin", "admin@dayflow.local", "admin123", "admin", "Ada", "Admin", "Administrator", "Management", 9000.0),
    DemoUser("EMP0002", "hr", "hr@dayflow.local", "hr123456", "hr", "Harper", "Reyes", "HR Manager", "Human Resources", 6000.0),
    DemoUser("EMP0003", "employee", "employee@dayflow.local", "employee123", "employee", "Eli", "Moss", "Developer", "Engineering", 4500.0),
)


def _connect(db_config: dict) -> sqlite3.Connection:
    path = str(db_config.get("path", "instance/dayflow.db"))
    if path != ":memory:":
        Path(path).parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(path)
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def apply_schema(db_config: dict, *, schema_path: Optional[str | Path] = None) -> None:
    schema_path = Path(schema_path) if schema_path else SCHEMA_PATH
    sql = schema_path.read_text(encoding="utf-8")

    conn = _connect(db_config)
    try:
        conn.executescript(sql)
        conn.commit()
    finally:
        conn.close()
    logger.info("Applied schema %s to %s", schema_path.name, db_config.get("path"))


def ensure_demo_users(db_config: dict) -> int:
    """Create the demo accounts that do not exist yet; return how many were added.

    Existing accounts (matched by employee_id) are left untouched, so changed
    passwords and profiles survive restarts.
    """
    conn_factory = DatabaseConnection(DBConfig(path=str(db_config.get("path", "instance/dayflow.db"))))
    users = SQLiteUserRepository(conn_factory)

    created = 0
    with conn_factory.transaction():
        for user in DEMO_USERS:
            if users.get_by_employee_id(user.employee_id):
                continue
            users.create_user(
                employee_id=user.employee_id,
                username=user.username,
                email=user.email,
                password_hash=generate_password_hash(user.password),
                role=Role(user.role),
                profile={
                    "first_name": user.first_name,
                    "last_name": user.last_name,
                    "job_title": user.job_title,
                    "department": user.department,
                    "employment_type": "full_time",
                    "salary": user.salary,
                    "hire_date": date.today().isoformat(),
                },
            )
            created += 1

    logger.info("Seeded %d of %d demo users", created, len(DEMO_USERS))
    return created


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(db_config)
    try:
        cur = conn.cursor()
        cur.execute("SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%' ORDER BY name")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()


def backup_database(db_config: dict, out_dir: str | Path) -> Path:
    """Copy the live database into ``out_dir`` as a timestamped file."""
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    out_file = out_dir / f"dayflow_{ts}.db"

    src = _connect(db_config)
    dst = sqlite3.connect(str(out_file))
    try:
        # Online backup: safe while the app holds other connections.
        src.backup(dst)
    finally:
        dst.close()
        src.close()
    logger.info("Backed up %s to %s", db_config.get("path"), out_file)
    return out_file
