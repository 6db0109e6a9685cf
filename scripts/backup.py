"""Backup database.

Copies the SQLite file through sqlite3's online backup API, so it is safe to
run while the server is up. Output goes to ./backups/dayflow_<timestamp>.db.
"""

from __future__ import annotations

import importlib
from pathlib import Path

from dotenv import load_dotenv

from dayflow.config import get_settings_module
from dayflow.database.bootstrap import backup_database


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_path = Path(settings.DATABASE_PATH)
    if not db_path.exists():
        raise SystemExit(f"Database not found: {db_path}. Run scripts/init_db.py first.")

    out_dir = Path(__file__).resolve().parents[1] / "backups"
    out_file = backup_database({"path": str(db_path)}, out_dir)
    print(f"OK: Backup created: {out_file}")


if __name__ == "__main__":
    main()
