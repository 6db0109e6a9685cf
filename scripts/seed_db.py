from __future__ import annotations

import importlib

from dotenv import load_dotenv

from dayflow.config import get_settings_module
from dayflow.database.bootstrap import DEMO_USERS, apply_schema, ensure_demo_users


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = {"path": settings.DATABASE_PATH}

    apply_schema(db_config)
    created = ensure_demo_users(db_config)

    print(f"OK: Seeded database -> {db_config['path']} ({created} new, existing accounts untouched)")
    for user in DEMO_USERS:
        print(f"  {user.role:<8} {user.username} / {user.password}")


if __name__ == "__main__":
    main()
