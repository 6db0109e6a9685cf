from __future__ import annotations

import importlib

from dotenv import load_dotenv

from dayflow.config import get_settings_module
from dayflow.database.bootstrap import apply_schema, list_tables


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = {"path": settings.DATABASE_PATH}

    apply_schema(db_config)
    tables = list_tables(db_config)
    print(f"OK: Applied schema.sql -> {db_config['path']} (tables={len(tables)}: {', '.join(tables)})")


if __name__ == "__main__":
    main()
