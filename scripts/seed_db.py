from __future__ import annotations

import importlib

from dotenv import load_dotenv

from classroom_attendance.config import get_settings_module
from classroom_attendance.database.bootstrap import apply_schema, ensure_demo_data
from classroom_attendance.main import SCHEMA_PATH


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    # Seeding needs the tables; schema.sql is idempotent.
    apply_schema(db_config, schema_path=SCHEMA_PATH)
    ensure_demo_data(db_config)

    print(
        "OK: Seeded demo class, student and accounts (admin/admin123, teacher1/teacher123, aditya/student123) -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
    )


if __name__ == "__main__":
    main()
