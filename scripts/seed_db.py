from __future__ import annotations

import argparse
import importlib

from dotenv import load_dotenv

from edutrack.config import get_settings_module
from edutrack.database.bootstrap import ensure_demo_admin


def main() -> None:
    parser = argparse.ArgumentParser(description="Create or refresh the bootstrap administrator account.")
    parser.add_argument("--identifier", default="ADMIN01")
    parser.add_argument("--name", default="Administrator")
    parser.add_argument("--password", default="admin123")
    args = parser.parse_args()

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    ensure_demo_admin(db_config, identifier=args.identifier, name=args.name, password=args.password)
    print(
        f"OK: Administrator {args.identifier.strip().upper()} ready -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
    )


if __name__ == "__main__":
    main()
