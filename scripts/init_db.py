"""Create the payroll database tables and optionally load the demo data.

Examples:
    python scripts/init_db.py            # schema only
    python scripts/init_db.py --seed     # schema, then database/seed.sql
"""

from __future__ import annotations

import argparse
import importlib
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

import mysql.connector
from dotenv import load_dotenv

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.payroll_system.payroll_system.common.logging_utils import configure_logging
from src.payroll_system.payroll_system.database import bootstrap

logger = logging.getLogger("init_db")

EXIT_OK = 0
EXIT_DB_ERROR = 1

DATABASE_DIR = REPO_ROOT / "database"


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Apply the payroll schema (and demo seed) to MySQL.")
    parser.add_argument("--seed", action="store_true", help="Also load database/seed.sql")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL from settings")
    return parser.parse_args(argv)


def run(db_config: dict, args: argparse.Namespace, *, database_dir: Path = DATABASE_DIR) -> int:
    target = f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
    try:
        bootstrap.apply_schema(db_config, schema_path=database_dir / "schema.sql")
        if args.seed:
            bootstrap.apply_seed_sql(db_config, seed_path=database_dir / "seed.sql")
        tables = bootstrap.list_tables(db_config)
    except mysql.connector.Error as exc:
        logger.error("Database setup failed for %s: %s", target, exc, extra={"action": "init_db_failed"})
        return EXIT_DB_ERROR

    print(f"OK: {target} tables={len(tables)} seeded={'yes' if args.seed else 'no'}")
    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> int:
    load_dotenv(override=False)
    args = parse_args(argv)
    settings = importlib.import_module(get_settings_module())
    configure_logging(args.log_level or getattr(settings, "LOG_LEVEL", "INFO"))
    return run(dict(settings.DB_CONFIG), args)


if __name__ == "__main__":
    raise SystemExit(main())
