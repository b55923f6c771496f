"""Generate payroll from the command line (cron / scheduled job).

Examples:
    python scripts/generate_payroll.py                  # previous calendar month
    python scripts/generate_payroll.py --month 1 --year 2026
    python scripts/generate_payroll.py --all            # backfill every month in attendance
"""

from __future__ import annotations

import argparse
import importlib
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Optional, Sequence

from dotenv import load_dotenv

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.payroll_system.payroll_system.common.datetime_utils import previous_month
from src.payroll_system.payroll_system.common.logging_utils import configure_logging
from src.payroll_system.payroll_system.container import build_container
from src.payroll_system.payroll_system.core.exceptions import InvalidPeriod, UpstreamUnavailable
from src.payroll_system.payroll_system.payroll.config import PayrollConfig
from src.payroll_system.payroll_system.payroll.service import PayrollGenerator

logger = logging.getLogger("generate_payroll")

EXIT_OK = 0
EXIT_UPSTREAM = 1
EXIT_INVALID = 2


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate payroll records from attendance.")
    parser.add_argument("--month", help="Month 1-12 (default: previous month)")
    parser.add_argument("--year", help="Year (default: year of previous month)")
    parser.add_argument("--all", action="store_true", help="Backfill every month present in attendance")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL from settings")
    return parser.parse_args(argv)


def run(generator: PayrollGenerator, args: argparse.Namespace, *, today: Optional[date] = None) -> int:
    try:
        if args.all:
            backfill = generator.generate_for_all_historical_periods()
            print(f"OK: {backfill.generated_count} payroll records generated over {len(backfill.results)} periods")
            return EXIT_OK

        default_month, default_year = previous_month(today or date.today())
        month = args.month if args.month is not None else default_month
        year = args.year if args.year is not None else default_year
        result = generator.generate_for_period(month, year)
        print(
            f"OK: {result.period.label} generated={result.generated_count} "
            f"skipped={result.skipped_count} failed={result.failed_count}"
        )
        return EXIT_OK
    except InvalidPeriod as exc:
        logger.error("Invalid period: %s", exc)
        return EXIT_INVALID
    except UpstreamUnavailable as exc:
        logger.error("Database unavailable: %s", exc)
        return EXIT_UPSTREAM


def main(argv: Optional[Sequence[str]] = None) -> int:
    load_dotenv(override=False)
    args = parse_args(argv)
    settings = importlib.import_module(get_settings_module())
    configure_logging(args.log_level or getattr(settings, "LOG_LEVEL", "INFO"))

    container = build_container(db_config=dict(settings.DB_CONFIG), payroll_config=PayrollConfig.from_settings(settings))
    return run(container.payroll_generator, args)


if __name__ == "__main__":
    raise SystemExit(main())
