from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .common.logging_utils import configure_logging
from .container import build_container
from .core.exceptions import UpstreamUnavailable
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .payroll.config import PayrollConfig
from .payroll.controller import register as register_payroll

logger = logging.getLogger(__name__)


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))

    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    database_dir = Path(__file__).resolve().parents[3] / "database"
    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=database_dir / "schema.sql")
        logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_config, seed_path=database_dir / "seed.sql")
        logger.info("demo seed ready")

    container = build_container(db_config=db_config, payroll_config=PayrollConfig.from_settings(settings))

    if bool(getattr(settings, "AUTO_BACKFILL_PAYROLL", False)):
        try:
            container.payroll_generator.generate_for_all_historical_periods()
        except UpstreamUnavailable as exc:
            # The API can still serve once the DB comes back; backfill can be re-run.
            logger.error("Startup payroll backfill failed: %s", exc, extra={"action": "payroll_backfill_aborted"})

    register_payroll(app, container)

    @app.errorhandler(404)
    def not_found(_error):
        return jsonify({"success": False, "message": "Route not found"}), 404

    @app.errorhandler(500)
    def server_error(error):
        logger.error("Unhandled error: %s", error)
        return jsonify({"success": False, "error": "Internal server error"}), 500

    return app
