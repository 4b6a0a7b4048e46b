from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.http import register_error_handlers
from .container import Container, build_container
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .database.connection import DBConfig

from .attendance.controller import register as register_attendance
from .fingerprints.controller import register as register_fingerprints
from .job_types.controller import register as register_job_types
from .payroll.controller import register as register_payroll
from .sites.controller import register as register_sites
from .workers.controller import register as register_workers

logger = logging.getLogger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def _prepare_database(settings, db_config: dict) -> None:
    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
        logger.info("Schema ready (tables=%s)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
        logger.info("Demo seed ready")


def create_app(container: Optional[Container] = None) -> Flask:
    """Build the JSON API.

    Pass ``container`` to run against pre-built services (tests); otherwise the
    MySQL-backed container is built from the APP_ENV settings module.
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.json.sort_keys = False

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    if container is None:
        db_config = dict(getattr(settings, "DB_CONFIG"))
        logger.info("settings=%s db=%s", settings_module, DBConfig.from_mapping(db_config).describe())
        _prepare_database(settings, db_config)
        container = build_container(
            db_config=db_config,
            match_threshold=int(getattr(settings, "FINGERPRINT_MATCH_THRESHOLD", 80)),
        )

    register_error_handlers(app)
    register_workers(app, container)
    register_sites(app, container)
    register_job_types(app, container)
    register_attendance(app, container)
    register_fingerprints(app, container)
    register_payroll(app, container)

    return app
