from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.datetime_utils import parse_date
from .core.constants import DEFAULT_FLOOR_DATE, DEFAULT_MAX_CYCLE_ITERATIONS
from .database.bootstrap import apply_schema, apply_sql_file, list_tables
from .database.connection import DBConfig

from .container import build_container
from .vacations.controller import register as register_vacations
from .vacations.migration import migrate_legacy_schedules


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    floor_date = parse_date(getattr(settings, "VACATION_FLOOR_DATE", DEFAULT_FLOOR_DATE), "VACATION_FLOOR_DATE")
    max_iterations = int(getattr(settings, "VACATION_MAX_CYCLE_ITERATIONS", DEFAULT_MAX_CYCLE_ITERATIONS))

    if app.config["DEBUG"]:
        print(
            "[vacation-system] settings=", settings_module,
            " db=", DBConfig.from_mapping(db_config).describe(),
            " floor=", floor_date.isoformat(),
        )

    database_dir = Path(__file__).resolve().parents[3] / "database"
    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=database_dir / "schema.sql")
        if app.config["DEBUG"]:
            print(f"[vacation-system] schema ready (tables={len(list_tables(db_config))})")
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_sql_file(db_config, path=database_dir / "seed.sql")
        if app.config["DEBUG"]:
            print("[vacation-system] demo seed ready")

    container = build_container(db_config=db_config, floor_date=floor_date, max_iterations=max_iterations)

    if bool(getattr(settings, "MIGRATE_LEGACY_SCHEDULES", True)):
        migrate_legacy_schedules(container.schedules_repo)

    register_vacations(app, container)

    return app
