from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import Container, build_container
from .core.constants import DEFAULT_CHECKPOINT_WEIGHT, DEFAULT_DAILY_WEIGHT
from .database.bootstrap import apply_schema, list_tables
from .reports.controller import register as register_reports
from .users.controller import register as register_users

log = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def create_app(*, container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    """Application factory.

    ``container`` lets tests inject services backed by in-memory repositories;
    otherwise one is built from the selected settings module.
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        if app.config["DEBUG"]:
            logging.basicConfig(level=logging.INFO)
            log.info(
                "settings=%s db=%s@%s:%s/%s",
                settings_module,
                db_config.get("user"),
                db_config.get("host"),
                db_config.get("port", 3306),
                db_config.get("database"),
            )

        if getattr(settings, "AUTO_INIT_DB", False):
            apply_schema(db_config, schema_path=SCHEMA_PATH)
            log.info("schema ready (tables=%d)", len(list_tables(db_config)))

        container = build_container(
            db_config=db_config,
            checkpoint_weight=getattr(settings, "CHECKPOINT_WEIGHT", DEFAULT_CHECKPOINT_WEIGHT),
            daily_weight=getattr(settings, "DAILY_WEIGHT", DEFAULT_DAILY_WEIGHT),
        )

    register_users(app, container)
    register_reports(app, container)

    return app
