from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .availability.controller import register as register_availability
from .container import Container, build_container
from .database.bootstrap import apply_schema, list_tables
from .shifts.controller import register as register_shifts
from .unavailability.controller import register as register_unavailability

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=Path(__file__).resolve().parents[3] / "database" / "schema.sql")
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        container = build_container(
            db_config=db_config,
            rate_limit={
                "max_requests": getattr(settings, "RATE_LIMIT_MAX_REQUESTS", 30),
                "window_seconds": getattr(settings, "RATE_LIMIT_WINDOW_SECONDS", 60),
                "capacity": getattr(settings, "RATE_LIMIT_CAPACITY", 10_000),
            },
        )

    register_unavailability(app, container)
    register_availability(app, container)
    register_shifts(app, container)

    return app
