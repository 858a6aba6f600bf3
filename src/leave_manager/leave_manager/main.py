from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .container import Container, build_container
from .core.constants import DEFAULT_ANNUAL_ALLOWANCE_DAYS
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .leaves.controller import register as register_leaves

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )


def container_from_settings(settings) -> Container:
    backend = str(getattr(settings, "STORAGE_BACKEND", "mysql")).lower()
    db_config = getattr(settings, "DB_CONFIG", None)

    if backend == "mysql":
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config)
            logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config)
            logger.info("Demo seed ready")

    return build_container(
        db_config=db_config,
        storage_backend=backend,
        annual_allowance=int(getattr(settings, "ANNUAL_LEAVE_ALLOWANCE", DEFAULT_ANNUAL_ALLOWANCE_DAYS)),
        serialize_writes=bool(getattr(settings, "SERIALIZE_LEAVE_WRITES", True)),
        check_balance_on_approve=bool(getattr(settings, "CHECK_BALANCE_ON_APPROVE", False)),
    )


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG", {})
        logger.info(
            "settings=%s backend=%s db=%s@%s:%s/%s",
            settings_module,
            getattr(settings, "STORAGE_BACKEND", "mysql"),
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        container = container_from_settings(settings)

    app.extensions["leave_container"] = container
    register_leaves(app, container)

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "ok"})

    return app
