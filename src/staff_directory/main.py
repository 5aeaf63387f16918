from __future__ import annotations

import importlib
import logging
from typing import Any, Optional

from dotenv import load_dotenv
from flask import Flask

from .config import get_settings_module
from .container import build_container
from .core.constants import DEFAULT_DATA_FILE, DEFAULT_PORT, ENFORCE_ROLE_ON_GENERAL_UPDATE
from .database.bootstrap import ensure_data_file, ensure_demo_users
from .database.connection import JsonFileStore, StoreConfig
from .users.controller import register as register_users

logger = logging.getLogger("staff_directory")


def configure_logging(level: str) -> None:
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s"))
        logger.addHandler(handler)
    logger.setLevel(level.upper())


def create_app(overrides: Optional[dict[str, Any]] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.config["SECRET_KEY"] = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["DATA_FILE"] = getattr(settings, "DATA_FILE", DEFAULT_DATA_FILE)
    app.config["PORT"] = int(getattr(settings, "PORT", DEFAULT_PORT))
    app.config["LOG_LEVEL"] = getattr(settings, "LOG_LEVEL", "INFO")
    app.config["AUTO_SEED_DB"] = bool(getattr(settings, "AUTO_SEED_DB", False))
    app.config["ENFORCE_ROLE_ON_GENERAL_UPDATE"] = bool(
        getattr(settings, "ENFORCE_ROLE_ON_GENERAL_UPDATE", ENFORCE_ROLE_ON_GENERAL_UPDATE)
    )
    app.config.update(overrides or {})

    configure_logging(app.config["LOG_LEVEL"])
    logger.info("settings=%s data_file=%s", settings_module, app.config["DATA_FILE"])

    store = JsonFileStore.get_instance(StoreConfig(data_file=str(app.config["DATA_FILE"])))
    ensure_data_file(store)
    if app.config["AUTO_SEED_DB"]:
        created = ensure_demo_users(store)
        logger.info("demo seed ready (created=%d)", created)

    container = build_container(
        data_file=app.config["DATA_FILE"],
        enforce_role_on_update=app.config["ENFORCE_ROLE_ON_GENERAL_UPDATE"],
    )
    app.extensions["staff_directory"] = container

    register_users(app, container)

    return app


def run() -> None:
    app = create_app()
    app.run(host="0.0.0.0", port=app.config["PORT"], debug=app.config["DEBUG"])


if __name__ == "__main__":
    run()
