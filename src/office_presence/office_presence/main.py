from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from .config import get_settings_module
from .core.constants import DEFAULT_WEEK_OFFSET_LIMIT
from .core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from .database.bootstrap import apply_schema, list_tables
from .database.connection import DBConfig, DatabaseConnection

from .container import Container, build_container
from .admin.controller import register as register_admin
from .analytics.controller import register as register_analytics
from .attendance.controller import register as register_attendance
from .capacity.controller import register as register_capacity
from .delegations.controller import register as register_delegations
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

ERROR_STATUS = (
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (ValidationError, 400),
    (ConflictError, 409),
)


def _register_error_handlers(app: Flask) -> None:
    for exc_type, status in ERROR_STATUS:

        def handler(exc, status=status):
            return jsonify({"error": str(exc)}), status

        app.register_error_handler(exc_type, handler)

    @app.errorhandler(Exception)
    def internal_error(exc):
        # HTTPExceptions (404 for unknown routes, 405...) keep their own status.
        code = getattr(exc, "code", None)
        if isinstance(code, int) and 400 <= code < 500:
            return jsonify({"error": getattr(exc, "description", str(exc))}), code
        logger.exception("Unhandled error")
        return jsonify({"error": "Internal server error"}), 500


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["WEEK_OFFSET_LIMIT"] = int(getattr(settings, "WEEK_OFFSET_LIMIT", DEFAULT_WEEK_OFFSET_LIMIT))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
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
            conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(conn, schema_path=schema_path)
            logger.info("Schema ready (tables=%d)", len(list_tables(conn)))

        container = build_container(db_config=db_config)

    _register_error_handlers(app)
    register_users(app, container)
    register_attendance(app, container)
    register_delegations(app, container)
    register_capacity(app, container)
    register_analytics(app, container)
    register_admin(app, container)

    return app
