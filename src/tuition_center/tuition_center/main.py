from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .common.http import register_error_handlers
from .container import build_container, build_store
from .core.constants import DEFAULT_WORKING_DAYS, PASS_MARK
from .database.bootstrap import apply_schema, list_tables
from .database.connection import DBConfig, DatabaseConnection

from .academics.controller import register as register_academics
from .attendance.controller import register as register_attendance
from .dashboard.controller import register as register_dashboard
from .fees.controller import register as register_fees
from .payroll.controller import register as register_payroll
from .staff.controller import register as register_staff
from .students.controller import register as register_students

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def create_app(settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.json.sort_keys = False

    backend = getattr(settings, "STORE_BACKEND", "mysql")
    db_config = getattr(settings, "DB_CONFIG", {})
    logger.info("Starting tuition center API (settings=%s, store=%s)", settings_module, backend)

    if backend == "mysql" and bool(getattr(settings, "AUTO_INIT_DB", False)):
        conn_factory = DatabaseConnection(DBConfig.from_dict(db_config))
        apply_schema(conn_factory, schema_path=SCHEMA_PATH)
        logger.info("Schema ready (tables=%d)", len(list_tables(conn_factory)))

    container = build_container(
        store=build_store(backend=backend, db_config=db_config),
        default_working_days=int(getattr(settings, "DEFAULT_WORKING_DAYS", DEFAULT_WORKING_DAYS)),
        pass_mark=float(getattr(settings, "PASS_MARK", PASS_MARK)),
        organization=getattr(settings, "ORGANIZATION", None),
    )
    app.extensions["container"] = container

    register_error_handlers(app)
    register_students(app, container)
    register_staff(app, container)
    register_attendance(app, container)
    register_payroll(app, container)
    register_academics(app, container)
    register_fees(app, container)
    register_dashboard(app, container)

    @app.route("/health", endpoint="health")
    def health():
        return jsonify({"status": "ok"})

    return app
