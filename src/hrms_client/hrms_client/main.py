from __future__ import annotations

import atexit
import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, flash, redirect, render_template, url_for

from config import get_settings_module

from .auth.decorators import clear_auth, current_auth, render_forbidden
from .common.coerce import format_money
from .container import Container, build_container
from .core.constants import DEFAULT_REFRESH_SECONDS
from .core.exceptions import ApiError, AuthorizationError
from .analytics.controller import register as register_analytics
from .attendance.controller import register as register_attendance
from .auth.controller import register as register_auth
from .employees.controller import register as register_employees
from .leaves.controller import register as register_leaves
from .payroll.controller import register as register_payroll
from .reports.controller import register as register_reports
from .teams.controller import register as register_teams

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _configure_logging(level_name: str) -> int:
    level = getattr(logging, str(level_name).upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger(__name__.rsplit(".", 1)[0]).setLevel(level)
    # urllib3 logs every connection at DEBUG
    logging.getLogger("urllib3").setLevel(max(level, logging.INFO))
    return level


def _register_error_handlers(app: Flask, container: Container) -> None:
    @app.errorhandler(ApiError)
    def handle_api_error(e: ApiError):
        if e.is_unauthorized:
            auth = current_auth()
            if auth is not None:
                container.end_session(auth)
            clear_auth()
            flash("Your session has expired. Please log in again.", "warning")
            return redirect(url_for("login"))
        if e.is_forbidden:
            return render_forbidden(current_auth())
        logger.error("HRMS API error (%s): %s", e.status_code, e.message)
        return render_template("error.html", message=e.message, current_user=current_auth()), 502

    @app.errorhandler(AuthorizationError)
    def handle_authorization_error(e: AuthorizationError):
        return render_forbidden(current_auth())


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__, template_folder="../../../templates", static_folder="../../../static")

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    api_config = getattr(settings, "API_CONFIG")
    refresh_interval = float(getattr(settings, "REFRESH_INTERVAL_SECONDS", DEFAULT_REFRESH_SECONDS))
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    app.logger.setLevel(_configure_logging(getattr(settings, "LOG_LEVEL", "INFO")))
    logger.info("settings=%s api=%s", settings_module, api_config.get("base_url"))

    if container is None:
        container = build_container(api_config=api_config, refresh_interval=refresh_interval)
    app.extensions["hrms_container"] = container
    atexit.register(container.pollers.stop_all)

    app.jinja_env.filters["money"] = format_money
    app.jinja_env.filters["label"] = lambda value: getattr(value, "value", value)

    @app.context_processor
    def inject_current_user():
        return {"current_user": current_auth()}

    register_auth(app, container)
    register_attendance(app, container)
    register_leaves(app, container)
    register_teams(app, container)
    register_employees(app, container)
    register_payroll(app, container)
    register_reports(app, container)
    register_analytics(app, container)
    _register_error_handlers(app, container)

    return app
