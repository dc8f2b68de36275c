"""Application factory."""

import json
import os
import uuid

from flask import Flask, Response, g, jsonify, request
from flask_cors import CORS
from flask_jwt_extended import JWTManager
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_migrate import Migrate
from werkzeug.exceptions import HTTPException

from accounts.errors import AccountError
from config import Config
from models import db
from notifications import LoggingNotifier, Notifier, QueueNotifier
from routes.admin import admin_bp
from services.admin import AdminService
from storage import SQLUserRepository, UserRepository

migrate = Migrate()
jwt = JWTManager()


def create_app(
    config_class: type[Config] = Config,
    *,
    repository: UserRepository | None = None,
    notifier: Notifier | None = None,
) -> Flask:
    """Create and configure the Flask application.

    ``repository`` and ``notifier`` default to the SQL repository and an
    audit logger; pass other implementations to swap them out.
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Core subsystems
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)

    # CORS
    CORS(
        app,
        resources={r"/*": {"origins": app.config.get("CORS_ORIGINS", "*")}},
        supports_credentials=True,
    )

    # Rate limiting
    key_prefix = app.config.get("RATELIMIT_KEY_PREFIX") or str(uuid.uuid4())
    limiter = Limiter(
        key_func=get_remote_address,
        default_limits=[lambda: app.config.get("RATE_LIMIT", "60 per minute")],
        storage_uri=app.config.get("RATELIMIT_STORAGE_URI", "memory://"),
        headers_enabled=app.config.get("RATELIMIT_HEADERS_ENABLED", True),
        key_prefix=key_prefix,
    )
    limiter.init_app(app)
    app.config["RATELIMIT_KEY_PREFIX"] = key_prefix

    # Admin operations
    app.extensions["admin_service"] = AdminService(
        repository or SQLUserRepository(),
        notifier or _build_notifier(app),
        enforce_role_change_policy=app.config.get("ENFORCE_ROLE_CHANGE_POLICY", False),
    )
    if app.config.get("ENFORCE_ROLE_CHANGE_POLICY"):
        app.logger.info("Role changes require the executor to outrank the target")

    # Blueprints
    app.register_blueprint(admin_bp, url_prefix="/admin")

    # Health
    @app.route("/health", methods=["GET"])
    def health_check():
        return jsonify({"status": "ok"})

    # Errors
    _register_error_handlers(app)

    return app


def _build_notifier(app: Flask) -> Notifier:
    """Build the audit channel selected by ``NOTIFIER_CHANNEL``."""
    channel = app.config.get("NOTIFIER_CHANNEL", "log")
    if channel == "queue":
        return QueueNotifier(int(app.config.get("NOTIFIER_QUEUE_SIZE", 1000)))
    if channel != "log":
        raise ValueError(f"Unknown NOTIFIER_CHANNEL: {channel!r}")
    return LoggingNotifier()


def _register_error_handlers(app: Flask) -> None:
    """Register error handlers that tag responses with request IDs."""

    @app.before_request
    def _assign_request_id():
        g.request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

    @app.after_request
    def _add_request_id_header(response):
        request_id = g.get("request_id")
        if request_id:
            response.headers.setdefault("X-Request-ID", request_id)
        return response

    @app.errorhandler(AccountError)
    def _handle_account_error(error: AccountError):
        request_id = g.get("request_id") or str(uuid.uuid4())
        app.logger.info(
            "%s %s failed with %s: %s",
            request.method,
            request.path,
            type(error).__name__,
            error.description,
        )
        response = Response(error.description, status=error.status_code, mimetype="text/plain")
        response.headers.setdefault("X-Request-ID", request_id)
        return response

    @app.errorhandler(HTTPException)
    def _handle_http_exception(error: HTTPException):
        request_id = g.get("request_id") or str(uuid.uuid4())
        response = error.get_response()
        payload = {
            "error": getattr(error, "name", "Error"),
            "detail": error.description,
            "request_id": request_id,
        }
        response.data = json.dumps(payload)
        response.content_type = "application/json"
        response.headers.setdefault("X-Request-ID", request_id)
        return response

    @app.errorhandler(Exception)
    def _handle_unexpected(error: Exception):  # pragma: no cover
        request_id = g.get("request_id") or str(uuid.uuid4())
        app.logger.exception("Unhandled application error", exc_info=error)
        payload = {
            "error": "Internal Server Error",
            "detail": "An unexpected error occurred.",
            "request_id": request_id,
        }
        response = jsonify(payload)
        response.status_code = 500
        response.headers.setdefault("X-Request-ID", request_id)
        return response


if __name__ == "__main__":
    application = create_app()
    application.run(host="0.0.0.0", port=int(os.environ.get("PORT", 5000)))
