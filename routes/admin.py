"""Admin blueprint for account moderation and role management."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, Response, current_app, request
from flask_jwt_extended import get_jwt_identity, jwt_required

from accounts.errors import AuthorizationError, NotFoundError, ValidationError
from services.admin import AdminService, Executor
from utils.request_validation import parse_ban_params, parse_email_params

admin_bp = Blueprint("admin", __name__)


def _service() -> AdminService:
    return current_app.extensions["admin_service"]


def _require_executor() -> Executor:
    identity = get_jwt_identity()
    if not identity:
        raise AuthorizationError("permission denied")
    try:
        user = _service().repository.get(str(identity))
    except NotFoundError as exc:
        raise AuthorizationError("permission denied") from exc
    return Executor(email=user.email, role=user.role)


def _text(body: str) -> Response:
    return Response(body, status=HTTPStatus.OK, mimetype="text/plain")


@admin_bp.route("/ban", methods=["POST"])
@jwt_required()
def ban_user():
    """Ban a lower-privileged user."""

    executor = _require_executor()
    params = parse_ban_params(request)
    return _text(_service().ban(executor, params.email, params.reason))


@admin_bp.route("/unban", methods=["POST"])
@jwt_required()
def unban_user():
    """Lift a ban from a lower-privileged user."""

    executor = _require_executor()
    params = parse_email_params(request)
    return _text(_service().unban(executor, params.email))


@admin_bp.route("/inspect", methods=["GET"])
@jwt_required()
def inspect_user():
    """Return the ban history of a user as plain text."""

    executor = _require_executor()
    email = (request.args.get("email") or "").strip()
    if not email:
        raise ValidationError("email is required")
    return _text(_service().inspect(executor, email))


@admin_bp.route("/promote", methods=["POST"])
@jwt_required()
def promote_user():
    executor = _require_executor()
    params = parse_email_params(request)
    return _text(_service().promote(executor, params.email))


@admin_bp.route("/fire", methods=["POST"])
@jwt_required()
def fire_admin():
    executor = _require_executor()
    params = parse_email_params(request)
    return _text(_service().fire(executor, params.email))
