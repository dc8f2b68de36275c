"""Tests for the Flask application factory."""
from __future__ import annotations

import pytest

from app import create_app
from config import Config
from notifications import LoggingNotifier, QueueNotifier
from services.admin import AdminService
from storage import InMemoryUserRepository, SQLUserRepository


class _FactoryConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"


def test_health_endpoint_returns_ok(client):
    """The health endpoint should respond with an OK payload."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.get_json() == {"status": "ok"}
    assert response.headers.get("X-Request-ID")


def test_blueprints_registered(app):
    """Application factory should register the admin blueprint."""
    assert "admin" in app.blueprints
    rules = {rule.rule for rule in app.url_map.iter_rules()}
    assert {"/admin/ban", "/admin/unban", "/admin/inspect", "/admin/promote", "/admin/fire"} <= rules


def test_default_collaborators():
    app = create_app(_FactoryConfig)
    service = app.extensions["admin_service"]

    assert isinstance(service, AdminService)
    assert isinstance(service.repository, SQLUserRepository)
    assert isinstance(service.notifier, LoggingNotifier)
    assert service.enforce_role_change_policy is False


def test_injected_collaborators_and_policy_flag():
    class StrictConfig(_FactoryConfig):
        ENFORCE_ROLE_CHANGE_POLICY = True

    repository = InMemoryUserRepository()
    app = create_app(StrictConfig, repository=repository)

    service = app.extensions["admin_service"]
    assert service.repository is repository
    assert service.enforce_role_change_policy is True


def test_request_id_is_echoed(client):
    response = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"


def test_unknown_route_uses_json_error_shape(client):
    response = client.get("/missing")

    assert response.status_code == 404
    payload = response.get_json()
    assert payload["error"] == "Not Found"
    assert payload["request_id"]


def test_rate_limit_exceeded_returns_json():
    class LimitedConfig(_FactoryConfig):
        RATE_LIMIT = "2 per minute"

    client = create_app(LimitedConfig).test_client()

    client.get("/health")
    client.get("/health")
    response = client.get("/health")

    assert response.status_code == 429
    payload = response.get_json()
    assert payload["error"] == "Too Many Requests"
    assert "request_id" in payload


def test_queue_channel_is_bounded_by_config():
    class QueueConfig(_FactoryConfig):
        NOTIFIER_CHANNEL = "queue"
        NOTIFIER_QUEUE_SIZE = 2

    notifier = create_app(QueueConfig).extensions["admin_service"].notifier

    assert isinstance(notifier, QueueNotifier)
    assert notifier.maxsize == 2
    for message in (b"one", b"two", b"three"):
        notifier.send(message)
    assert notifier.drain() == [b"one", b"two"]
    assert notifier.dropped == 1


def test_unknown_notifier_channel_is_rejected():
    class BadChannelConfig(_FactoryConfig):
        NOTIFIER_CHANNEL = "carrier-pigeon"

    with pytest.raises(ValueError):
        create_app(BadChannelConfig)
