"""Shared pytest fixtures for the application tests."""

from __future__ import annotations

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest
from flask import Flask
from flask.testing import FlaskClient

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from accounts.records import Role, UserRecord  # noqa: E402
from app import create_app  # noqa: E402
from config import Config  # noqa: E402
from models import db  # noqa: E402
from notifications import QueueNotifier  # noqa: E402

FIXED_NOW = datetime(2024, 3, 17, 9, 30, 15, tzinfo=timezone.utc)


class _BaseTestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    JWT_SECRET_KEY = "test-secret-key-with-enough-length-for-hs256"


@pytest.fixture()
def notifier() -> QueueNotifier:
    return QueueNotifier(maxsize=100)


@pytest.fixture()
def app(notifier: QueueNotifier) -> Flask:
    """Create a Flask application instance for tests."""

    application = create_app(_BaseTestConfig, notifier=notifier)
    application.extensions["admin_service"].clock = lambda: FIXED_NOW

    with application.app_context():
        db.create_all()

    yield application

    with application.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Return a test client for the Flask app."""

    return app.test_client()


@pytest.fixture()
def make_user(app: Flask):
    """Persist a user through the app's repository."""

    def _make_user(email: str, role: Role = Role.USER) -> UserRecord:
        record = UserRecord(email=email, role=role)
        with app.app_context():
            app.extensions["admin_service"].repository.add(record)
        return record

    return _make_user
