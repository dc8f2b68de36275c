"""Flask-SQLAlchemy backed user repository."""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError

from accounts.errors import NotFoundError, PersistenceError
from accounts.records import UserRecord
from models import db
from models.ban_history import BanHistory
from models.user import User

from .abstract_repository import UserRepository

logger = logging.getLogger(__name__)


class SQLUserRepository(UserRepository):
    """Store users in the ``users`` table and their ledger in ``ban_history``.

    Must be used inside a Flask application context.
    """

    def _find(self, email: str) -> User | None:
        return db.session.execute(
            db.select(User).filter_by(email=email)
        ).scalar_one_or_none()

    def get(self, email: str) -> UserRecord:
        user = self._find(email)
        if user is None:
            raise NotFoundError(f"user {email} not found")
        record = user.to_record()
        # Hand out a detached copy; later reads must hit the database.
        db.session.expire(user)
        return record

    def update(self, email: str, user: UserRecord) -> None:
        try:
            row = self._find(email)
            if row is None:
                raise PersistenceError(f"user {email} does not exist")

            stored = [history.to_entry() for history in row.ban_history]
            stored_count = len(stored)
            if user.ban_history[:stored_count] != stored:
                raise PersistenceError("ban history is append-only")

            row.role = int(user.role)
            row.banned = user.banned
            for entry in user.ban_history[stored_count:]:
                row.ban_history.append(BanHistory.from_entry(entry))
            db.session.commit()
        except PersistenceError:
            db.session.rollback()
            raise
        except SQLAlchemyError as exc:
            db.session.rollback()
            logger.exception("Failed to update user %s", email)
            raise PersistenceError("could not update user") from exc

    def add(self, user: UserRecord) -> None:
        row = User(email=user.email, role=int(user.role), banned=user.banned)
        row.ban_history = [BanHistory.from_entry(entry) for entry in user.ban_history]
        db.session.add(row)
        try:
            db.session.commit()
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise PersistenceError(f"user {user.email} already exists") from exc
