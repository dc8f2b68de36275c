"""Repository abstraction for user records."""

from __future__ import annotations

from abc import ABC, abstractmethod

from accounts.records import UserRecord


class UserRepository(ABC):
    """Key-value store of users keyed by email."""

    @abstractmethod
    def get(self, email: str) -> UserRecord:
        """Return a working copy of the user or raise ``NotFoundError``."""

    @abstractmethod
    def update(self, email: str, user: UserRecord) -> None:
        """Persist ``user`` atomically or raise ``PersistenceError``."""

    @abstractmethod
    def add(self, user: UserRecord) -> None:
        """Store a new user or raise ``PersistenceError`` if it exists."""
