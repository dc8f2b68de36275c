"""Process-local repository, used for tests and local runs."""

from __future__ import annotations

import copy
import threading

from accounts.errors import NotFoundError, PersistenceError
from accounts.records import UserRecord

from .abstract_repository import UserRepository


class InMemoryUserRepository(UserRepository):
    """Keep deep copies of user records in a dict."""

    def __init__(self, users: list[UserRecord] | None = None):
        self._users: dict[str, UserRecord] = {}
        self._lock = threading.Lock()
        for user in users or []:
            self.add(user)

    def get(self, email: str) -> UserRecord:
        with self._lock:
            stored = self._users.get(email)
            if stored is None:
                raise NotFoundError(f"user {email} not found")
            return copy.deepcopy(stored)

    def update(self, email: str, user: UserRecord) -> None:
        with self._lock:
            stored = self._users.get(email)
            if stored is None:
                raise PersistenceError(f"user {email} does not exist")
            if user.ban_history[: len(stored.ban_history)] != stored.ban_history:
                raise PersistenceError("ban history is append-only")
            self._users[email] = copy.deepcopy(user)

    def add(self, user: UserRecord) -> None:
        with self._lock:
            if user.email in self._users:
                raise PersistenceError(f"user {user.email} already exists")
            self._users[user.email] = copy.deepcopy(user)
