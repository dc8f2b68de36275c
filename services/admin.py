"""Admin service.

Account moderation operations (ban, unban, inspect, promote, fire) composed
over an injected repository and notifier, with Flask types kept out of this
layer.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone

from accounts.errors import AuthorizationError
from accounts.ledger import record_event, render_history
from accounts.policy import can_act
from accounts.records import Role, UserRecord
from notifications.base import Notifier
from storage.abstract_repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Executor:
    """The authenticated actor performing an operation."""

    email: str
    role: Role


class KeyedLock:
    """Hand out one lock per key.

    Entries are reference counted and removed once no caller holds or waits
    on them.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, list] = {}

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        with self._guard:
            entry = self._locks.get(key)
            if entry is None:
                entry = self._locks[key] = [threading.Lock(), 0]
            entry[1] += 1
        try:
            with entry[0]:
                yield
        finally:
            with self._guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._locks[key]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AdminService:
    def __init__(
        self,
        repository: UserRepository,
        notifier: Notifier,
        *,
        enforce_role_change_policy: bool = False,
        clock: Callable[[], datetime] = _utcnow,
        locks: KeyedLock | None = None,
    ):
        self.repository = repository
        self.notifier = notifier
        self.enforce_role_change_policy = enforce_role_change_policy
        self.clock = clock
        self.locks = locks or KeyedLock()

    def _notify(self, message: str) -> None:
        try:
            self.notifier.send(message.encode("utf-8"))
        except Exception:  # pragma: no cover - notifiers must not raise
            logger.exception("Failed to emit audit message %r", message)

    def _authorize(self, executor: Executor, target: UserRecord) -> None:
        if not can_act(executor.role, target.role):
            logger.info(
                "Denied %s (role %s) acting on %s (role %s)",
                executor.email,
                executor.role.name,
                target.email,
                target.role.name,
            )
            raise AuthorizationError("permission denied")

    def _set_ban_state(self, executor: Executor, email: str, is_ban: bool, reason: str) -> UserRecord:
        with self.locks.hold(email):
            user = self.repository.get(email)
            self._authorize(executor, user)
            record_event(user, executor.email, is_ban, reason, self.clock())
            self.repository.update(user.email, user)
        return user

    def ban(self, executor: Executor, email: str, reason: str = "") -> str:
        """Ban a lower-privileged user and record the reason."""

        user = self._set_ban_state(executor, email, True, reason)
        self._notify(f"admin {executor.email} banned user {user.email}")
        return f"user {user.email} banned"

    def unban(self, executor: Executor, email: str) -> str:
        """Lift a ban. Unban entries never carry a reason."""

        user = self._set_ban_state(executor, email, False, "")
        self._notify(f"admin {executor.email} unbanned user {user.email}")
        return f"user {user.email} unbanned"

    def inspect(self, executor: Executor, email: str) -> str:
        """Render the ban history of a user. Any executor may inspect."""

        user = self.repository.get(email)
        history = render_history(user.ban_history)
        self._notify(f"admin {executor.email} requested for ban history of user {user.email}")
        return f"user {user.email}:\n{history}"

    def _set_role(self, executor: Executor, email: str, role: Role) -> UserRecord:
        with self.locks.hold(email):
            user = self.repository.get(email)
            if self.enforce_role_change_policy:
                self._authorize(executor, user)
            user.role = role
            self.repository.update(user.email, user)
        return user

    def promote(self, executor: Executor, email: str) -> str:
        user = self._set_role(executor, email, Role.ADMIN)
        self._notify(f"admin {executor.email} promoted user {user.email}")
        return f"user {user.email} promoted to admin"

    def fire(self, executor: Executor, email: str) -> str:
        user = self._set_role(executor, email, Role.USER)
        self._notify(f"admin {executor.email} fired admin {user.email}")
        return f"admin {user.email} downgraded to user"
