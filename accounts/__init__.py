"""Account domain: roles, user records, ban ledger and authorization policy."""

from .errors import (
    AccountError,
    AuthorizationError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from .ledger import BAN_TIME_FORMAT, record_event, render_history
from .policy import can_act
from .records import BanHistoryEntry, Role, UserRecord

__all__ = [
    "AccountError",
    "AuthorizationError",
    "NotFoundError",
    "PersistenceError",
    "ValidationError",
    "BAN_TIME_FORMAT",
    "record_event",
    "render_history",
    "can_act",
    "BanHistoryEntry",
    "Role",
    "UserRecord",
]
