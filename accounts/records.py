"""Role enumeration and the user records handed out by repositories."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum


class Role(IntEnum):
    """Account roles, ordered by privilege."""

    USER = 0
    ADMIN = 1
    SUPER_ADMIN = 2


@dataclass(frozen=True)
class BanHistoryEntry:
    """A single ban or unban event. Never modified once appended."""

    executor: str
    is_ban: bool
    timestamp: datetime
    reason: str = ""


@dataclass
class UserRecord:
    """Working copy of a stored user.

    Changes are only visible to other readers after the owning repository's
    ``update`` returns.
    """

    email: str
    role: Role = Role.USER
    banned: bool = False
    ban_history: list[BanHistoryEntry] = field(default_factory=list)
