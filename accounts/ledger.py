"""Append-only ban history kept on each user record."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable

from .records import BanHistoryEntry, UserRecord

BAN_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def record_event(
    user: UserRecord,
    executor_email: str,
    is_ban: bool,
    reason: str = "",
    timestamp: datetime | None = None,
) -> BanHistoryEntry:
    """Append a ban or unban entry and update the banned flag.

    Only the in-memory record changes; the caller persists it.
    """

    entry = BanHistoryEntry(
        executor=executor_email,
        is_ban=is_ban,
        timestamp=timestamp or datetime.now(timezone.utc),
        reason=(reason or "") if is_ban else "",
    )
    user.ban_history.append(entry)
    user.banned = is_ban
    return entry


def _format_timestamp(value: datetime) -> str:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime(BAN_TIME_FORMAT)


def render_history(entries: Iterable[BanHistoryEntry]) -> str:
    """Render entries in ledger order, one newline-terminated line each."""

    lines = []
    for entry in entries:
        if entry.is_ban:
            action = f"banned (reason: {entry.reason})"
        else:
            action = "unbanned"
        lines.append(
            f"-- was {action} at {_format_timestamp(entry.timestamp)} by {entry.executor}\n"
        )
    return "".join(lines)
