"""Role-based authorization policy."""

from __future__ import annotations

from .records import Role


def can_act(executor_role: Role, target_role: Role) -> bool:
    """Return True when the executor strictly outranks the target."""

    return Role(executor_role) > Role(target_role)
