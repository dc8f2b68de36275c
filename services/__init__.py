"""Application services."""

from .admin import AdminService, Executor, KeyedLock

__all__ = ["AdminService", "Executor", "KeyedLock"]
