"""User repository backends."""

from .abstract_repository import UserRepository
from .memory_repository import InMemoryUserRepository
from .sql_repository import SQLUserRepository

__all__ = ["UserRepository", "InMemoryUserRepository", "SQLUserRepository"]
