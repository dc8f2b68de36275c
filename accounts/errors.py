"""Errors raised by account operations, each tagged with its HTTP status."""

from __future__ import annotations

from http import HTTPStatus


class AccountError(Exception):
    """Base class for failures surfaced to the caller."""

    status_code: int = HTTPStatus.UNPROCESSABLE_ENTITY

    def __init__(self, description: str):
        super().__init__(description)
        self.description = description


class ValidationError(AccountError):
    """Malformed request body or email address."""


class NotFoundError(AccountError):
    """No user is stored under the requested email."""


class AuthorizationError(AccountError):
    """The executor lacks the privilege to act on the target."""

    status_code = HTTPStatus.UNAUTHORIZED


class PersistenceError(AccountError):
    """The repository could not store the record."""
