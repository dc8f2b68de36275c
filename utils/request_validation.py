"""Utilities for validating incoming Flask requests."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from email_validator import EmailNotValidError, validate_email
from flask import Request

from accounts.errors import ValidationError


@dataclass(frozen=True)
class EmailParams:
    """Body of endpoints that only name a target user."""

    email: str


@dataclass(frozen=True)
class BanParams:
    """Body of the ban endpoint."""

    email: str
    reason: str = ""


def parse_json_request(
    req: Request,
    *,
    required_keys: Iterable[str] | None = None,
) -> dict:
    """Return the parsed JSON object body or raise ``ValidationError``."""

    data = req.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("could not read params")

    if required_keys:
        missing = [key for key in required_keys if not data.get(key)]
        if missing:
            raise ValidationError(
                "Missing required fields: {}.".format(", ".join(sorted(missing)))
            )

    return data


def require_valid_email(raw_email: object) -> str:
    """Return the stripped email, raising ``ValidationError`` if malformed."""

    if not isinstance(raw_email, str) or not raw_email.strip():
        raise ValidationError("email is required")
    email = raw_email.strip()
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError as exc:
        raise ValidationError(f"invalid email: {exc}") from exc
    return email


def parse_ban_params(req: Request) -> BanParams:
    data = parse_json_request(req)
    reason = data.get("reason") or ""
    if not isinstance(reason, str):
        raise ValidationError("reason must be a string")
    return BanParams(email=require_valid_email(data.get("email")), reason=reason)


def parse_email_params(req: Request) -> EmailParams:
    data = parse_json_request(req)
    return EmailParams(email=require_valid_email(data.get("email")))
