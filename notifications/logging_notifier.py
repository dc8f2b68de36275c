"""Notifier that writes audit lines to a logger."""

from __future__ import annotations

import logging

from .base import Notifier

AUDIT_LOGGER_NAME = "accounts.audit"


class LoggingNotifier(Notifier):
    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger(AUDIT_LOGGER_NAME)

    def send(self, message: bytes) -> None:
        self.logger.info(message.decode("utf-8", errors="replace"))
