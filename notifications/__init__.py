"""Audit notification channels."""

from .base import Notifier
from .logging_notifier import LoggingNotifier
from .queue_notifier import QueueNotifier

__all__ = ["Notifier", "LoggingNotifier", "QueueNotifier"]
