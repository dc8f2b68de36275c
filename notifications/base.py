"""Notifier interface."""

from __future__ import annotations

from abc import ABC, abstractmethod


class Notifier(ABC):
    """One-way output channel for audit lines."""

    @abstractmethod
    def send(self, message: bytes) -> None:
        """Emit ``message`` without blocking. Must not raise."""
