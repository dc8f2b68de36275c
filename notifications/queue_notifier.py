"""Bounded in-process notification queue."""

from __future__ import annotations

import logging
import queue

from .base import Notifier

logger = logging.getLogger(__name__)

DEFAULT_QUEUE_SIZE = 1000


class QueueNotifier(Notifier):
    """Buffer audit lines for an asynchronous consumer.

    ``send`` never blocks: when the queue is full or the notifier has been
    closed, the message is dropped and a warning is logged.
    """

    def __init__(self, maxsize: int = DEFAULT_QUEUE_SIZE):
        self._queue: queue.Queue[bytes] = queue.Queue(maxsize=maxsize)
        self._closed = False
        self.dropped = 0

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def maxsize(self) -> int:
        return self._queue.maxsize

    def send(self, message: bytes) -> None:
        if self._closed:
            self.dropped += 1
            logger.warning("Notifier closed; dropping audit message: %r", message)
            return
        try:
            self._queue.put_nowait(message)
        except queue.Full:
            self.dropped += 1
            logger.warning("Notifier queue full; dropping audit message: %r", message)

    def get(self, timeout: float | None = None) -> bytes:
        """Block until a message is available. Raises ``queue.Empty`` on timeout."""

        return self._queue.get(timeout=timeout)

    def drain(self) -> list[bytes]:
        """Return every pending message in send order."""

        messages = []
        while True:
            try:
                messages.append(self._queue.get_nowait())
            except queue.Empty:
                return messages

    def close(self) -> None:
        self._closed = True
