"""Single-slot rendezvous between a background scan and the engine.

This module provides:
- ChannelFullError: Raised when a second result is put into a channel
- ResultChannel: Delivers one MetadataSyncResult to at most one consumer
"""

from __future__ import annotations

import threading
import time
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datasetsync.core.types import MetadataSyncResult


class ChannelFullError(Exception):
    """The channel already holds or delivered a result."""


class ResultChannel:
    """Thread-safe single-slot channel for one MetadataSyncResult.

    The producer never blocks: ``put`` stores the result and returns, so a
    producer whose consumer already gave up still finishes normally.
    The consumer waits with a deadline and takes the result at most once.

    Usage:
        channel = ResultChannel()
        threading.Thread(target=lambda: channel.put(scan()), daemon=True).start()
        result = channel.wait(timeout=5.0)  # None on timeout
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._ready = threading.Condition(self._lock)
        self._result: MetadataSyncResult | None = None
        self._filled = False
        self._consumed = False

    @property
    def consumed(self) -> bool:
        """Check if the result was taken by a consumer."""
        with self._lock:
            return self._consumed

    def put(self, result: MetadataSyncResult) -> None:
        """Deliver the result.

        Raises:
            ChannelFullError: If a result was already delivered.
        """
        with self._ready:
            if self._filled:
                raise ChannelFullError("Result channel already holds a result")
            self._result = result
            self._filled = True
            self._ready.notify_all()

    def wait(self, timeout: float) -> MetadataSyncResult | None:
        """Wait up to timeout seconds for the result and take it.

        Args:
            timeout: Maximum seconds to wait.

        Returns:
            The result, or None if the timeout elapsed first or the result
            was already taken by another consumer.
        """
        deadline = time.monotonic() + timeout
        with self._ready:
            while not self._filled:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    return None
                self._ready.wait(remaining)

            if self._consumed:
                return None
            self._consumed = True
            result, self._result = self._result, None
            return result
