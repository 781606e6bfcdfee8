"""Retry logic for optimistic-concurrency updates.

This module provides:
- Backoff: Bounded exponential backoff policy
- DEFAULT_RETRY, DEFAULT_BACKOFF: Policies used for status updates
- ConflictExhaustedError: Raised when every attempt hit a conflict
- retry_on_conflict: Re-run a fetch-mutate-update function on conflicts
"""

from __future__ import annotations

import logging
import random
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from datasetsync.cluster.api import ConflictError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Backoff:
    """Bounded exponential backoff.

    Attributes:
        steps: Maximum number of attempts.
        duration: Initial sleep between attempts in seconds.
        factor: Multiplier applied to the sleep after each attempt.
        jitter: Random extra fraction added to each sleep (0.1 = up to 10%).
        cap: Upper bound of the sleep in seconds (0 = unbounded).
    """

    steps: int
    duration: float
    factor: float = 1.0
    jitter: float = 0.0
    cap: float = 0.0

    def delays(self) -> list[float]:
        """Sleep durations between consecutive attempts (steps - 1 values)."""
        delays: list[float] = []
        duration = self.duration
        for _ in range(max(self.steps - 1, 0)):
            delay = duration
            if self.jitter > 0:
                delay += random.uniform(0, self.jitter * duration)
            if self.cap > 0:
                delay = min(delay, self.cap)
            delays.append(delay)
            duration *= self.factor
        return delays


# Five quick attempts, for updates expected to conflict rarely
DEFAULT_RETRY = Backoff(steps=5, duration=0.01, factor=1.0, jitter=0.1)

# Four attempts growing 10ms -> 50ms -> 250ms
DEFAULT_BACKOFF = Backoff(steps=4, duration=0.01, factor=5.0, jitter=0.1)


class ConflictExhaustedError(ConflictError):
    """Every update attempt hit a version conflict."""

    def __init__(self, attempts: int) -> None:
        super().__init__(f"Update still conflicting after {attempts} attempts", 409)
        self.attempts = attempts


def retry_on_conflict(
    func: Callable[[], Any],
    backoff: Backoff = DEFAULT_BACKOFF,
    sleep: Callable[[float], None] = time.sleep,
) -> Any:
    """Execute a fetch-mutate-update function, retrying on conflicts.

    Only ConflictError is retried; any other exception propagates
    immediately.

    Args:
        func: Function performing one full fetch-mutate-update cycle.
        backoff: Backoff policy bounding the number of attempts.
        sleep: Sleep function (injectable for tests).

    Returns:
        Result of the function.

    Raises:
        ConflictExhaustedError: If all attempts conflicted.
    """
    delays = backoff.delays()
    attempts = len(delays) + 1

    for attempt in range(attempts):
        try:
            return func()
        except ConflictExhaustedError:
            raise
        except ConflictError as e:
            if attempt == attempts - 1:
                logger.error(f"All {attempts} update attempts conflicted: {e}")
                raise ConflictExhaustedError(attempts) from e

            logger.warning(
                f"Attempt {attempt + 1}/{attempts} conflicted: {e}. "
                f"Retrying in {delays[attempt]:.3f}s..."
            )
            sleep(delays[attempt])

    raise RuntimeError("Unexpected retry loop exit")
