"""Minimum-interval rate limiter for outbound catalog requests."""

import asyncio
import time
from collections.abc import Awaitable, Callable


class RateLimiter:
    """Spaces consecutive calls at least ``min_interval`` seconds apart.

    Each client owns its own limiter, so two pipelines in one process only
    share throttling state when they are handed the same instance. Calls are
    expected to be sequential; there is no locking.
    """

    def __init__(
        self,
        min_interval: float = 0.1,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if min_interval < 0:
            raise ValueError(f"min_interval must be >= 0, got {min_interval}")
        self.min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._last_call: float | None = None

    async def acquire(self) -> None:
        """Wait until the next call is allowed, then record it."""
        if self._last_call is not None:
            elapsed = self._clock() - self._last_call
            remaining = self.min_interval - elapsed
            if remaining > 0:
                await self._sleep(remaining)

        self._last_call = self._clock()
