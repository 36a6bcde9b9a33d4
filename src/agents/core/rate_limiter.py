"""
Request pacing for external generative backends.

`SlidingWindowRateLimiter` is owned by whoever drives a generation run and is
passed into it; independent runs can use independent limiters. Clock and sleep
are injectable so tests never wait on wall time.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections import deque
from typing import Awaitable, Callable, Deque, Optional, TypeVar

from agents.core.llm import RateLimitedError

logger = logging.getLogger(__name__)

T = TypeVar("T")

Clock = Callable[[], float]
Sleep = Callable[[float], Awaitable[None]]


class RetriesExhaustedError(Exception):
    def __init__(self, attempts: int):
        super().__init__(f"Max retries reached after {attempts} rate-limited attempts")
        self.attempts = attempts


class SlidingWindowRateLimiter:
    def __init__(
        self,
        max_calls: int = 15,
        window_seconds: float = 60.0,
        *,
        clock: Clock = time.monotonic,
        sleep: Sleep = asyncio.sleep,
    ):
        if max_calls < 1:
            raise ValueError("max_calls must be >= 1")
        self.max_calls = max_calls
        self.window_seconds = window_seconds
        self._clock = clock
        self._sleep = sleep
        self._calls: Deque[float] = deque()

    @property
    def recent_calls(self) -> int:
        self._evict(self._clock())
        return len(self._calls)

    def _evict(self, now: float) -> None:
        while self._calls and now - self._calls[0] > self.window_seconds:
            self._calls.popleft()

    def compute_wait(self, now: Optional[float] = None) -> float:
        """Seconds to wait before the next call is allowed (0 when under budget)."""
        now = self._clock() if now is None else now
        self._evict(now)
        if len(self._calls) < self.max_calls:
            return 0.0
        return max(0.0, self.window_seconds - (now - self._calls[0]))

    async def acquire(self) -> float:
        """Wait for a free slot, record the call, and return the time waited."""
        wait = self.compute_wait()
        if wait > 0:
            logger.info("rate limit approaching, waiting %.2fs", wait)
            await self._sleep(wait)
        self._calls.append(self._clock())
        return wait

    async def sleep(self, seconds: float) -> None:
        if seconds > 0:
            await self._sleep(seconds)


async def call_with_backoff(
    call: Callable[[], Awaitable[T]],
    *,
    limiter: SlidingWindowRateLimiter,
    max_retries: int = 5,
    initial_backoff: float = 1.0,
) -> T:
    """
    Run `call` under the limiter. Every attempt takes a slot in the window.
    Only RateLimitedError is retried, with the delay doubling after every
    attempt; any other exception propagates at once.
    """
    backoff = initial_backoff
    for attempt in range(1, max_retries + 1):
        await limiter.acquire()
        try:
            return await call()
        except RateLimitedError as e:
            if attempt == max_retries:
                raise RetriesExhaustedError(attempt) from e
            delay = max(backoff, e.retry_after or 0.0)
            logger.warning("rate limit hit (attempt %s/%s), retrying in %.2fs", attempt, max_retries, delay)
            await limiter.sleep(delay)
            backoff *= 2
    raise RetriesExhaustedError(max_retries)
