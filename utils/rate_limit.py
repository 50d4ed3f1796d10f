"""
Sliding-window rate limiting for drill generation calls.

The local model is shared by every user of the app; bursts of batch requests
are spread out so no more than `max_requests` start inside one window.
"""

import asyncio
import logging
import time
from collections import deque
from typing import Callable, Deque, Dict, Optional

logger = logging.getLogger(__name__)


class RateLimiter:
    """Delay callers so at most `max_requests` start per `window_seconds`."""

    def __init__(
        self,
        max_requests: int = 10,
        window_seconds: float = 60.0,
        delay_after: Optional[int] = 8,
        delay_seconds: float = 1.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.delay_after = delay_after
        self.delay_seconds = delay_seconds
        self._clock = clock
        self._requests: Deque[float] = deque()
        self._lock = asyncio.Lock()

    def _expire(self, now: float) -> None:
        window_start = now - self.window_seconds
        while self._requests and self._requests[0] <= window_start:
            self._requests.popleft()

    async def wait_if_needed(self) -> float:
        """Wait for a free slot, record the request, and return seconds waited."""
        async with self._lock:
            waited = 0.0
            now = self._clock()
            self._expire(now)
            if len(self._requests) >= self.max_requests:
                wait_time = self._requests[0] + self.window_seconds - now
                if wait_time > 0:
                    logger.info(
                        "Rate limit: waiting %.1fs to stay under %d requests/window",
                        wait_time, self.max_requests,
                    )
                    await asyncio.sleep(wait_time)
                    waited += wait_time
                now = self._clock()
                self._expire(now)
                # A frozen clock leaves the window full
                while len(self._requests) >= self.max_requests:
                    self._requests.popleft()
            elif self.delay_after is not None and len(self._requests) >= self.delay_after:
                logger.debug(
                    "Rate limit: %d/%d used, delaying %.1fs",
                    len(self._requests), self.max_requests, self.delay_seconds,
                )
                await asyncio.sleep(self.delay_seconds)
                waited += self.delay_seconds
            self._requests.append(self._clock())
            return waited

    def stats(self) -> Dict[str, int]:
        self._expire(self._clock())
        used = len(self._requests)
        return {
            "used": used,
            "max": self.max_requests,
            "remaining": max(0, self.max_requests - used),
        }

    def reset(self) -> None:
        self._requests.clear()
