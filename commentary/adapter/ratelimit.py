"""In-process rate limiter.

Fixed-window counters keyed by ``bucket:identifier``. One instance is
shared by the whole process; counters are not shared between processes.
"""

import math
import time
from dataclasses import dataclass
from typing import Callable

import logfire

from commentary.config import RateLimitRule
from commentary.domain.error import RateLimitedError
from commentary.domain.service.rate_limiter import RateLimiter
from commentary.domain.value import RateLimitBucket

# Expired windows are swept once the store grows past this many keys
PRUNE_THRESHOLD = 10_000


@dataclass
class _Window:
    count: int
    reset_at: float


class InMemoryRateLimiter(RateLimiter):
    """Fixed-window rate limiter backed by a dict."""

    def __init__(
        self, enabled: bool = True, clock: Callable[[], float] = time.monotonic
    ) -> None:
        self.enabled = enabled
        self._clock = clock
        self._windows: dict[str, _Window] = {}

    async def check(
        self, identifier: str, rule: RateLimitRule, bucket: RateLimitBucket
    ) -> None:
        """Consume one unit of quota.

        Raises:
            RateLimitedError: If the quota for the current window is used up
        """
        if not self.enabled:
            return

        now = self._clock()
        key = f"{bucket.value}:{identifier}"
        window = self._windows.get(key)

        if window is None or now >= window.reset_at:
            if len(self._windows) >= PRUNE_THRESHOLD:
                self._prune(now)
            self._windows[key] = _Window(count=1, reset_at=now + rule.window_seconds)
            return

        if window.count >= rule.limit:
            retry_after = max(1, math.ceil(window.reset_at - now))
            logfire.warn(
                "Rate limit exceeded",
                bucket=bucket.value,
                limit=rule.limit,
                retry_after=retry_after,
            )
            raise RateLimitedError(bucket.value, retry_after)

        window.count += 1

    def _prune(self, now: float) -> None:
        expired = [k for k, w in self._windows.items() if now >= w.reset_at]
        for key in expired:
            del self._windows[key]
        logfire.debug("Rate limit windows pruned", removed=len(expired))
