"""Rate limiter port."""

from abc import ABC, abstractmethod

from commentary.config import RateLimitRule
from commentary.domain.value import RateLimitBucket


class RateLimiter(ABC):
    """Per-operation-class quota check.

    Implementations live in the adapter layer.
    """

    @abstractmethod
    async def check(
        self, identifier: str, rule: RateLimitRule, bucket: RateLimitBucket
    ) -> None:
        """Consume one unit of quota for ``identifier`` in ``bucket``.

        Raises:
            RateLimitedError: If the quota for the current window is used up
        """
        pass
