"""Rate limiting infrastructure providers."""

from dishka import Scope, provide

from commentary.adapter.ratelimit import InMemoryRateLimiter
from commentary.config import RateLimitSettings
from commentary.domain.service import RateLimiter
from commentary.util.di.base import ProviderBase


class RateLimitProvider(ProviderBase):
    """Rate limiting component base."""

    __mock_component__ = "ratelimit"


class ProdRateLimitProvider(RateLimitProvider):
    """Production rate limiter: one in-process counter store per container."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_rate_limiter(self, rate_limit_settings: RateLimitSettings) -> RateLimiter:
        """Provide the process-wide rate limiter."""
        return InMemoryRateLimiter(enabled=rate_limit_settings.enabled)
