"""Mock providers for testing."""

from .persistence import MockPersistenceProvider
from .ratelimit import MockRateLimitProvider, RecordingRateLimiter
from .container import build_test_container

__all__ = [
    "MockPersistenceProvider",
    "MockRateLimitProvider",
    "RecordingRateLimiter",
    "build_test_container",
]
