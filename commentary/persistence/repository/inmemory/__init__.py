"""In-memory repository implementations for testing."""

from .activity_log import InMemoryActivityLogRepository
from .comment import InMemoryCommentRepository
from .post import InMemoryPostRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryActivityLogRepository",
    "InMemoryCommentRepository",
    "InMemoryPostRepository",
    "InMemoryUserRepository",
]
