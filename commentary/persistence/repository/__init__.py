"""PostgreSQL repository implementations."""

from commentary.persistence.repository.activity_log import (
    PostgresActivityLogRepository,
)
from commentary.persistence.repository.comment import PostgresCommentRepository
from commentary.persistence.repository.post import PostgresPostRepository
from commentary.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresActivityLogRepository",
    "PostgresCommentRepository",
    "PostgresPostRepository",
    "PostgresUserRepository",
]
