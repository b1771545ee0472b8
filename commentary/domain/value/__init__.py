"""Domain value objects."""

from commentary.domain.value.identifiers import (
    ActivityLogId,
    CommentId,
    PostId,
    UserId,
)
from commentary.domain.value.query import (
    CommentFilter,
    CommentSortField,
    Pagination,
    SortOrder,
)
from commentary.domain.value.types import (
    ActivityAction,
    ModerationAction,
    Principal,
    RateLimitBucket,
    ResourceType,
    UserRole,
)

__all__ = [
    # Identifiers
    "ActivityLogId",
    "CommentId",
    "PostId",
    "UserId",
    # Queries
    "CommentFilter",
    "CommentSortField",
    "Pagination",
    "SortOrder",
    # Types
    "ActivityAction",
    "ModerationAction",
    "Principal",
    "RateLimitBucket",
    "ResourceType",
    "UserRole",
]
