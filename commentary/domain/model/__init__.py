"""Domain model entities."""

from commentary.domain.model.activity_log import ActivityLog
from commentary.domain.model.comment import Comment
from commentary.domain.model.post import Post
from commentary.domain.model.user import User

__all__ = [
    "ActivityLog",
    "Comment",
    "Post",
    "User",
]
