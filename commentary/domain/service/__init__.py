"""Domain services."""

from .activity_service import ActivityService
from .base import Service
from .comment_service import CommentService
from .identity_service import IdentityService
from .jwt_service import JWTService
from .moderation_service import ModerationOutcome, ModerationResult, ModerationService
from .post_service import PostService
from .rate_limiter import RateLimiter
from .thread_service import CommentNode, ThreadPage, ThreadService

__all__ = [
    "ActivityService",
    "CommentNode",
    "CommentService",
    "IdentityService",
    "JWTService",
    "ModerationOutcome",
    "ModerationResult",
    "ModerationService",
    "PostService",
    "RateLimiter",
    "Service",
    "ThreadPage",
    "ThreadService",
]
