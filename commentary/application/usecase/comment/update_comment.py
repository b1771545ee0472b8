"""Update comment use case."""

from typing import Any

from pydantic import BaseModel

from commentary.config import RateLimitSettings
from commentary.domain.error import UnauthorizedError
from commentary.domain.service import (
    CommentService,
    IdentityService,
    ModerationService,
    RateLimiter,
)
from commentary.domain.validation import validate_comment_id, validate_comment_update
from commentary.domain.value import RateLimitBucket

from .common import CommentItem, rate_limit_identifier


class UpdateCommentRequest(BaseModel):
    """Update comment request."""

    comment_id: str
    content: Any = None
    approved: Any = None
    auth_token: str | None = None
    client_ip: str | None = None


class UpdateCommentUseCase:
    """Use case for a moderator editing a comment's content or approval."""

    def __init__(
        self,
        identity_service: IdentityService,
        rate_limiter: RateLimiter,
        comment_service: CommentService,
        moderation_service: ModerationService,
        rate_limit_settings: RateLimitSettings,
    ) -> None:
        """Initialize update comment use case.

        Args:
            identity_service: Resolves the caller's session token
            rate_limiter: Quota check
            comment_service: Comment domain service
            moderation_service: Role check for moderator-only operations
            rate_limit_settings: Per-bucket quotas
        """
        self.identity_service = identity_service
        self.rate_limiter = rate_limiter
        self.comment_service = comment_service
        self.moderation_service = moderation_service
        self.rate_limit_settings = rate_limit_settings

    async def execute(self, request: UpdateCommentRequest) -> CommentItem:
        """Execute update comment flow.

        Raises:
            UnauthorizedError: If the caller is not authenticated
            RateLimitedError: If the update quota is used up
            ForbiddenError: If the caller is not a moderator
            ValidationError: If the ID or the patch is invalid
            NotFoundError: If the comment is missing or soft-deleted
        """
        principal = await self.identity_service.resolve(request.auth_token)
        if principal is None:
            raise UnauthorizedError()

        await self.rate_limiter.check(
            rate_limit_identifier(principal, request.client_ip),
            self.rate_limit_settings.comments_update,
            RateLimitBucket.COMMENTS_UPDATE,
        )
        self.moderation_service.ensure_moderator(principal, "edit comments")

        comment_id = validate_comment_id(request.comment_id).unwrap()
        patch = validate_comment_update(request.content, request.approved).unwrap()

        comment = await self.comment_service.update_comment(
            comment_id, patch, actor_id=principal.user_id
        )
        return CommentItem.from_comment(comment)
