"""Get single comment use case."""

from pydantic import BaseModel

from commentary.config import RateLimitSettings
from commentary.domain.error import NotFoundError
from commentary.domain.service import (
    CommentService,
    IdentityService,
    PostService,
    RateLimiter,
)
from commentary.domain.validation import validate_comment_id
from commentary.domain.value import RateLimitBucket

from .common import CommentItem, rate_limit_identifier


class GetCommentRequest(BaseModel):
    """Get comment request."""

    comment_id: str
    auth_token: str | None = None
    client_ip: str | None = None


class GetCommentUseCase:
    """Use case for fetching one comment by ID."""

    def __init__(
        self,
        identity_service: IdentityService,
        rate_limiter: RateLimiter,
        post_service: PostService,
        comment_service: CommentService,
        rate_limit_settings: RateLimitSettings,
    ) -> None:
        self.identity_service = identity_service
        self.rate_limiter = rate_limiter
        self.post_service = post_service
        self.comment_service = comment_service
        self.rate_limit_settings = rate_limit_settings

    async def execute(self, request: GetCommentRequest) -> CommentItem:
        """Execute get comment flow.

        Moderators see any comment, pending and soft-deleted included.
        Everyone else only sees approved comments on published posts;
        anything else is reported as not found.

        Raises:
            RateLimitedError: If the read quota is used up
            ValidationError: If the ID is malformed
            NotFoundError: If the comment is missing or hidden
        """
        principal = await self.identity_service.resolve(request.auth_token)
        await self.rate_limiter.check(
            rate_limit_identifier(principal, request.client_ip),
            self.rate_limit_settings.comments_read,
            RateLimitBucket.COMMENTS_READ,
        )

        comment_id = validate_comment_id(request.comment_id).unwrap()
        moderator_view = principal is not None and principal.is_moderator

        comment = await self.comment_service.get_comment_by_id(
            comment_id, include_deleted=moderator_view
        )
        if comment is None:
            raise NotFoundError("Comment", request.comment_id)

        if not moderator_view:
            post = await self.post_service.get_post_by_id(comment.post_id)
            if not comment.is_public or not self.post_service.is_readable(
                post, principal
            ):
                raise NotFoundError("Comment", request.comment_id)

        return CommentItem.from_comment(comment)
