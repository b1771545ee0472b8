"""Create comment use case."""

from pydantic import BaseModel

from commentary.config import RateLimitSettings
from commentary.domain.service import (
    CommentService,
    IdentityService,
    PostService,
    RateLimiter,
)
from commentary.domain.validation import validate_new_comment
from commentary.domain.value import RateLimitBucket

from .common import CommentItem, rate_limit_identifier


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    post_slug: str
    content: str | None = None
    parent_id: str | None = None  # Parent comment ID for replies
    author_name: str | None = None  # Anonymous authors only
    author_email: str | None = None  # Anonymous authors only
    author_url: str | None = None
    auth_token: str | None = None
    client_ip: str | None = None
    user_agent: str | None = None


class CreateCommentResponse(BaseModel):
    """Create comment response."""

    comment: CommentItem
    location: str


class CreateCommentUseCase:
    """Use case for creating a comment on a post or replying to another comment."""

    def __init__(
        self,
        identity_service: IdentityService,
        rate_limiter: RateLimiter,
        post_service: PostService,
        comment_service: CommentService,
        rate_limit_settings: RateLimitSettings,
    ) -> None:
        """Initialize create comment use case.

        Args:
            identity_service: Resolves the caller's session token
            rate_limiter: Quota check
            post_service: Post visibility rules
            comment_service: Comment domain service
            rate_limit_settings: Per-bucket quotas
        """
        self.identity_service = identity_service
        self.rate_limiter = rate_limiter
        self.post_service = post_service
        self.comment_service = comment_service
        self.rate_limit_settings = rate_limit_settings

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        Steps:
        1. Resolve the caller and consume create quota
        2. Verify the post is published
        3. Validate input (registered authors are auto-approved,
           anonymous ones must give a name and e-mail)
        4. Create the comment (service validates the parent if replying)

        Raises:
            RateLimitedError: If the create quota is used up
            NotFoundError: If the post or the parent comment is not available
            ValidationError: If input is invalid
        """
        principal = await self.identity_service.resolve(request.auth_token)
        await self.rate_limiter.check(
            rate_limit_identifier(principal, request.client_ip),
            self.rate_limit_settings.comments_create,
            RateLimitBucket.COMMENTS_CREATE,
        )

        post = await self.post_service.get_commentable_post(request.post_slug)

        draft = validate_new_comment(
            post_id=post.id,
            principal=principal,
            content=request.content,
            parent_id=request.parent_id,
            author_name=request.author_name,
            author_email=request.author_email,
            author_url=request.author_url,
        ).unwrap()

        comment = await self.comment_service.create_comment(
            draft,
            ip_address=request.client_ip,
            user_agent=request.user_agent,
        )

        return CreateCommentResponse(
            comment=CommentItem.from_comment(comment),
            location=f"/comments/{comment.id}",
        )
