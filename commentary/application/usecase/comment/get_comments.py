"""Get comments use case."""

from pydantic import BaseModel, Field

from commentary.config import CommentSettings, RateLimitSettings
from commentary.domain.service import (
    IdentityService,
    PostService,
    RateLimiter,
    ThreadService,
)
from commentary.domain.validation import validate_comment_filter
from commentary.domain.value import Pagination, RateLimitBucket

from .common import CommentItem, rate_limit_identifier

PRIVATE_CACHE_CONTROL = "private, no-store"


class GetCommentsRequest(BaseModel):
    """Get comments request."""

    post_slug: str
    query: dict[str, str] = Field(default_factory=dict)  # Raw query parameters
    auth_token: str | None = None
    client_ip: str | None = None


class GetCommentsResponse(BaseModel):
    """Get comments response."""

    comments: list[CommentItem]
    pagination: Pagination
    cache_control: str = Field(default=PRIVATE_CACHE_CONTROL, exclude=True)


class GetCommentsUseCase:
    """Use case for listing a post's top-level comments with their replies."""

    def __init__(
        self,
        identity_service: IdentityService,
        rate_limiter: RateLimiter,
        post_service: PostService,
        thread_service: ThreadService,
        rate_limit_settings: RateLimitSettings,
        comment_settings: CommentSettings,
    ) -> None:
        """Initialize get comments use case.

        Args:
            identity_service: Resolves the caller's session token
            rate_limiter: Quota check
            post_service: Post visibility rules
            thread_service: Thread assembly
            rate_limit_settings: Per-bucket quotas
            comment_settings: Comment settings (cache header)
        """
        self.identity_service = identity_service
        self.rate_limiter = rate_limiter
        self.post_service = post_service
        self.thread_service = thread_service
        self.rate_limit_settings = rate_limit_settings
        self.comment_settings = comment_settings

    async def execute(self, request: GetCommentsRequest) -> GetCommentsResponse:
        """Execute get comments flow.

        Steps:
        1. Resolve the caller and consume read quota
        2. Resolve the post, hiding unpublished posts from non-moderators
        3. Validate the filter (non-moderators only ever see approved)
        4. Fetch the page and assemble reply trees

        Raises:
            RateLimitedError: If the read quota is used up
            NotFoundError: If the post is missing or hidden
            ValidationError: If query parameters are invalid
        """
        principal = await self.identity_service.resolve(request.auth_token)
        await self.rate_limiter.check(
            rate_limit_identifier(principal, request.client_ip),
            self.rate_limit_settings.comments_read,
            RateLimitBucket.COMMENTS_READ,
        )

        post = await self.post_service.get_readable_post(request.post_slug, principal)
        comment_filter = validate_comment_filter(
            post.id, request.query, principal
        ).unwrap()

        page = await self.thread_service.get_page(comment_filter)

        moderator_view = principal is not None and principal.is_moderator
        return GetCommentsResponse(
            comments=[CommentItem.from_node(node) for node in page.threads],
            pagination=page.pagination,
            cache_control=(
                PRIVATE_CACHE_CONTROL
                if moderator_view
                else self.comment_settings.public_cache_control
            ),
        )
