"""Post visibility domain service."""

import logfire

from commentary.domain.error import NotFoundError
from commentary.domain.model import Post
from commentary.domain.repository import PostRepository
from commentary.domain.value import PostId, Principal

from .base import Service


class PostService(Service):
    """Resolves posts for the comment engine, applying visibility rules.

    Hidden posts are reported exactly like missing ones so their
    existence is not leaked.
    """

    def __init__(self, post_repository: PostRepository) -> None:
        """Initialize post service.

        Args:
            post_repository: Post repository
        """
        self.post_repository = post_repository

    async def get_readable_post(self, slug: str, principal: Principal | None) -> Post:
        """Get a post whose comments the caller may read.

        Unpublished posts are only readable by administrative roles.

        Raises:
            NotFoundError: If the post is missing, deleted or hidden
        """
        with logfire.span("post_service.get_readable_post", slug=slug):
            post = await self.post_repository.find_by_slug(slug)
            if post is None:
                logfire.warn("Post not found", slug=slug)
                raise NotFoundError("Post", slug)
            if not post.published and (principal is None or not principal.is_moderator):
                logfire.warn("Post hidden from caller", slug=slug)
                raise NotFoundError("Post", slug)
            return post

    async def get_commentable_post(self, slug: str) -> Post:
        """Get a post that accepts new comments.

        Only published posts accept comments, regardless of role.

        Raises:
            NotFoundError: If the post is missing, deleted or unpublished
        """
        with logfire.span("post_service.get_commentable_post", slug=slug):
            post = await self.post_repository.find_by_slug(slug)
            if post is None or not post.published:
                logfire.warn("Post not open for comments", slug=slug)
                raise NotFoundError("Post", slug)
            return post

    async def get_post_by_id(self, post_id: PostId) -> Post | None:
        """Get a non-deleted post by ID, regardless of publication."""
        with logfire.span("post_service.get_post_by_id", post_id=str(post_id)):
            return await self.post_repository.find_by_id(post_id)

    def is_readable(self, post: Post | None, principal: Principal | None) -> bool:
        """Whether a post's comments are visible to the caller."""
        if post is None:
            return False
        return post.published or (principal is not None and principal.is_moderator)
