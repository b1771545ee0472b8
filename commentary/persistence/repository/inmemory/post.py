"""In-memory post repository for testing."""

from typing import Optional

from commentary.domain.model.post import Post
from commentary.domain.repository.post import PostRepository
from commentary.domain.value import PostId


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing."""

    def __init__(self) -> None:
        self._posts: dict[PostId, Post] = {}

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a non-deleted post by ID."""
        post = self._posts.get(post_id)
        if post is None or post.deleted_at is not None:
            return None
        return post

    async def find_by_slug(self, slug: str) -> Optional[Post]:
        """Find a non-deleted post by slug."""
        for post in self._posts.values():
            if post.slug == slug and post.deleted_at is None:
                return post
        return None

    def add(self, post: Post) -> Post:
        """Seed a post; posts are owned by the publishing side."""
        self._posts[post.id] = post
        return post
