"""Post repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from commentary.domain.model.post import Post
from commentary.domain.value import PostId


class PostRepository(ABC):
    """Repository for Post entity."""

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a non-deleted post by ID.

        Args:
            post_id: The post's unique identifier

        Returns:
            The post if found and not deleted, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_slug(self, slug: str) -> Optional[Post]:
        """Find a non-deleted post by slug.

        Args:
            slug: URL slug

        Returns:
            The post if found and not deleted, None otherwise
        """
        pass
