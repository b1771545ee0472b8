"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import Iterable, Optional

from commentary.domain.model.comment import Comment
from commentary.domain.value import CommentFilter, CommentId, PostId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(
        self, comment_id: CommentId, include_deleted: bool = False
    ) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier
            include_deleted: Whether a soft-deleted comment may be returned

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_reply_target(
        self, comment_id: CommentId, post_id: PostId
    ) -> Optional[Comment]:
        """Find a comment that may be replied to.

        A valid reply target is approved, not soft-deleted, and belongs to
        ``post_id``.

        Args:
            comment_id: Candidate parent comment ID
            post_id: Post the reply is being created on

        Returns:
            The parent comment if it qualifies, None otherwise
        """
        pass

    @abstractmethod
    async def find_many(self, comment_filter: CommentFilter) -> list[Comment]:
        """Find one page of comments matching a filter.

        Soft-deleted comments are always excluded. Results are sorted by
        ``sort_by``/``sort_order`` and paginated with ``skip``/``take``.

        Args:
            comment_filter: Filter, sort and pagination parameters

        Returns:
            Comments on the requested page
        """
        pass

    @abstractmethod
    async def count(self, comment_filter: CommentFilter) -> int:
        """Count comments matching a filter, ignoring pagination.

        Args:
            comment_filter: Filter parameters (same predicate as find_many)

        Returns:
            Number of matching comments
        """
        pass

    @abstractmethod
    async def find_replies(
        self, parent_ids: Iterable[CommentId], limit_per_parent: int
    ) -> dict[CommentId, list[Comment]]:
        """Find approved, non-deleted direct replies for several parents.

        Args:
            parent_ids: Parent comment IDs
            limit_per_parent: Maximum replies returned for each parent

        Returns:
            Mapping of parent ID to its replies, oldest first. Parents
            without replies are absent from the mapping.
        """
        pass

    @abstractmethod
    async def create(self, comment: Comment) -> Comment:
        """Insert a new comment.

        Args:
            comment: The comment to insert

        Returns:
            The stored comment
        """
        pass

    @abstractmethod
    async def update(
        self,
        comment_id: CommentId,
        content: Optional[str] = None,
        approved: Optional[bool] = None,
    ) -> Optional[Comment]:
        """Partially update a non-deleted comment.

        Only ``content`` and ``approved`` can change after creation.

        Args:
            comment_id: Comment ID
            content: New content, or None to keep it
            approved: New approval state, or None to keep it

        Returns:
            The updated comment, or None if missing or soft-deleted
        """
        pass

    @abstractmethod
    async def soft_delete(self, comment_id: CommentId) -> Optional[Comment]:
        """Mark a comment as deleted.

        Replies are not touched; they drop out of thread assembly because
        their parent is no longer reachable.

        Args:
            comment_id: Comment ID

        Returns:
            The deleted comment, or None if missing or already deleted
        """
        pass
