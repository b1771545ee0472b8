"""In-memory comment repository for testing."""

from datetime import datetime
from typing import Iterable, Optional

from commentary.domain.model.comment import Comment
from commentary.domain.repository.comment import CommentRepository
from commentary.domain.value import (
    CommentFilter,
    CommentId,
    PostId,
    SortOrder,
)


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}

    def _matching(self, comment_filter: CommentFilter) -> list[Comment]:
        comments = [
            c
            for c in self._comments.values()
            if c.post_id == comment_filter.post_id and c.deleted_at is None
        ]
        if comment_filter.top_level_only:
            comments = [c for c in comments if c.parent_id is None]
        if comment_filter.approved is not None:
            comments = [c for c in comments if c.approved == comment_filter.approved]
        if comment_filter.author_id is not None:
            comments = [c for c in comments if c.author_id == comment_filter.author_id]
        return comments

    async def find_by_id(
        self, comment_id: CommentId, include_deleted: bool = False
    ) -> Optional[Comment]:
        """Find a comment by ID."""
        comment = self._comments.get(comment_id)
        if comment is None or (comment.is_deleted and not include_deleted):
            return None
        return comment

    async def find_reply_target(
        self, comment_id: CommentId, post_id: PostId
    ) -> Optional[Comment]:
        """Find an approved, non-deleted comment on the given post."""
        comment = self._comments.get(comment_id)
        if comment is None or comment.post_id != post_id or not comment.is_public:
            return None
        return comment

    async def find_many(self, comment_filter: CommentFilter) -> list[Comment]:
        """Find one page of comments matching a filter."""
        comments = self._matching(comment_filter)

        field = comment_filter.sort_by.value
        comments.sort(
            key=lambda c: (getattr(c, field), c.id),
            reverse=comment_filter.sort_order == SortOrder.DESC,
        )

        # Paginate
        start = comment_filter.skip
        return comments[start : start + comment_filter.take]

    async def count(self, comment_filter: CommentFilter) -> int:
        """Count comments matching a filter."""
        return len(self._matching(comment_filter))

    async def find_replies(
        self, parent_ids: Iterable[CommentId], limit_per_parent: int
    ) -> dict[CommentId, list[Comment]]:
        """Find approved, non-deleted direct replies for several parents."""
        wanted = set(parent_ids)
        replies: dict[CommentId, list[Comment]] = {}
        for comment in self._comments.values():
            if comment.parent_id in wanted and comment.is_public:
                replies.setdefault(comment.parent_id, []).append(comment)

        for parent_id, group in replies.items():
            group.sort(key=lambda c: (c.created_at, c.id))
            replies[parent_id] = group[:limit_per_parent]
        return replies

    async def create(self, comment: Comment) -> Comment:
        """Insert a new comment."""
        self._comments[comment.id] = comment
        return comment

    async def update(
        self,
        comment_id: CommentId,
        content: Optional[str] = None,
        approved: Optional[bool] = None,
    ) -> Optional[Comment]:
        """Partially update a non-deleted comment."""
        comment = self._comments.get(comment_id)
        if comment is None or comment.is_deleted:
            return None

        changes: dict = {"updated_at": datetime.now()}
        if content is not None:
            changes["content"] = content
        if approved is not None:
            changes["approved"] = approved

        updated = comment.model_copy(update=changes)
        self._comments[comment_id] = updated
        return updated

    async def soft_delete(self, comment_id: CommentId) -> Optional[Comment]:
        """Mark a comment as deleted."""
        comment = self._comments.get(comment_id)
        if comment is None or comment.is_deleted:
            return None

        now = datetime.now()
        deleted = comment.model_copy(update={"deleted_at": now, "updated_at": now})
        self._comments[comment_id] = deleted
        return deleted
