"""Thread assembly domain service."""

from __future__ import annotations

import logfire
from pydantic import Field

from commentary.domain.model import Comment
from commentary.domain.model.common import DomainModel
from commentary.domain.value import CommentFilter, CommentId, Pagination

from .base import Service
from .comment_service import CommentService


class CommentNode(DomainModel):
    """A comment with its assembled replies, oldest first."""

    comment: Comment
    replies: list[CommentNode] = Field(default_factory=list)


class ThreadPage(DomainModel):
    """One page of top-level comments with their reply trees."""

    threads: list[CommentNode]
    pagination: Pagination


class ThreadService(Service):
    """Builds paginated, depth-bounded reply trees.

    Replies are fetched level by level with one batched store read per
    level, so a page costs at most ``max_depth`` reply queries. Only
    approved, non-deleted replies are followed; anything below an
    excluded comment is never reached.
    """

    def __init__(
        self, comment_service: CommentService, max_replies_per_parent: int = 50
    ) -> None:
        """Initialize thread service.

        Args:
            comment_service: Comment domain service
            max_replies_per_parent: Reply cap per parent at every level
        """
        self.comment_service = comment_service
        self.max_replies_per_parent = max_replies_per_parent

    async def get_page(self, comment_filter: CommentFilter) -> ThreadPage:
        """Get a page of threads for a post.

        Args:
            comment_filter: Validated listing filter

        Returns:
            Threads on the page plus the pagination envelope
        """
        with logfire.span(
            "thread_service.get_page",
            post_id=str(comment_filter.post_id),
            include_replies=comment_filter.include_replies,
            max_depth=comment_filter.max_depth,
        ):
            comments, total = await self.comment_service.find_many(comment_filter)

            if comment_filter.include_replies:
                threads = await self.assemble(comments, comment_filter.max_depth)
            else:
                threads = [CommentNode(comment=c) for c in comments]

            return ThreadPage(
                threads=threads,
                pagination=Pagination.build(
                    page=comment_filter.page,
                    limit=comment_filter.limit,
                    total=total,
                ),
            )

    async def assemble(self, roots: list[Comment], max_depth: int) -> list[CommentNode]:
        """Attach up to ``max_depth`` levels of replies to each root.

        Args:
            roots: Top-level comments in display order
            max_depth: Number of reply levels to materialize

        Returns:
            One node per root, in the same order
        """
        children: dict[CommentId, list[Comment]] = {}
        frontier = [c.id for c in roots]
        levels = 0

        while frontier and levels < max_depth:
            replies = await self.comment_service.find_replies(
                frontier, self.max_replies_per_parent
            )
            children.update(replies)
            frontier = [r.id for group in replies.values() for r in group]
            levels += 1

        logfire.debug("Threads assembled", roots=len(roots), levels=levels)
        return [self._build(root, children) for root in roots]

    def _build(
        self, comment: Comment, children: dict[CommentId, list[Comment]]
    ) -> CommentNode:
        return CommentNode(
            comment=comment,
            replies=[self._build(r, children) for r in children.get(comment.id, [])],
        )
