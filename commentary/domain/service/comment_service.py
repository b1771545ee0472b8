"""Comment domain service."""

from datetime import datetime
from uuid import uuid4

import logfire

from commentary.domain.error import NotFoundError
from commentary.domain.model import Comment
from commentary.domain.repository import CommentRepository
from commentary.domain.validation import CommentPatch, NewComment
from commentary.domain.value import (
    ActivityAction,
    CommentFilter,
    CommentId,
    UserId,
)

from .activity_service import ActivityService
from .base import Service


class CommentService(Service):
    """Domain service for comment storage operations.

    Enforces the referential rules around replies and writes an audit
    record for every create, update and delete.
    """

    def __init__(
        self,
        comment_repository: CommentRepository,
        activity_service: ActivityService,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            activity_service: Audit sink
        """
        self.comment_repository = comment_repository
        self.activity_service = activity_service

    async def create_comment(
        self,
        draft: NewComment,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> Comment:
        """Create a comment on a post or reply to another comment.

        The parent check and the insert are separate statements: a parent
        rejected or deleted in between leaves an orphaned reply, which
        thread assembly never reaches.

        Args:
            draft: Validated creation record
            ip_address: Client address, stored for moderation only
            user_agent: Client user agent, stored for moderation only

        Returns:
            Created comment

        Raises:
            NotFoundError: If the parent is missing, unapproved, deleted
                or on another post
        """
        with logfire.span(
            "comment_service.create_comment",
            post_id=str(draft.post_id),
            parent_id=str(draft.parent_id) if draft.parent_id else None,
            registered=draft.author_id is not None,
        ):
            if draft.parent_id:
                parent = await self.comment_repository.find_reply_target(
                    draft.parent_id, draft.post_id
                )
                if parent is None:
                    logfire.warn(
                        "Parent comment not available for replies",
                        parent_id=str(draft.parent_id),
                        post_id=str(draft.post_id),
                    )
                    raise NotFoundError("Comment", str(draft.parent_id))

            now = datetime.now()
            comment = Comment(
                id=CommentId(uuid4()),
                post_id=draft.post_id,
                content=draft.content,
                parent_id=draft.parent_id,
                author_id=draft.author_id,
                author_name=draft.author_name,
                author_email=draft.author_email,
                author_url=draft.author_url,
                approved=draft.approved,
                ip_address=ip_address,
                user_agent=user_agent,
                created_at=now,
                updated_at=now,
                deleted_at=None,
            )

            saved = await self.comment_repository.create(comment)
            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                post_id=str(saved.post_id),
                approved=saved.approved,
            )

            await self.activity_service.record(
                ActivityAction.CREATE_COMMENT,
                user_id=saved.author_id,
                resource_id=str(saved.id),
                details={
                    "post_id": str(saved.post_id),
                    "parent_id": str(saved.parent_id) if saved.parent_id else None,
                    "approved": saved.approved,
                },
            )
            return saved

    async def find_many(
        self, comment_filter: CommentFilter
    ) -> tuple[list[Comment], int]:
        """Get one page of comments and the total matching count.

        The page and the count are two independent reads, so the total may
        drift slightly from the page under concurrent writes.

        Args:
            comment_filter: Filter, sort and pagination parameters

        Returns:
            Tuple of (comments on the page, total matching comments)
        """
        with logfire.span(
            "comment_service.find_many",
            post_id=str(comment_filter.post_id),
            page=comment_filter.page,
            limit=comment_filter.limit,
            approved=comment_filter.approved,
        ):
            comments = await self.comment_repository.find_many(comment_filter)
            total = await self.comment_repository.count(comment_filter)
            logfire.info(
                "Comments retrieved",
                post_id=str(comment_filter.post_id),
                count=len(comments),
                total=total,
            )
            return comments, total

    async def find_replies(
        self, parent_ids: list[CommentId], limit_per_parent: int
    ) -> dict[CommentId, list[Comment]]:
        """Get approved, non-deleted replies for several parents."""
        if not parent_ids:
            return {}
        with logfire.span(
            "comment_service.find_replies",
            parents=len(parent_ids),
            limit_per_parent=limit_per_parent,
        ):
            return await self.comment_repository.find_replies(
                parent_ids, limit_per_parent
            )

    async def get_comment_by_id(
        self, comment_id: CommentId, include_deleted: bool = False
    ) -> Comment | None:
        """Get a comment by ID.

        Args:
            comment_id: Comment ID
            include_deleted: Whether a soft-deleted comment may be returned

        Returns:
            Comment if found, None otherwise
        """
        with logfire.span(
            "comment_service.get_comment_by_id", comment_id=str(comment_id)
        ):
            comment = await self.comment_repository.find_by_id(
                comment_id, include_deleted=include_deleted
            )
            if comment is None:
                logfire.warn("Comment not found", comment_id=str(comment_id))
            return comment

    async def update_comment(
        self, comment_id: CommentId, patch: CommentPatch, actor_id: UserId | None
    ) -> Comment:
        """Apply a partial update to content and/or approval.

        Raises:
            NotFoundError: If the comment is missing or soft-deleted
        """
        with logfire.span(
            "comment_service.update_comment",
            comment_id=str(comment_id),
            content_changed=patch.content is not None,
            approved=patch.approved,
        ):
            updated = await self.comment_repository.update(
                comment_id, content=patch.content, approved=patch.approved
            )
            if updated is None:
                logfire.warn(
                    "Comment not found or deleted for update",
                    comment_id=str(comment_id),
                )
                raise NotFoundError("Comment", str(comment_id))

            logfire.info("Comment updated", comment_id=str(comment_id))
            await self.activity_service.record(
                ActivityAction.UPDATE_COMMENT,
                user_id=actor_id,
                resource_id=str(comment_id),
                details={
                    "fields": [
                        name
                        for name, value in (
                            ("content", patch.content),
                            ("approved", patch.approved),
                        )
                        if value is not None
                    ],
                },
            )
            return updated

    async def set_approval(
        self, comment_id: CommentId, approved: bool, actor_id: UserId | None
    ) -> Comment | None:
        """Approve or reject a comment.

        Returns:
            The updated comment, or None if missing or soft-deleted
        """
        with logfire.span(
            "comment_service.set_approval",
            comment_id=str(comment_id),
            approved=approved,
        ):
            updated = await self.comment_repository.update(
                comment_id, approved=approved
            )
            if updated is None:
                logfire.warn(
                    "Comment not found or deleted for approval change",
                    comment_id=str(comment_id),
                )
                return None

            await self.activity_service.record(
                ActivityAction.APPROVE_COMMENT
                if approved
                else ActivityAction.REJECT_COMMENT,
                user_id=actor_id,
                resource_id=str(comment_id),
                details={"post_id": str(updated.post_id)},
            )
            return updated

    async def soft_delete(
        self, comment_id: CommentId, actor_id: UserId | None
    ) -> Comment | None:
        """Soft-delete a comment. Deletion is terminal.

        Returns:
            The deleted comment, or None if missing or already deleted
        """
        with logfire.span("comment_service.soft_delete", comment_id=str(comment_id)):
            deleted = await self.comment_repository.soft_delete(comment_id)
            if deleted is None:
                logfire.warn(
                    "Comment not found or already deleted",
                    comment_id=str(comment_id),
                )
                return None

            logfire.info("Comment soft-deleted", comment_id=str(comment_id))
            await self.activity_service.record(
                ActivityAction.DELETE_COMMENT,
                user_id=actor_id,
                resource_id=str(comment_id),
                details={"post_id": str(deleted.post_id)},
            )
            return deleted
