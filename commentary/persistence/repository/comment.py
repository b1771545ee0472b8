"""PostgreSQL implementation of Comment repository."""

from datetime import datetime
from typing import Any, Iterable, Optional

import logfire
from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from commentary.domain.error import ConflictError, InternalError
from commentary.domain.model import Comment
from commentary.domain.repository import CommentRepository
from commentary.domain.value import (
    CommentFilter,
    CommentId,
    CommentSortField,
    PostId,
    SortOrder,
)
from commentary.persistence.mappers import comment_to_dict, row_to_comment
from commentary.persistence.tables import comments_table

_SORT_COLUMNS = {
    CommentSortField.CREATED_AT: comments_table.c.created_at,
    CommentSortField.UPDATED_AT: comments_table.c.updated_at,
}


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository.

    Writes run inside a SAVEPOINT so that a failing statement does not
    abort the request transaction; batch moderation relies on this to
    keep each id independent.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    def _filter_conditions(self, comment_filter: CommentFilter) -> list[Any]:
        conditions = [
            comments_table.c.post_id == comment_filter.post_id,
            comments_table.c.deleted_at.is_(None),
        ]
        if comment_filter.top_level_only:
            conditions.append(comments_table.c.parent_id.is_(None))
        if comment_filter.approved is not None:
            conditions.append(comments_table.c.approved.is_(comment_filter.approved))
        if comment_filter.author_id is not None:
            conditions.append(comments_table.c.author_id == comment_filter.author_id)
        return conditions

    async def find_by_id(
        self, comment_id: CommentId, include_deleted: bool = False
    ) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        if not include_deleted:
            stmt = stmt.where(comments_table.c.deleted_at.is_(None))
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_reply_target(
        self, comment_id: CommentId, post_id: PostId
    ) -> Optional[Comment]:
        """Find an approved, non-deleted comment on the given post."""
        stmt = select(comments_table).where(
            comments_table.c.id == comment_id,
            comments_table.c.post_id == post_id,
            comments_table.c.approved.is_(True),
            comments_table.c.deleted_at.is_(None),
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_many(self, comment_filter: CommentFilter) -> list[Comment]:
        """Find one page of comments matching a filter."""
        column = _SORT_COLUMNS[comment_filter.sort_by]
        if comment_filter.sort_order == SortOrder.DESC:
            ordering = [column.desc(), comments_table.c.id.desc()]
        else:
            ordering = [column.asc(), comments_table.c.id.asc()]

        stmt = (
            select(comments_table)
            .where(*self._filter_conditions(comment_filter))
            .order_by(*ordering)
            .offset(comment_filter.skip)
            .limit(comment_filter.take)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def count(self, comment_filter: CommentFilter) -> int:
        """Count comments matching a filter, ignoring pagination."""
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(*self._filter_conditions(comment_filter))
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def find_replies(
        self, parent_ids: Iterable[CommentId], limit_per_parent: int
    ) -> dict[CommentId, list[Comment]]:
        """Find approved, non-deleted direct replies for several parents.

        Uses ROW_NUMBER() per parent so the cap applies to each parent
        in a single query.
        """
        ids = list(parent_ids)
        if not ids:
            return {}

        ranked = (
            select(
                comments_table,
                func.row_number()
                .over(
                    partition_by=comments_table.c.parent_id,
                    order_by=[comments_table.c.created_at, comments_table.c.id],
                )
                .label("reply_rank"),
            )
            .where(
                comments_table.c.parent_id.in_(ids),
                comments_table.c.approved.is_(True),
                comments_table.c.deleted_at.is_(None),
            )
            .subquery()
        )
        stmt = (
            select(ranked)
            .where(ranked.c.reply_rank <= limit_per_parent)
            .order_by(ranked.c.parent_id, ranked.c.created_at, ranked.c.id)
        )
        result = await self.session.execute(stmt)

        replies: dict[CommentId, list[Comment]] = {}
        for row in result.fetchall():
            comment = row_to_comment(row._asdict())
            replies.setdefault(comment.parent_id, []).append(comment)
        return replies

    async def create(self, comment: Comment) -> Comment:
        """Insert a new comment."""
        stmt = comments_table.insert().values(**comment_to_dict(comment))
        try:
            async with self.session.begin_nested():
                await self.session.execute(stmt)
        except IntegrityError as e:
            logfire.warn(
                "Comment insert violated a constraint",
                comment_id=str(comment.id),
                error=str(e.orig),
            )
            raise ConflictError("Comment could not be stored") from e
        except SQLAlchemyError as e:
            logfire.error(
                "Comment insert failed",
                comment_id=str(comment.id),
                error_type=type(e).__name__,
            )
            raise InternalError("Comment could not be stored") from e
        return comment

    async def update(
        self,
        comment_id: CommentId,
        content: Optional[str] = None,
        approved: Optional[bool] = None,
    ) -> Optional[Comment]:
        """Partially update a non-deleted comment."""
        values: dict[str, Any] = {"updated_at": datetime.now()}
        if content is not None:
            values["content"] = content
        if approved is not None:
            values["approved"] = approved

        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .where(comments_table.c.deleted_at.is_(None))
            .values(**values)
            .returning(comments_table)
        )
        async with self.session.begin_nested():
            result = await self.session.execute(stmt)
            row = result.fetchone()

        return row_to_comment(row._asdict()) if row else None

    async def soft_delete(self, comment_id: CommentId) -> Optional[Comment]:
        """Mark a comment as deleted."""
        now = datetime.now()
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .where(comments_table.c.deleted_at.is_(None))
            .values(deleted_at=now, updated_at=now)
            .returning(comments_table)
        )
        async with self.session.begin_nested():
            result = await self.session.execute(stmt)
            row = result.fetchone()

        return row_to_comment(row._asdict()) if row else None
