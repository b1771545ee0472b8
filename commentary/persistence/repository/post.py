"""PostgreSQL implementation of Post repository."""

from typing import Optional

import logfire
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from commentary.domain.model import Post
from commentary.domain.repository import PostRepository
from commentary.domain.value import PostId
from commentary.persistence.mappers import row_to_post
from commentary.persistence.tables import posts_table


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a non-deleted post by ID."""
        stmt = select(posts_table).where(
            posts_table.c.id == post_id,
            posts_table.c.deleted_at.is_(None),
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_post(row._asdict()) if row else None

    async def find_by_slug(self, slug: str) -> Optional[Post]:
        """Find a non-deleted post by slug."""
        with logfire.span("post_repository.find_by_slug", slug=slug):
            stmt = select(posts_table).where(
                posts_table.c.slug == slug,
                posts_table.c.deleted_at.is_(None),
            )
            result = await self.session.execute(stmt)
            row = result.fetchone()
            return row_to_post(row._asdict()) if row else None
