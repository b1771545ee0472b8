"""Integration tests for PostgresCommentRepository.

These tests run against the PostgreSQL database named by DATABASE__URL,
with migrations applied. Each test seeds its own post, so rows left by
earlier runs do not interfere.
"""

import os
from datetime import datetime, timedelta
from uuid import uuid4

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from commentary.domain.error import ConflictError
from commentary.domain.model import Post
from commentary.domain.repository import CommentRepository, PostRepository
from commentary.domain.value import CommentFilter, SortOrder
from commentary.persistence.mappers import post_to_dict
from commentary.persistence.tables import posts_table
from tests.conftest import make_comment, make_post
from tests.harness import create_env_fixture

# Integration test fixture
integration_env = create_env_fixture(unmock={"persistence"})

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(
        "DATABASE__URL" not in os.environ,
        reason="set DATABASE__URL to a migrated PostgreSQL database",
    ),
]


async def _seed_post(env, published: bool = True) -> Post:
    """Insert a post row; posts are written by the publishing side."""
    session = await env.get(AsyncSession)
    post = make_post(f"post-{uuid4().hex[:12]}", published=published)
    await session.execute(posts_table.insert().values(**post_to_dict(post)))
    return post


class TestCommentRepositoryIntegration:
    """Integration tests for PostgresCommentRepository."""

    @pytest.mark.asyncio
    async def test_reply_cap_applies_per_parent(self, integration_env):
        """Each parent gets its own oldest-first cap; hidden replies are skipped."""
        # Arrange
        comment_repo = await integration_env.get(CommentRepository)
        post = await _seed_post(integration_env)
        busy = await comment_repo.create(make_comment(post, minutes_ago=30))
        quiet = await comment_repo.create(make_comment(post, minutes_ago=29))
        busy_replies = [
            await comment_repo.create(
                make_comment(post, parent=busy, minutes_ago=20 - i)
            )
            for i in range(3)
        ]
        await comment_repo.create(
            make_comment(post, parent=busy, approved=False, minutes_ago=25)
        )
        await comment_repo.create(
            make_comment(post, parent=busy, deleted=True, minutes_ago=24)
        )
        quiet_reply = await comment_repo.create(
            make_comment(post, parent=quiet, minutes_ago=10)
        )

        # Act
        replies = await comment_repo.find_replies([busy.id, quiet.id], 2)

        # Assert
        assert [c.id for c in replies[busy.id]] == [c.id for c in busy_replies[:2]]
        assert [c.id for c in replies[quiet.id]] == [quiet_reply.id]

    @pytest.mark.asyncio
    async def test_find_replies_without_parents(self, integration_env):
        comment_repo = await integration_env.get(CommentRepository)

        assert await comment_repo.find_replies([], 50) == {}

    @pytest.mark.asyncio
    async def test_soft_deleted_rows_are_excluded_from_listing(self, integration_env):
        # Arrange
        comment_repo = await integration_env.get(CommentRepository)
        post = await _seed_post(integration_env)
        kept = await comment_repo.create(make_comment(post, minutes_ago=3))
        removed = await comment_repo.create(make_comment(post, minutes_ago=2))
        await comment_repo.create(make_comment(post, parent=kept, minutes_ago=1))

        # Act
        deleted = await comment_repo.soft_delete(removed.id)
        comment_filter = CommentFilter(post_id=post.id)
        listed = await comment_repo.find_many(comment_filter)
        total = await comment_repo.count(comment_filter)

        # Assert
        assert deleted is not None and deleted.deleted_at is not None
        assert [c.id for c in listed] == [kept.id]
        assert total == 1

    @pytest.mark.asyncio
    async def test_deleted_comment_is_terminal(self, integration_env):
        # Arrange
        comment_repo = await integration_env.get(CommentRepository)
        post = await _seed_post(integration_env)
        comment = await comment_repo.create(make_comment(post, approved=False))
        await comment_repo.soft_delete(comment.id)

        # Act & Assert
        assert await comment_repo.soft_delete(comment.id) is None
        assert await comment_repo.update(comment.id, approved=True) is None
        assert await comment_repo.find_by_id(comment.id) is None
        hidden = await comment_repo.find_by_id(comment.id, include_deleted=True)
        assert hidden is not None and hidden.approved is False

    @pytest.mark.asyncio
    async def test_update_returns_changed_row(self, integration_env):
        # Arrange
        comment_repo = await integration_env.get(CommentRepository)
        post = await _seed_post(integration_env)
        comment = await comment_repo.create(make_comment(post, approved=False))

        # Act
        updated = await comment_repo.update(comment.id, content="Edited")

        # Assert
        assert updated.content == "Edited"
        assert updated.approved is False

    @pytest.mark.asyncio
    async def test_equal_timestamps_are_ordered_by_id(self, integration_env):
        # Arrange
        comment_repo = await integration_env.get(CommentRepository)
        post = await _seed_post(integration_env)
        created_at = datetime.now() - timedelta(hours=1)
        same_time = [
            make_comment(post).model_copy(
                update={"created_at": created_at, "updated_at": created_at}
            )
            for _ in range(3)
        ]
        for comment in same_time:
            await comment_repo.create(comment)

        # Act
        ascending = await comment_repo.find_many(CommentFilter(post_id=post.id))
        descending = await comment_repo.find_many(
            CommentFilter(post_id=post.id, sort_order=SortOrder.DESC)
        )

        # Assert
        expected = sorted(c.id for c in same_time)
        assert [c.id for c in ascending] == expected
        assert [c.id for c in descending] == expected[::-1]

    @pytest.mark.asyncio
    async def test_constraint_violation_becomes_conflict(self, integration_env):
        """A failed insert is rolled back to its savepoint; the session stays usable."""
        # Arrange
        comment_repo = await integration_env.get(CommentRepository)
        post = await _seed_post(integration_env)
        comment = await comment_repo.create(make_comment(post))

        # Act & Assert
        with pytest.raises(ConflictError):
            await comment_repo.create(comment)
        assert (await comment_repo.find_by_id(comment.id)).id == comment.id

    @pytest.mark.asyncio
    async def test_comment_on_missing_post_is_conflict(self, integration_env):
        comment_repo = await integration_env.get(CommentRepository)
        unsaved_post = make_post(f"missing-{uuid4().hex[:12]}")

        with pytest.raises(ConflictError):
            await comment_repo.create(make_comment(unsaved_post))


class TestPostRepositoryIntegration:
    """Integration tests for PostgresPostRepository reads."""

    @pytest.mark.asyncio
    async def test_find_by_slug_and_id(self, integration_env):
        # Arrange
        post_repo = await integration_env.get(PostRepository)
        post = await _seed_post(integration_env, published=False)

        # Act
        by_slug = await post_repo.find_by_slug(post.slug)
        by_id = await post_repo.find_by_id(post.id)

        # Assert
        assert by_slug.id == post.id
        assert by_id.published is False
        assert await post_repo.find_by_slug(f"nope-{uuid4().hex}") is None
