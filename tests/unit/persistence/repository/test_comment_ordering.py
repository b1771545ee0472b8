"""Unit tests for comment listing order and pagination."""

import pytest

from commentary.domain.value import CommentFilter, CommentSortField, SortOrder
from commentary.persistence.mappers import comment_to_dict, row_to_comment
from commentary.persistence.repository.inmemory.comment import (
    InMemoryCommentRepository,
)
from tests.conftest import make_comment, make_post


class TestCommentOrdering:
    """Unit tests for listing order."""

    @pytest.mark.asyncio
    async def test_pages_do_not_overlap(self):
        """Consecutive pages partition the filtered, ordered set."""
        # Arrange
        repo = InMemoryCommentRepository()
        post = make_post()
        for minutes in range(5):
            await repo.create(make_comment(post, minutes_ago=minutes))

        # Act
        pages = [
            await repo.find_many(CommentFilter(post_id=post.id, page=page, limit=2))
            for page in (1, 2, 3)
        ]

        # Assert
        ids = [c.id for page in pages for c in page]
        assert [len(page) for page in pages] == [2, 2, 1]
        assert len(set(ids)) == 5
        created = [c.created_at for page in pages for c in page]
        assert created == sorted(created)

    @pytest.mark.asyncio
    async def test_descending_updated_at(self):
        # Arrange
        repo = InMemoryCommentRepository()
        post = make_post()
        oldest = await repo.create(make_comment(post, minutes_ago=10))
        newest = await repo.create(make_comment(post, minutes_ago=1))

        # Act
        comments = await repo.find_many(
            CommentFilter(
                post_id=post.id,
                sort_by=CommentSortField.UPDATED_AT,
                sort_order=SortOrder.DESC,
            )
        )

        # Assert
        assert [c.id for c in comments] == [newest.id, oldest.id]

    @pytest.mark.asyncio
    async def test_count_ignores_replies_and_deleted(self):
        # Arrange
        repo = InMemoryCommentRepository()
        post = make_post()
        root = await repo.create(make_comment(post))
        await repo.create(make_comment(post, parent=root))
        await repo.create(make_comment(post, deleted=True))
        await repo.create(make_comment(make_post("other")))

        # Act
        total = await repo.count(CommentFilter(post_id=post.id))

        # Assert
        assert total == 1

    @pytest.mark.asyncio
    async def test_soft_delete_is_terminal(self):
        # Arrange
        repo = InMemoryCommentRepository()
        post = make_post()
        comment = await repo.create(make_comment(post))

        # Act
        deleted = await repo.soft_delete(comment.id)
        again = await repo.soft_delete(comment.id)

        # Assert
        assert deleted is not None and deleted.is_deleted
        assert again is None
        assert await repo.update(comment.id, approved=True) is None
        assert await repo.find_by_id(comment.id) is None
        assert (await repo.find_by_id(comment.id, include_deleted=True)) is not None


class TestCommentMapper:
    """Row mapping keeps provenance fields intact."""

    def test_row_round_trip(self):
        comment = make_comment(make_post())

        assert row_to_comment(comment_to_dict(comment)) == comment
