"""Unit tests for CreateCommentUseCase."""

from uuid import UUID, uuid4

import pytest

from commentary.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentUseCase,
)
from commentary.domain.error import NotFoundError, RateLimitedError, ValidationError
from commentary.domain.repository import (
    CommentRepository,
    PostRepository,
    UserRepository,
)
from commentary.domain.service import JWTService, RateLimiter
from commentary.domain.value import CommentId, RateLimitBucket, UserRole
from tests.conftest import make_comment, make_post, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestCreateCommentUseCase:
    """Tests for CreateCommentUseCase."""

    @pytest.mark.asyncio
    async def test_anonymous_comment_awaits_moderation(self, unit_env):
        # Arrange
        use_case = await unit_env.get(CreateCommentUseCase)
        post_repo = await unit_env.get(PostRepository)
        comment_repo = await unit_env.get(CommentRepository)
        post = post_repo.add(make_post())

        # Act
        response = await use_case.execute(
            CreateCommentRequest(
                post_slug=post.slug,
                content="  First!  ",
                author_name="Ada",
                author_email="ADA@mail.com",
                client_ip="198.51.100.1",
                user_agent="Mozilla/5.0",
            )
        )

        # Assert
        assert response.comment.approved is False
        assert response.comment.content == "First!"
        assert response.comment.author_id is None
        assert response.location == f"/comments/{response.comment.id}"
        assert "author_email" not in response.comment.model_dump()

        stored = await comment_repo.find_by_id(CommentId(UUID(response.comment.id)))
        assert stored.author_email == "ada@mail.com"
        assert stored.ip_address == "198.51.100.1"
        assert stored.user_agent == "Mozilla/5.0"

    @pytest.mark.asyncio
    async def test_registered_comment_is_approved(self, unit_env):
        # Arrange
        use_case = await unit_env.get(CreateCommentUseCase)
        post_repo = await unit_env.get(PostRepository)
        user_repo = await unit_env.get(UserRepository)
        jwt_service = await unit_env.get(JWTService)
        post = post_repo.add(make_post())
        user = user_repo.add(make_user())

        # Act
        response = await use_case.execute(
            CreateCommentRequest(
                post_slug=post.slug,
                content="Registered comment",
                auth_token=jwt_service.create_token(str(user.id)),
            )
        )

        # Assert
        assert response.comment.approved is True
        assert response.comment.author_id == str(user.id)
        assert response.comment.author_name is None

    @pytest.mark.asyncio
    async def test_invalid_token_falls_back_to_anonymous(self, unit_env):
        # Arrange
        use_case = await unit_env.get(CreateCommentUseCase)
        post_repo = await unit_env.get(PostRepository)
        post = post_repo.add(make_post())

        # Act & Assert
        with pytest.raises(ValidationError) as exc_info:
            await use_case.execute(
                CreateCommentRequest(
                    post_slug=post.slug, content="Hi", auth_token="garbage"
                )
            )
        assert {e.field for e in exc_info.value.errors} == {
            "author_name",
            "author_email",
        }

    @pytest.mark.asyncio
    async def test_unpublished_post_rejects_comments(self, unit_env):
        # Arrange
        use_case = await unit_env.get(CreateCommentUseCase)
        post_repo = await unit_env.get(PostRepository)
        post = post_repo.add(make_post(published=False))

        # Act & Assert
        with pytest.raises(NotFoundError):
            await use_case.execute(
                CreateCommentRequest(
                    post_slug=post.slug,
                    content="Hi",
                    author_name="Ada",
                    author_email="ada@mail.com",
                )
            )

    @pytest.mark.asyncio
    async def test_reply_to_comment_on_other_post(self, unit_env):
        # Arrange
        use_case = await unit_env.get(CreateCommentUseCase)
        post_repo = await unit_env.get(PostRepository)
        comment_repo = await unit_env.get(CommentRepository)
        post = post_repo.add(make_post("one"))
        other = post_repo.add(make_post("two"))
        foreign_parent = await comment_repo.create(make_comment(other))

        # Act & Assert
        with pytest.raises(NotFoundError):
            await use_case.execute(
                CreateCommentRequest(
                    post_slug=post.slug,
                    content="Reply",
                    parent_id=str(foreign_parent.id),
                    author_name="Ada",
                    author_email="ada@mail.com",
                )
            )

    @pytest.mark.asyncio
    async def test_reply_to_missing_parent(self, unit_env):
        # Arrange
        use_case = await unit_env.get(CreateCommentUseCase)
        post_repo = await unit_env.get(PostRepository)
        post = post_repo.add(make_post())

        # Act & Assert
        with pytest.raises(NotFoundError):
            await use_case.execute(
                CreateCommentRequest(
                    post_slug=post.slug,
                    content="Reply",
                    parent_id=str(uuid4()),
                    author_name="Ada",
                    author_email="ada@mail.com",
                )
            )

    @pytest.mark.asyncio
    async def test_create_quota(self, unit_env):
        # Arrange
        use_case = await unit_env.get(CreateCommentUseCase)
        rate_limiter = await unit_env.get(RateLimiter)
        rate_limiter.exhausted.add(RateLimitBucket.COMMENTS_CREATE)

        # Act & Assert
        with pytest.raises(RateLimitedError):
            await use_case.execute(
                CreateCommentRequest(post_slug="any", content="Hi")
            )
