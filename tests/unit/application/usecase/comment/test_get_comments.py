"""Unit tests for GetCommentsUseCase."""

import pytest

from commentary.application.usecase.comment import (
    GetCommentsRequest,
    GetCommentsUseCase,
)
from commentary.domain.error import NotFoundError, RateLimitedError, ValidationError
from commentary.domain.repository import (
    CommentRepository,
    PostRepository,
    UserRepository,
)
from commentary.domain.service import JWTService, RateLimiter
from commentary.domain.value import RateLimitBucket, UserRole
from tests.conftest import make_comment, make_post, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def _token(unit_env, role: UserRole) -> str:
    user_repo = await unit_env.get(UserRepository)
    jwt_service = await unit_env.get(JWTService)
    user = user_repo.add(make_user(role))
    return jwt_service.create_token(str(user.id))


class TestGetCommentsUseCase:
    """Tests for GetCommentsUseCase."""

    @pytest.mark.asyncio
    async def test_public_listing(self, unit_env):
        """Anonymous callers get approved, non-deleted threads and a public cache header."""
        # Arrange
        use_case = await unit_env.get(GetCommentsUseCase)
        post_repo = await unit_env.get(PostRepository)
        comment_repo = await unit_env.get(CommentRepository)
        post = post_repo.add(make_post())
        root = await comment_repo.create(make_comment(post, minutes_ago=5))
        await comment_repo.create(make_comment(post, approved=False, minutes_ago=4))
        await comment_repo.create(make_comment(post, deleted=True, minutes_ago=3))
        reply = await comment_repo.create(
            make_comment(post, parent=root, minutes_ago=2)
        )

        # Act
        response = await use_case.execute(
            GetCommentsRequest(post_slug=post.slug, client_ip="203.0.113.9")
        )

        # Assert
        assert [c.id for c in response.comments] == [str(root.id)]
        assert [r.id for r in response.comments[0].replies] == [str(reply.id)]
        assert response.pagination.total == 1
        assert response.cache_control.startswith("public")

    @pytest.mark.asyncio
    async def test_response_never_exposes_provenance(self, unit_env):
        # Arrange
        use_case = await unit_env.get(GetCommentsUseCase)
        post_repo = await unit_env.get(PostRepository)
        comment_repo = await unit_env.get(CommentRepository)
        post = post_repo.add(make_post())
        await comment_repo.create(make_comment(post))

        # Act
        response = await use_case.execute(GetCommentsRequest(post_slug=post.slug))

        # Assert
        body = response.model_dump()
        item = body["comments"][0]
        assert item["author_name"] == "Ada"
        for hidden in ("author_email", "ip_address", "user_agent"):
            assert hidden not in item
        assert "cache_control" not in body

    @pytest.mark.asyncio
    async def test_anonymous_cannot_list_pending(self, unit_env):
        # Arrange
        use_case = await unit_env.get(GetCommentsUseCase)
        post_repo = await unit_env.get(PostRepository)
        comment_repo = await unit_env.get(CommentRepository)
        post = post_repo.add(make_post())
        await comment_repo.create(make_comment(post, approved=False))

        # Act
        response = await use_case.execute(
            GetCommentsRequest(post_slug=post.slug, query={"approved": "false"})
        )

        # Assert
        assert response.comments == []

    @pytest.mark.asyncio
    async def test_moderator_lists_pending_privately(self, unit_env):
        # Arrange
        use_case = await unit_env.get(GetCommentsUseCase)
        post_repo = await unit_env.get(PostRepository)
        comment_repo = await unit_env.get(CommentRepository)
        post = post_repo.add(make_post())
        pending = await comment_repo.create(make_comment(post, approved=False))
        await comment_repo.create(make_comment(post))
        token = await _token(unit_env, UserRole.ADMIN)

        # Act
        pending_only = await use_case.execute(
            GetCommentsRequest(
                post_slug=post.slug, query={"approved": "false"}, auth_token=token
            )
        )
        everything = await use_case.execute(
            GetCommentsRequest(
                post_slug=post.slug, query={"approved": "all"}, auth_token=token
            )
        )

        # Assert
        assert [c.id for c in pending_only.comments] == [str(pending.id)]
        assert len(everything.comments) == 2
        assert pending_only.cache_control == "private, no-store"

    @pytest.mark.asyncio
    async def test_unpublished_post_is_hidden_from_non_moderators(self, unit_env):
        # Arrange
        use_case = await unit_env.get(GetCommentsUseCase)
        post_repo = await unit_env.get(PostRepository)
        post = post_repo.add(make_post(published=False))
        author_token = await _token(unit_env, UserRole.AUTHOR)
        admin_token = await _token(unit_env, UserRole.SUPER_ADMIN)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await use_case.execute(GetCommentsRequest(post_slug=post.slug))
        with pytest.raises(NotFoundError):
            await use_case.execute(
                GetCommentsRequest(post_slug=post.slug, auth_token=author_token)
            )
        response = await use_case.execute(
            GetCommentsRequest(post_slug=post.slug, auth_token=admin_token)
        )
        assert response.comments == []

    @pytest.mark.asyncio
    async def test_unknown_post(self, unit_env):
        use_case = await unit_env.get(GetCommentsUseCase)
        with pytest.raises(NotFoundError):
            await use_case.execute(GetCommentsRequest(post_slug="nope"))

    @pytest.mark.asyncio
    async def test_invalid_query(self, unit_env):
        # Arrange
        use_case = await unit_env.get(GetCommentsUseCase)
        post_repo = await unit_env.get(PostRepository)
        post = post_repo.add(make_post())

        # Act & Assert
        with pytest.raises(ValidationError) as exc_info:
            await use_case.execute(
                GetCommentsRequest(post_slug=post.slug, query={"page": "0"})
            )
        assert exc_info.value.errors[0].field == "page"

    @pytest.mark.asyncio
    async def test_read_quota_is_checked_per_client(self, unit_env):
        # Arrange
        use_case = await unit_env.get(GetCommentsUseCase)
        rate_limiter = await unit_env.get(RateLimiter)
        post_repo = await unit_env.get(PostRepository)
        post = post_repo.add(make_post())

        # Act
        await use_case.execute(
            GetCommentsRequest(post_slug=post.slug, client_ip="203.0.113.9")
        )

        # Assert
        assert rate_limiter.calls == [("203.0.113.9", RateLimitBucket.COMMENTS_READ)]

    @pytest.mark.asyncio
    async def test_exhausted_quota(self, unit_env):
        # Arrange
        use_case = await unit_env.get(GetCommentsUseCase)
        rate_limiter = await unit_env.get(RateLimiter)
        rate_limiter.exhausted.add(RateLimitBucket.COMMENTS_READ)
        post_repo = await unit_env.get(PostRepository)
        post = post_repo.add(make_post())

        # Act & Assert
        with pytest.raises(RateLimitedError):
            await use_case.execute(GetCommentsRequest(post_slug=post.slug))
