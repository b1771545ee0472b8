"""Unit tests for ModerateCommentsUseCase."""

from uuid import uuid4

import pytest

from commentary.application.usecase.comment import (
    ModerateCommentsRequest,
    ModerateCommentsUseCase,
)
from commentary.domain.error import ForbiddenError, UnauthorizedError, ValidationError
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


class TestModerateCommentsUseCase:
    """Tests for ModerateCommentsUseCase."""

    @pytest.mark.asyncio
    async def test_batch_with_missing_id(self, unit_env):
        # Arrange
        use_case = await unit_env.get(ModerateCommentsUseCase)
        post_repo = await unit_env.get(PostRepository)
        comment_repo = await unit_env.get(CommentRepository)
        rate_limiter = await unit_env.get(RateLimiter)
        post = post_repo.add(make_post())
        first = await comment_repo.create(make_comment(post, approved=False))
        second = await comment_repo.create(make_comment(post, approved=False))
        missing = uuid4()
        token = await _token(unit_env, UserRole.ADMIN)

        # Act
        response = await use_case.execute(
            ModerateCommentsRequest(
                comment_ids=[str(first.id), str(second.id), str(missing)],
                action="delete",
                auth_token=token,
            )
        )

        # Assert
        assert response.action == "delete"
        assert response.succeeded == 2
        assert response.failed == 1
        failures = [r for r in response.results if not r.success]
        assert failures[0].comment_id == str(missing)
        assert failures[0].error == "not_found"
        assert await comment_repo.find_by_id(first.id) is None
        assert rate_limiter.calls[-1][1] == RateLimitBucket.COMMENTS_MODERATE

    @pytest.mark.asyncio
    async def test_requires_authentication(self, unit_env):
        use_case = await unit_env.get(ModerateCommentsUseCase)
        with pytest.raises(UnauthorizedError):
            await use_case.execute(
                ModerateCommentsRequest(comment_ids=[str(uuid4())], action="approve")
            )

    @pytest.mark.asyncio
    async def test_non_moderator_forbidden_before_validation(self, unit_env):
        # Arrange
        use_case = await unit_env.get(ModerateCommentsUseCase)
        token = await _token(unit_env, UserRole.USER)

        # Act & Assert
        with pytest.raises(ForbiddenError):
            await use_case.execute(
                ModerateCommentsRequest(comment_ids=[], action="ban", auth_token=token)
            )

    @pytest.mark.asyncio
    async def test_invalid_batch(self, unit_env):
        # Arrange
        use_case = await unit_env.get(ModerateCommentsUseCase)
        token = await _token(unit_env, UserRole.SUPER_ADMIN)

        # Act & Assert
        with pytest.raises(ValidationError):
            await use_case.execute(
                ModerateCommentsRequest(
                    comment_ids=[str(uuid4()) for _ in range(101)],
                    action="approve",
                    auth_token=token,
                )
            )
