"""Application layer DI providers."""

from dishka import Scope, provide

from commentary.application.usecase.comment import (
    CreateCommentUseCase,
    GetCommentsUseCase,
    GetCommentUseCase,
    ModerateCommentsUseCase,
    UpdateCommentUseCase,
)
from commentary.config import CommentSettings, RateLimitSettings
from commentary.domain.service import (
    CommentService,
    IdentityService,
    ModerationService,
    PostService,
    RateLimiter,
    ThreadService,
)
from commentary.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    @provide(scope=Scope.REQUEST)
    def get_comments_use_case(
        self,
        identity_service: IdentityService,
        rate_limiter: RateLimiter,
        post_service: PostService,
        thread_service: ThreadService,
        rate_limit_settings: RateLimitSettings,
        comment_settings: CommentSettings,
    ) -> GetCommentsUseCase:
        """Provide list comments use case."""
        return GetCommentsUseCase(
            identity_service=identity_service,
            rate_limiter=rate_limiter,
            post_service=post_service,
            thread_service=thread_service,
            rate_limit_settings=rate_limit_settings,
            comment_settings=comment_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self,
        identity_service: IdentityService,
        rate_limiter: RateLimiter,
        post_service: PostService,
        comment_service: CommentService,
        rate_limit_settings: RateLimitSettings,
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(
            identity_service=identity_service,
            rate_limiter=rate_limiter,
            post_service=post_service,
            comment_service=comment_service,
            rate_limit_settings=rate_limit_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_comment_use_case(
        self,
        identity_service: IdentityService,
        rate_limiter: RateLimiter,
        post_service: PostService,
        comment_service: CommentService,
        rate_limit_settings: RateLimitSettings,
    ) -> GetCommentUseCase:
        """Provide get comment use case."""
        return GetCommentUseCase(
            identity_service=identity_service,
            rate_limiter=rate_limiter,
            post_service=post_service,
            comment_service=comment_service,
            rate_limit_settings=rate_limit_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_update_comment_use_case(
        self,
        identity_service: IdentityService,
        rate_limiter: RateLimiter,
        comment_service: CommentService,
        moderation_service: ModerationService,
        rate_limit_settings: RateLimitSettings,
    ) -> UpdateCommentUseCase:
        """Provide update comment use case."""
        return UpdateCommentUseCase(
            identity_service=identity_service,
            rate_limiter=rate_limiter,
            comment_service=comment_service,
            moderation_service=moderation_service,
            rate_limit_settings=rate_limit_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_moderate_comments_use_case(
        self,
        identity_service: IdentityService,
        rate_limiter: RateLimiter,
        moderation_service: ModerationService,
        rate_limit_settings: RateLimitSettings,
    ) -> ModerateCommentsUseCase:
        """Provide batch moderation use case."""
        return ModerateCommentsUseCase(
            identity_service=identity_service,
            rate_limiter=rate_limiter,
            moderation_service=moderation_service,
            rate_limit_settings=rate_limit_settings,
        )
