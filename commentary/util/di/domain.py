"""Domain layer DI providers."""

from dishka import Scope, provide

from commentary.config import AuthSettings, CommentSettings
from commentary.domain.repository import (
    ActivityLogRepository,
    CommentRepository,
    PostRepository,
    UserRepository,
)
from commentary.domain.service import (
    ActivityService,
    CommentService,
    IdentityService,
    JWTService,
    ModerationService,
    PostService,
    ThreadService,
)
from commentary.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_identity_service(
        self, jwt_service: JWTService, user_repository: UserRepository
    ) -> IdentityService:
        """Provide identity resolution domain service."""
        return IdentityService(jwt_service=jwt_service, user_repository=user_repository)

    @provide
    def get_activity_service(
        self, activity_log_repository: ActivityLogRepository
    ) -> ActivityService:
        """Provide audit domain service."""
        return ActivityService(activity_log_repository=activity_log_repository)

    @provide
    def get_post_service(self, post_repository: PostRepository) -> PostService:
        """Provide post domain service."""
        return PostService(post_repository=post_repository)

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        activity_service: ActivityService,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            activity_service=activity_service,
        )

    @provide
    def get_thread_service(
        self, comment_service: CommentService, comment_settings: CommentSettings
    ) -> ThreadService:
        """Provide thread assembly domain service."""
        return ThreadService(
            comment_service=comment_service,
            max_replies_per_parent=comment_settings.max_replies_per_parent,
        )

    @provide
    def get_moderation_service(
        self,
        comment_service: CommentService,
        activity_service: ActivityService,
    ) -> ModerationService:
        """Provide moderation domain service."""
        return ModerationService(
            comment_service=comment_service,
            activity_service=activity_service,
        )
