"""Batch moderation use case."""

from typing import Any

from pydantic import BaseModel

from commentary.config import RateLimitSettings
from commentary.domain.error import UnauthorizedError
from commentary.domain.service import IdentityService, ModerationService, RateLimiter
from commentary.domain.validation import validate_moderation
from commentary.domain.value import RateLimitBucket

from .common import rate_limit_identifier


class ModerateCommentsRequest(BaseModel):
    """Batch moderation request."""

    comment_ids: Any = None
    action: Any = None
    reason: Any = None
    auth_token: str | None = None
    client_ip: str | None = None


class ModerationResultItem(BaseModel):
    """Outcome for one comment ID."""

    comment_id: str
    success: bool
    error: str | None = None


class ModerateCommentsResponse(BaseModel):
    """Batch moderation response."""

    action: str
    results: list[ModerationResultItem]
    succeeded: int
    failed: int


class ModerateCommentsUseCase:
    """Use case for approving, rejecting or deleting comments in bulk."""

    def __init__(
        self,
        identity_service: IdentityService,
        rate_limiter: RateLimiter,
        moderation_service: ModerationService,
        rate_limit_settings: RateLimitSettings,
    ) -> None:
        """Initialize moderate comments use case.

        Args:
            identity_service: Resolves the caller's session token
            rate_limiter: Quota check
            moderation_service: Moderation domain service
            rate_limit_settings: Per-bucket quotas
        """
        self.identity_service = identity_service
        self.rate_limiter = rate_limiter
        self.moderation_service = moderation_service
        self.rate_limit_settings = rate_limit_settings

    async def execute(
        self, request: ModerateCommentsRequest
    ) -> ModerateCommentsResponse:
        """Execute batch moderation flow.

        Failures of individual IDs are reported in ``results``; they do
        not fail the request.

        Raises:
            UnauthorizedError: If the caller is not authenticated
            RateLimitedError: If the moderation quota is used up
            ForbiddenError: If the caller is not a moderator
            ValidationError: If the batch is malformed
        """
        principal = await self.identity_service.resolve(request.auth_token)
        if principal is None:
            raise UnauthorizedError()

        await self.rate_limiter.check(
            rate_limit_identifier(principal, request.client_ip),
            self.rate_limit_settings.comments_moderate,
            RateLimitBucket.COMMENTS_MODERATE,
        )
        self.moderation_service.ensure_moderator(principal)

        command = validate_moderation(
            request.comment_ids, request.action, request.reason
        ).unwrap()
        result = await self.moderation_service.moderate(principal, command)

        return ModerateCommentsResponse(
            action=result.action.value,
            results=[
                ModerationResultItem(
                    comment_id=str(o.comment_id), success=o.success, error=o.error
                )
                for o in result.outcomes
            ],
            succeeded=result.succeeded,
            failed=result.failed,
        )
