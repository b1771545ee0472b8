"""Comment moderation domain service."""

from typing import Optional

import logfire

from commentary.domain.error import ForbiddenError
from commentary.domain.model import Comment
from commentary.domain.model.common import DomainModel
from commentary.domain.validation import ModerationCommand
from commentary.domain.value import (
    ActivityAction,
    CommentId,
    ModerationAction,
    Principal,
)

from .activity_service import ActivityService
from .base import Service
from .comment_service import CommentService


class ModerationOutcome(DomainModel):
    """Result of moderating a single comment."""

    comment_id: CommentId
    success: bool
    error: Optional[str] = None


class ModerationResult(DomainModel):
    """Per-id results of a batch."""

    action: ModerationAction
    outcomes: list[ModerationOutcome]

    @property
    def succeeded(self) -> int:
        return sum(1 for o in self.outcomes if o.success)

    @property
    def failed(self) -> int:
        return sum(1 for o in self.outcomes if not o.success)


class ModerationService(Service):
    """Applies approve/reject/delete transitions in batches.

    Each id is an independent unit of work: one failing id is reported
    and the rest of the batch continues. There is no all-or-nothing
    guarantee across a batch.

    Approval transitions are PendingApproval <-> Approved; Deleted is
    reachable from either and terminal.
    """

    def __init__(
        self,
        comment_service: CommentService,
        activity_service: ActivityService,
    ) -> None:
        """Initialize moderation service.

        Args:
            comment_service: Comment domain service
            activity_service: Audit sink
        """
        self.comment_service = comment_service
        self.activity_service = activity_service

    def ensure_moderator(
        self, principal: Principal, action: str = "moderate comments"
    ) -> None:
        """Raise ForbiddenError unless the principal holds a moderator role."""
        if not principal.is_moderator:
            logfire.warn(
                "Moderation attempt without moderator role",
                user_id=str(principal.user_id),
                role=principal.role.value,
                action=action,
            )
            raise ForbiddenError(action, str(principal.user_id))

    async def moderate(
        self, principal: Principal, command: ModerationCommand
    ) -> ModerationResult:
        """Apply one moderation action to every id in the batch.

        Args:
            principal: Acting identity (must hold a moderator role)
            command: Validated batch request

        Returns:
            Per-id outcomes

        Raises:
            ForbiddenError: If the principal is not a moderator
        """
        self.ensure_moderator(principal)

        with logfire.span(
            "moderation_service.moderate",
            action=command.action.value,
            batch_size=len(command.comment_ids),
            moderator_id=str(principal.user_id),
        ):
            outcomes = []
            for comment_id in command.comment_ids:
                outcomes.append(
                    await self._apply(principal, command.action, comment_id)
                )

            result = ModerationResult(action=command.action, outcomes=outcomes)
            logfire.info(
                "Moderation batch applied",
                action=command.action.value,
                succeeded=result.succeeded,
                failed=result.failed,
            )

            await self.activity_service.record(
                ActivityAction.MODERATE_COMMENTS,
                user_id=principal.user_id,
                details={
                    "action": command.action.value,
                    "reason": command.reason,
                    "succeeded": [
                        str(o.comment_id) for o in result.outcomes if o.success
                    ],
                    "failed": [
                        str(o.comment_id) for o in result.outcomes if not o.success
                    ],
                },
            )
            return result

    async def _apply(
        self, principal: Principal, action: ModerationAction, comment_id: CommentId
    ) -> ModerationOutcome:
        try:
            comment: Comment | None
            if action == ModerationAction.APPROVE:
                comment = await self.comment_service.set_approval(
                    comment_id, True, principal.user_id
                )
            elif action == ModerationAction.REJECT:
                comment = await self.comment_service.set_approval(
                    comment_id, False, principal.user_id
                )
            else:
                comment = await self.comment_service.soft_delete(
                    comment_id, principal.user_id
                )
        except Exception as e:
            logfire.error(
                "Moderation failed for comment",
                comment_id=str(comment_id),
                action=action.value,
                error=str(e),
                error_type=type(e).__name__,
            )
            return ModerationOutcome(
                comment_id=comment_id, success=False, error="internal_error"
            )

        if comment is None:
            return ModerationOutcome(
                comment_id=comment_id, success=False, error="not_found"
            )
        return ModerationOutcome(comment_id=comment_id, success=True)
