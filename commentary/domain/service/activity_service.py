"""Activity (audit) logging domain service."""

from datetime import datetime
from typing import Any, Optional
from uuid import uuid4

import logfire

from commentary.domain.model import ActivityLog
from commentary.domain.repository import ActivityLogRepository
from commentary.domain.value import (
    ActivityAction,
    ActivityLogId,
    ResourceType,
    UserId,
)

from .base import Service


class ActivityService(Service):
    """Writes best-effort audit records.

    Delivery is at-most-once: a failed write is logged and dropped, and
    never fails the operation being audited.
    """

    def __init__(self, activity_log_repository: ActivityLogRepository) -> None:
        """Initialize activity service.

        Args:
            activity_log_repository: Audit record store
        """
        self.activity_log_repository = activity_log_repository

    async def record(
        self,
        action: ActivityAction,
        user_id: Optional[UserId] = None,
        resource_id: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        resource: ResourceType = ResourceType.COMMENT,
    ) -> bool:
        """Append an audit record.

        Args:
            action: What happened
            user_id: Acting user, if known
            resource_id: Affected resource ID
            details: Free-form detail map
            resource: Affected resource kind

        Returns:
            True if the record was written, False if it was dropped
        """
        entry = ActivityLog(
            id=ActivityLogId(uuid4()),
            user_id=user_id,
            action=action,
            resource=resource,
            resource_id=resource_id,
            details=details or {},
            created_at=datetime.now(),
        )
        try:
            await self.activity_log_repository.save(entry)
            return True
        except Exception as e:
            logfire.warn(
                "Failed to write activity log",
                action=action.value,
                resource_id=resource_id,
                error=str(e),
                error_type=type(e).__name__,
            )
            return False
