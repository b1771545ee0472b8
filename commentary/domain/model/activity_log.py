"""Activity log entry (audit record)."""

from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from commentary.domain.model.common import DomainModel
from commentary.domain.value import ActivityAction, ActivityLogId, ResourceType, UserId


class ActivityLog(DomainModel):
    """Immutable audit record of a write to the comment engine."""

    id: ActivityLogId
    user_id: Optional[UserId] = None
    action: ActivityAction
    resource: ResourceType
    resource_id: Optional[str] = None
    details: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=datetime.now)
