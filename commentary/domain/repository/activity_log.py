"""Activity log repository interface."""

from abc import ABC, abstractmethod

from commentary.domain.model.activity_log import ActivityLog


class ActivityLogRepository(ABC):
    """Append-only store for audit records."""

    @abstractmethod
    async def save(self, entry: ActivityLog) -> None:
        """Append an audit record.

        Args:
            entry: The record to append
        """
        pass
