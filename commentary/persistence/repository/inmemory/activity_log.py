"""In-memory activity log repository for testing."""

from commentary.domain.model.activity_log import ActivityLog
from commentary.domain.repository.activity_log import ActivityLogRepository


class InMemoryActivityLogRepository(ActivityLogRepository):
    """In-memory implementation of ActivityLogRepository for testing.

    Set ``fail_writes`` to simulate an unavailable audit store.
    """

    def __init__(self) -> None:
        self.entries: list[ActivityLog] = []
        self.fail_writes = False

    async def save(self, entry: ActivityLog) -> None:
        """Append an audit record."""
        if self.fail_writes:
            raise RuntimeError("activity log store unavailable")
        self.entries.append(entry)
