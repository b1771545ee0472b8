"""PostgreSQL implementation of ActivityLog repository."""

from sqlalchemy.ext.asyncio import AsyncSession

from commentary.domain.model import ActivityLog
from commentary.domain.repository import ActivityLogRepository
from commentary.persistence.mappers import activity_log_to_dict
from commentary.persistence.tables import activity_logs_table


class PostgresActivityLogRepository(ActivityLogRepository):
    """PostgreSQL implementation of ActivityLogRepository.

    Inserts run in a SAVEPOINT: a failed audit write rolls back only
    itself, never the operation being audited.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def save(self, entry: ActivityLog) -> None:
        """Append an audit record."""
        stmt = activity_logs_table.insert().values(**activity_log_to_dict(entry))
        async with self.session.begin_nested():
            await self.session.execute(stmt)
