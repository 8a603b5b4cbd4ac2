"""PostgreSQL implementation of Session repository."""

from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from invoicely.domain.model import Session
from invoicely.domain.repository import SessionRepository
from invoicely.domain.value import SessionId
from invoicely.persistence.errors import store_errors
from invoicely.persistence.mappers import row_to_session, session_to_dict
from invoicely.persistence.tables import sessions_table


class PostgresSessionRepository(SessionRepository):
    """PostgreSQL implementation of SessionRepository.

    Reads and writes share the request session. `purge` commits on a
    session of its own.
    """

    def __init__(
        self,
        session: AsyncSession,
        session_factory: async_sessionmaker[AsyncSession],
    ) -> None:
        """Initialize repository.

        Args:
            session: Request-scoped SQLAlchemy async session
            session_factory: Factory for independent transactions
        """
        self.session = session
        self.session_factory = session_factory

    async def save(self, session: Session) -> Session:
        """Insert a new session row."""
        async with store_errors("Session"):
            await self.session.execute(
                sessions_table.insert().values(**session_to_dict(session))
            )
            await self.session.flush()
        return session

    async def find_by_id(self, session_id: SessionId) -> Optional[Session]:
        """Find a session by ID."""
        stmt = select(sessions_table).where(sessions_table.c.id == session_id)
        async with store_errors("Session"):
            result = await self.session.execute(stmt)
            row = result.mappings().first()
        return row_to_session(dict(row)) if row else None

    async def delete(self, session_id: SessionId) -> bool:
        """Delete a session, reporting whether a row was removed."""
        async with store_errors("Session"):
            result = await self.session.execute(_delete_by_id(session_id))
            await self.session.flush()
        return result.rowcount > 0

    async def purge(self, session_id: SessionId) -> bool:
        """Delete a session and commit at once, independent of the request."""
        async with store_errors("Session"):
            async with self.session_factory.begin() as own:
                result = await own.execute(_delete_by_id(session_id))
        return result.rowcount > 0


def _delete_by_id(session_id: SessionId):
    return delete(sessions_table).where(sessions_table.c.id == session_id)
