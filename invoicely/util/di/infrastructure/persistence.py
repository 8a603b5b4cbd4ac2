"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from invoicely.config import Settings
from invoicely.domain.repository import SessionRepository, UserRepository
from invoicely.persistence.database import (
    create_engine,
    create_session_factory,
    request_transaction,
)
from invoicely.persistence.repository import (
    PostgresSessionRepository,
    PostgresUserRepository,
)
from invoicely.util.di.base import ProviderBase
from invoicely.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """PostgreSQL-backed repositories.

    One engine per container; one session, and so one transaction, per
    request. The transaction commits when the request succeeds and rolls
    back when it raises.
    """

    __is_mock__ = False

    def __init__(self) -> None:
        super().__init__()
        self.provide(request_transaction, scope=Scope.REQUEST)

    @provide(scope=Scope.APP)
    async def engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def session_factory(self, engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    def user_repository(self, session: AsyncSession) -> UserRepository:
        return PostgresUserRepository(session)

    @provide(scope=Scope.REQUEST)
    def session_repository(
        self,
        session: AsyncSession,
        session_factory: async_sessionmaker[AsyncSession],
    ) -> SessionRepository:
        return PostgresSessionRepository(session, session_factory)
