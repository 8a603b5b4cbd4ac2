"""Async engine, session factory and request transactions for PostgreSQL."""

from collections.abc import AsyncIterator

import logfire
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from invoicely.config import Settings
from invoicely.persistence.errors import store_errors


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine.

    `pool_timeout` bounds how long a request waits for a connection, so an
    exhausted or unreachable database surfaces as an error instead of a hang.
    """
    db = settings.database
    return create_async_engine(
        db.url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=db.pool_size,
        max_overflow=db.max_overflow,
        pool_timeout=db.pool_timeout_seconds,
        connect_args={"timeout": db.connect_timeout_seconds},
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory for one session per request.

    Objects stay usable after commit because repositories map rows to
    domain models before returning.
    """
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)


async def request_transaction(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    """One session and transaction per request.

    The container hands the request's exception, or None, back through
    `yield` when the request scope closes. A failed request is rolled back;
    a successful one is committed, and a commit that fails because the
    database went away surfaces as StoreUnavailableError.
    """
    async with session_factory() as session:
        exc = yield session
        if exc is not None:
            logfire.warn("Rolling back request transaction", error=type(exc).__name__)
            await session.rollback()
            return
        async with store_errors("Transaction"):
            await session.commit()
