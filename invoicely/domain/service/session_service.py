"""Session domain service."""

import secrets
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

import logfire

from invoicely.config import AuthSettings
from invoicely.domain.error import UnauthenticatedError
from invoicely.domain.model import Session
from invoicely.domain.repository import SessionRepository
from invoicely.domain.value import SessionId, UserId

from .base import Service


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SessionService(Service):
    """Server-side session lifecycle.

    Active from `establish` until `destroy` or expiry. Sessions are never
    extended.
    """

    def __init__(
        self,
        session_repository: SessionRepository,
        auth_settings: AuthSettings,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        """Initialize session service.

        Args:
            session_repository: Session repository
            auth_settings: Authentication settings (session lifetime)
            clock: Source of the current time
        """
        self.session_repository = session_repository
        self.ttl = timedelta(hours=auth_settings.session_max_age_hours)
        self.clock = clock

    async def establish(self, user_id: UserId) -> Session:
        """Create and persist a session for the user.

        Args:
            user_id: User the session belongs to

        Returns:
            The new session
        """
        with logfire.span("session_service.establish", user_id=str(user_id)):
            now = self.clock()
            session = Session(
                id=SessionId(secrets.token_urlsafe(32)),
                user_id=user_id,
                created_at=now,
                expires_at=now + self.ttl,
            )
            saved = await self.session_repository.save(session)
            logfire.info(
                "Session established",
                user_id=str(user_id),
                expires_at=saved.expires_at.isoformat(),
            )
            return saved

    async def resolve(self, session_id: SessionId) -> UserId:
        """Return the user bound to an active session.

        Args:
            session_id: Opaque session identifier

        Returns:
            User ID

        Raises:
            UnauthenticatedError: If the session is unknown or expired
        """
        with logfire.span("session_service.resolve"):
            session = await self.session_repository.find_by_id(session_id)
            if not session:
                logfire.info("Session not found")
                raise UnauthenticatedError("Session not found")

            if session.is_expired(self.clock()):
                logfire.info("Session expired", user_id=str(session.user_id))
                # The request fails from here on; the removal must outlive it
                await self.session_repository.purge(session_id)
                raise UnauthenticatedError("Session expired")

            return session.user_id

    async def destroy(self, session_id: SessionId) -> None:
        """Destroy a session. Destroying a missing session is not an error.

        Args:
            session_id: Opaque session identifier

        Raises:
            StoreUnavailableError: If the store cannot be reached
        """
        with logfire.span("session_service.destroy"):
            removed = await self.session_repository.delete(session_id)
            if removed:
                logfire.info("Session destroyed")
            else:
                logfire.info("Session already gone")

    async def discard(self, session_id: SessionId) -> None:
        """Remove a session that can never be valid again.

        Unlike `destroy`, the removal persists even when the current
        request goes on to fail.
        """
        with logfire.span("session_service.discard"):
            await self.session_repository.purge(session_id)
            logfire.info("Session discarded")
