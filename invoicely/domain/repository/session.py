"""Session repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from invoicely.domain.model.session import Session
from invoicely.domain.value import SessionId


class SessionRepository(ABC):
    """Repository for server-side sessions."""

    @abstractmethod
    async def save(self, session: Session) -> Session:
        """Persist a new session.

        Args:
            session: The session to store

        Returns:
            The stored session
        """
        pass

    @abstractmethod
    async def find_by_id(self, session_id: SessionId) -> Optional[Session]:
        """Find a session by ID, expired or not.

        Args:
            session_id: Opaque session identifier

        Returns:
            The session if found, None otherwise
        """
        pass

    @abstractmethod
    async def delete(self, session_id: SessionId) -> bool:
        """Delete a session.

        Args:
            session_id: Opaque session identifier

        Returns:
            True if a session was removed, False if none existed
        """
        pass

    @abstractmethod
    async def purge(self, session_id: SessionId) -> bool:
        """Delete a session outside the caller's unit of work.

        The removal is durable even when the surrounding request later
        fails and rolls back. Used to discard sessions that can never be
        valid again.

        Args:
            session_id: Opaque session identifier

        Returns:
            True if a session was removed, False if none existed
        """
        pass
