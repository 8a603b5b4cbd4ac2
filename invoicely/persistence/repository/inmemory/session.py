"""In-memory session repository for testing."""

from typing import Optional

from invoicely.domain.error import StoreUnavailableError
from invoicely.domain.model.session import Session
from invoicely.domain.repository.session import SessionRepository
from invoicely.domain.value import SessionId


class InMemorySessionRepository(SessionRepository):
    """In-memory implementation of SessionRepository for testing."""

    def __init__(self) -> None:
        self._sessions: dict[SessionId, Session] = {}
        self.unavailable = False
        self.purged: list[SessionId] = []

    async def save(self, session: Session) -> Session:
        """Store a session."""
        self._check_available()
        self._sessions[session.id] = session
        return session

    async def find_by_id(self, session_id: SessionId) -> Optional[Session]:
        """Find a session by ID."""
        self._check_available()
        return self._sessions.get(session_id)

    async def delete(self, session_id: SessionId) -> bool:
        """Remove a session if present."""
        self._check_available()
        return self._sessions.pop(session_id, None) is not None

    async def purge(self, session_id: SessionId) -> bool:
        """Remove a session; nothing here is transactional."""
        self._check_available()
        self.purged.append(session_id)
        return self._sessions.pop(session_id, None) is not None

    def _check_available(self) -> None:
        if self.unavailable:
            raise StoreUnavailableError("Session store unavailable")
