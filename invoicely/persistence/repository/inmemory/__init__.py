"""In-memory repository implementations for testing."""

from .session import InMemorySessionRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemorySessionRepository",
    "InMemoryUserRepository",
]
