"""PostgreSQL repository implementations."""

from invoicely.persistence.repository.session import PostgresSessionRepository
from invoicely.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresSessionRepository",
    "PostgresUserRepository",
]
