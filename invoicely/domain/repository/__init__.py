"""Repository interfaces for the Invoicely domain.

Interfaces live in the domain layer, implementations in persistence.
"""

from invoicely.domain.repository.session import SessionRepository
from invoicely.domain.repository.user import UserRepository

__all__ = [
    "SessionRepository",
    "UserRepository",
]
