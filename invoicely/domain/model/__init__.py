"""Domain model entities for Invoicely."""

from invoicely.domain.model.session import Session
from invoicely.domain.model.user import User

__all__ = [
    "Session",
    "User",
]
