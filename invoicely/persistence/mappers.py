"""Mappers for converting between database rows and domain models.

Domain models are immutable pydantic models, so rows are mapped by hand.
"""

from typing import Any, Dict
from uuid import UUID

from invoicely.domain.model import Session, User
from invoicely.domain.value import Email, SessionId, UserId


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        display_name=row["display_name"],
        email=Email(row["email"]),
        password_hash=row.get("password_hash"),
        external_id=row.get("external_id"),
        avatar_url=row.get("avatar_url"),
        created_at=row["created_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict.

    Args:
        user: User domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return user.model_dump()


def row_to_session(row: Dict[str, Any]) -> Session:
    """Convert database row to Session domain model.

    Args:
        row: Database row as dict

    Returns:
        Session domain model
    """
    return Session(
        id=SessionId(row["id"]),
        user_id=UserId(_uuid(row["user_id"])),
        created_at=row["created_at"],
        expires_at=row["expires_at"],
    )


def session_to_dict(session: Session) -> Dict[str, Any]:
    """Convert Session domain model to database dict.

    Args:
        session: Session domain model

    Returns:
        Dict suitable for database insertion
    """
    return session.model_dump()
