"""Request and response models shared by the authentication use cases."""

from datetime import datetime

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from invoicely.domain.error import FieldError
from invoicely.domain.model import User


class UserInfo(BaseModel):
    """Public view of a user. Never includes the password hash."""

    id: str
    display_name: str
    email: str
    avatar_url: str | None
    has_password: bool
    is_linked: bool
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserInfo":
        return cls(
            id=str(user.id),
            display_name=user.display_name,
            email=str(user.email),
            avatar_url=user.avatar_url,
            has_password=user.has_password,
            is_linked=user.is_linked,
            created_at=user.created_at,
        )


class AuthResponse(BaseModel):
    """Response for password signup and login."""

    message: str
    user: UserInfo
    token: str


def field_error(field: str, error: ValueError) -> FieldError:
    """Turn a value object validation failure into a FieldError."""
    if isinstance(error, PydanticValidationError) and error.errors():
        message = error.errors()[0]["msg"].removeprefix("Value error, ")
    else:
        message = str(error)
    return FieldError(field=field, message=message)
