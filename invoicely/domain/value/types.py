"""Domain value objects for Invoicely.

Value objects are immutable and defined by their values, not identity.
They encapsulate the input rules for accounts.
"""

import re
from enum import Enum

from pydantic import field_validator

from invoicely.domain.value.common import RootValueObject, ValueObject

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class AuthMode(str, Enum):
    """What the external-provider callback issues to the browser."""

    SESSION = "session"
    TOKEN = "token"


class CredentialKind(str, Enum):
    """How a request proved its identity."""

    BEARER = "bearer"
    SESSION = "session"


class Email(RootValueObject[str]):
    """Email address, normalised to lower case.

    Normalising on construction makes every comparison case-insensitive.
    """

    @field_validator("root")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Validate email format and length."""
        v = v.strip().lower()
        if len(v) > 255:
            raise ValueError("Email must be at most 255 characters")
        if not EMAIL_PATTERN.match(v):
            raise ValueError("Invalid email address")
        return v

    @property
    def local_part(self) -> str:
        """Part before the @."""
        return self.root.split("@", 1)[0]


class DisplayName(RootValueObject[str]):
    """Display name chosen at signup, 3-100 characters."""

    @field_validator("root")
    @classmethod
    def validate_display_name(cls, v: str) -> str:
        """Validate display name length."""
        v = v.strip()
        if len(v) < 3 or len(v) > 100:
            raise ValueError("Display name must be 3-100 characters")
        return v


class Password(RootValueObject[str]):
    """Plain-text password on its way to the hasher."""

    @field_validator("root")
    @classmethod
    def validate_password(cls, v: str) -> str:
        """Validate password length."""
        if len(v) < 6:
            raise ValueError("Password must be at least 6 characters")
        return v

    def __str__(self) -> str:
        return "********"

    def __repr__(self) -> str:
        return "Password('********')"


class ExternalProfile(ValueObject):
    """Profile returned by the external identity provider."""

    external_id: str  # Provider's stable subject identifier
    email: str | None = None
    display_name: str | None = None
    avatar_url: str | None = None
