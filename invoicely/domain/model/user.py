"""User aggregate root.

A user signs in with a local password, with Google, or with both once the
Google identity has been linked to the password account.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field, model_validator

from invoicely.domain.model.common import DomainModel
from invoicely.domain.value import Email, UserId


class User(DomainModel):
    """User account."""

    id: UserId
    display_name: str = Field(min_length=1, max_length=100)
    email: Email
    password_hash: Optional[str] = None  # Only for local signups
    external_id: Optional[str] = None  # Google subject ID once linked
    avatar_url: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @model_validator(mode="after")
    def require_credential_path(self) -> "User":
        """A user must be able to sign in somehow."""
        if not self.password_hash and not self.external_id:
            raise ValueError("User needs a password hash or an external ID")
        return self

    @property
    def has_password(self) -> bool:
        """Whether the user can log in with a password."""
        return self.password_hash is not None

    @property
    def is_linked(self) -> bool:
        """Whether an external identity is attached."""
        return self.external_id is not None
