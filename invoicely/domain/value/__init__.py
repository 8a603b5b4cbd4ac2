"""Domain value objects for Invoicely."""

from invoicely.domain.value.identifiers import SessionId, UserId
from invoicely.domain.value.types import (
    AuthMode,
    CredentialKind,
    DisplayName,
    Email,
    ExternalProfile,
    Password,
)

__all__ = [
    # Identifiers
    "UserId",
    "SessionId",
    # Types
    "AuthMode",
    "CredentialKind",
    "DisplayName",
    "Email",
    "ExternalProfile",
    "Password",
]
