"""Strongly typed identifiers for Invoicely domain entities."""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)

# Opaque, URL-safe random string carried in the session cookie
SessionId = NewType("SessionId", str)
