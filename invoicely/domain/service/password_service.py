"""Password hashing domain service."""

import bcrypt
import logfire

from invoicely.config import AuthSettings
from invoicely.domain.value import Password

from .base import Service

# bcrypt only looks at the first 72 bytes of the input
BCRYPT_MAX_BYTES = 72


class PasswordService(Service):
    """Salted one-way password hashing with bcrypt."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize password service.

        Args:
            auth_settings: Authentication settings (cost factor)
        """
        self.rounds = auth_settings.bcrypt_rounds

    def hash(self, password: Password) -> str:
        """Hash a password.

        Args:
            password: Plain-text password

        Returns:
            bcrypt hash string
        """
        with logfire.span("password_service.hash", rounds=self.rounds):
            hashed = bcrypt.hashpw(_encode(password.root), bcrypt.gensalt(rounds=self.rounds))
            return hashed.decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Check a password against a stored hash.

        Args:
            password: Plain-text password
            password_hash: bcrypt hash

        Returns:
            True if the password matches
        """
        with logfire.span("password_service.verify"):
            try:
                return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
            except ValueError:
                # Stored hash is not a bcrypt hash
                logfire.error("Stored password hash is invalid")
                return False


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]
