"""Bearer token domain service."""

from datetime import datetime

import logfire

from invoicely.config import AuthSettings
from invoicely.domain.value import Email, UserId
from invoicely.util.jwt import JWTError, TokenClaims, create_token, verify_token

from .base import Service


class TokenService(Service):
    """Issues and verifies self-contained bearer tokens.

    Verification trusts the claims as signed and never consults the user
    store, so a token stays valid until it expires.
    """

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize token service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def issue(self, user_id: UserId, email: Email, now: datetime | None = None) -> str:
        """Issue a token for the user.

        Args:
            user_id: User ID
            email: User email
            now: Issue time (defaults to the current UTC time)

        Returns:
            Signed JWT
        """
        with logfire.span("token_service.issue", user_id=str(user_id)):
            token = create_token(str(user_id), str(email), self.auth_settings, now=now)
            logfire.info("Token issued", user_id=str(user_id))
            return token

    def verify(self, token: str) -> TokenClaims:
        """Verify a token and return its claims.

        Args:
            token: JWT string

        Returns:
            Token claims

        Raises:
            ExpiredTokenError: If the token has expired
            MalformedTokenError: If the token is invalid
        """
        with logfire.span("token_service.verify"):
            try:
                claims = verify_token(token, self.auth_settings)
            except JWTError as e:
                logfire.info("Token rejected", reason=str(e))
                raise
            logfire.info("Token verified", user_id=str(claims.sub))
            return claims

    def user_id_from_token(self, token: str | None) -> UserId | None:
        """Extract the user ID from a token without raising.

        Args:
            token: JWT string (optional)

        Returns:
            User ID if the token is valid, None if missing or invalid
        """
        if not token:
            return None

        try:
            return UserId(self.verify(token).sub)
        except JWTError:
            return None
