"""JWT token utilities."""

from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt
from pydantic import BaseModel

from invoicely.config import AuthSettings


class TokenClaims(BaseModel):
    """Claims carried by a bearer token."""

    sub: UUID  # User ID
    email: str
    iat: datetime
    exp: datetime


class JWTError(Exception):
    """JWT-related error."""

    pass


class ExpiredTokenError(JWTError):
    """Token is past its validity window."""

    pass


class MalformedTokenError(JWTError):
    """Token cannot be parsed or verified against the signing secret."""

    pass


def create_token(
    user_id: str,
    email: str,
    settings: AuthSettings,
    now: datetime | None = None,
) -> str:
    """Create a JWT token for the user.

    Args:
        user_id: User ID
        email: User email
        settings: Authentication settings
        now: Issue time (defaults to the current UTC time)

    Returns:
        Encoded JWT token
    """
    issued_at = now or datetime.now(timezone.utc)
    expiry = issued_at + timedelta(days=settings.token_validity_days)

    payload = {
        "sub": user_id,
        "email": email,
        "iat": issued_at,
        "exp": expiry,
    }

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenClaims:
    """Verify and decode a JWT token.

    Args:
        token: JWT token to verify
        settings: Authentication settings

    Returns:
        Token claims if valid

    Raises:
        ExpiredTokenError: If the token has expired
        MalformedTokenError: If the token is invalid
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "email", "iat", "exp"]},
        )
    except jwt.ExpiredSignatureError:
        raise ExpiredTokenError("Token has expired")
    except jwt.InvalidTokenError:
        raise MalformedTokenError("Invalid token")

    try:
        return TokenClaims(**payload)
    except ValueError:
        raise MalformedTokenError("Invalid token claims")
