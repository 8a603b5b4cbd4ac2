"""Domain services."""

from .auth_service import AuthService, OAuthClient
from .base import Service
from .identity_service import IdentityService
from .password_service import PasswordService
from .session_service import SessionService
from .token_service import TokenService
from .user_service import UserService

__all__ = [
    "AuthService",
    "IdentityService",
    "OAuthClient",
    "PasswordService",
    "Service",
    "SessionService",
    "TokenService",
    "UserService",
]
