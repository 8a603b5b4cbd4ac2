"""Authentication use cases."""

from .authenticate import AuthContext, AuthenticateUseCase, Credentials
from .external_login import (
    CompleteExternalLoginUseCase,
    ExternalLoginResult,
    InitiateExternalLoginUseCase,
)
from .get_current_user import GetCurrentUserUseCase
from .login import LoginUseCase
from .logout import LogoutUseCase
from .signup import SignupUseCase

__all__ = [
    "AuthContext",
    "AuthenticateUseCase",
    "CompleteExternalLoginUseCase",
    "Credentials",
    "ExternalLoginResult",
    "GetCurrentUserUseCase",
    "InitiateExternalLoginUseCase",
    "LoginUseCase",
    "LogoutUseCase",
    "SignupUseCase",
]
