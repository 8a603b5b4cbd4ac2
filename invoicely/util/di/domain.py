"""Domain layer DI providers."""

from dishka import Scope, provide

from invoicely.adapter.google import GoogleOAuthClient
from invoicely.config import AuthSettings
from invoicely.domain.repository import SessionRepository, UserRepository
from invoicely.domain.service import (
    AuthService,
    IdentityService,
    PasswordService,
    SessionService,
    TokenService,
    UserService,
)
from invoicely.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_auth_service(self, oauth_client: GoogleOAuthClient) -> AuthService:
        """Provide Google sign-in domain service."""
        return AuthService(oauth_client=oauth_client)

    @provide
    def get_token_service(self, auth_settings: AuthSettings) -> TokenService:
        """Provide bearer token domain service."""
        return TokenService(auth_settings=auth_settings)

    @provide
    def get_password_service(self, auth_settings: AuthSettings) -> PasswordService:
        """Provide password hashing domain service."""
        return PasswordService(auth_settings=auth_settings)

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_identity_service(self, user_repository: UserRepository) -> IdentityService:
        """Provide identity resolution domain service."""
        return IdentityService(user_repository=user_repository)

    @provide
    def get_session_service(
        self, session_repository: SessionRepository, auth_settings: AuthSettings
    ) -> SessionService:
        """Provide session domain service."""
        return SessionService(
            session_repository=session_repository, auth_settings=auth_settings
        )
