"""Application layer DI providers."""

from dishka import Scope, provide

from invoicely.application.strategy import AuthStrategy, select_strategy
from invoicely.application.usecase.auth import (
    AuthenticateUseCase,
    CompleteExternalLoginUseCase,
    GetCurrentUserUseCase,
    InitiateExternalLoginUseCase,
    LoginUseCase,
    LogoutUseCase,
    SignupUseCase,
)
from invoicely.config import Settings
from invoicely.domain.service import (
    AuthService,
    IdentityService,
    PasswordService,
    SessionService,
    TokenService,
    UserService,
)
from invoicely.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    @provide
    def get_auth_strategy(
        self,
        settings: Settings,
        token_service: TokenService,
        session_service: SessionService,
    ) -> AuthStrategy:
        """Provide the credential issuance strategy for the configured mode."""
        return select_strategy(settings.auth.mode, token_service, session_service)

    @provide
    def get_signup_use_case(
        self,
        user_service: UserService,
        password_service: PasswordService,
        token_service: TokenService,
    ) -> SignupUseCase:
        """Provide signup use case."""
        return SignupUseCase(
            user_service=user_service,
            password_service=password_service,
            token_service=token_service,
        )

    @provide
    def get_login_use_case(
        self,
        user_service: UserService,
        password_service: PasswordService,
        token_service: TokenService,
    ) -> LoginUseCase:
        """Provide login use case."""
        return LoginUseCase(
            user_service=user_service,
            password_service=password_service,
            token_service=token_service,
        )

    @provide
    def get_initiate_external_login_use_case(
        self, auth_service: AuthService
    ) -> InitiateExternalLoginUseCase:
        """Provide initiate Google sign-in use case."""
        return InitiateExternalLoginUseCase(auth_service=auth_service)

    @provide
    def get_complete_external_login_use_case(
        self,
        auth_service: AuthService,
        identity_service: IdentityService,
        strategy: AuthStrategy,
        settings: Settings,
    ) -> CompleteExternalLoginUseCase:
        """Provide complete Google sign-in use case."""
        return CompleteExternalLoginUseCase(
            auth_service=auth_service,
            identity_service=identity_service,
            strategy=strategy,
            settings=settings,
        )

    @provide
    def get_authenticate_use_case(
        self,
        token_service: TokenService,
        session_service: SessionService,
        user_service: UserService,
    ) -> AuthenticateUseCase:
        """Provide request authentication use case."""
        return AuthenticateUseCase(
            token_service=token_service,
            session_service=session_service,
            user_service=user_service,
        )

    @provide
    def get_current_user_use_case(self, user_service: UserService) -> GetCurrentUserUseCase:
        """Provide get current user use case."""
        return GetCurrentUserUseCase(user_service=user_service)

    @provide
    def get_logout_use_case(
        self, session_service: SessionService, token_service: TokenService
    ) -> LogoutUseCase:
        """Provide logout use case."""
        return LogoutUseCase(session_service=session_service, token_service=token_service)
