"""Google sign-in use cases."""

import secrets

import logfire
from pydantic import BaseModel

from invoicely.adapter.error import ProviderError, ProviderProfileError
from invoicely.application.strategy import AuthStrategy
from invoicely.config import Settings
from invoicely.domain.error import (
    DomainError,
    IdentityResolutionError,
    ProviderDisabledError,
)
from invoicely.domain.model import Session
from invoicely.domain.service import AuthService, IdentityService

from ..base import BaseUseCase

# Redirect error codes understood by the frontend
AUTH_FAILED = "auth_failed"
NO_USER = "no_user"
LOGIN_FAILED = "login_failed"


class InitiateExternalLoginRequest(BaseModel):
    """Start Google sign-in. A fresh state is generated when none is given."""

    state: str | None = None


class InitiateExternalLoginResponse(BaseModel):
    """Where to send the browser, and the state to remember for the callback."""

    authorization_url: str
    state: str


class InitiateExternalLoginUseCase(BaseUseCase):
    """Use case for starting Google sign-in."""

    def __init__(self, auth_service: AuthService) -> None:
        """Initialize initiate external login use case.

        Args:
            auth_service: External sign-in domain service
        """
        self.auth_service = auth_service

    async def execute(
        self, request: InitiateExternalLoginRequest
    ) -> InitiateExternalLoginResponse:
        """Build the Google authorization URL.

        Raises:
            ProviderDisabledError: If Google sign-in is not configured
        """
        state = request.state or secrets.token_urlsafe(32)
        url = await self.auth_service.initiate_login(state)
        return InitiateExternalLoginResponse(authorization_url=url, state=state)


class CompleteExternalLoginRequest(BaseModel):
    """Parameters of the Google callback plus the state remembered at start."""

    code: str | None = None
    state: str | None = None
    expected_state: str | None = None
    error: str | None = None  # Set by Google when the user declines


class ExternalLoginResult(BaseModel):
    """Outcome of the Google callback.

    Always a redirect. `session` is set when a session cookie must be
    attached to the redirect. `error` carries the code put in the URL.
    """

    redirect_url: str
    session: Session | None = None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


class CompleteExternalLoginUseCase(BaseUseCase):
    """Use case for finishing Google sign-in.

    Never raises for expected failures: every outcome becomes a redirect
    to the frontend, with only a short error code in the URL.
    """

    def __init__(
        self,
        auth_service: AuthService,
        identity_service: IdentityService,
        strategy: AuthStrategy,
        settings: Settings,
    ) -> None:
        """Initialize complete external login use case.

        Args:
            auth_service: External sign-in domain service
            identity_service: Identity resolution domain service
            strategy: Credential issuance strategy
            settings: Application settings
        """
        self.auth_service = auth_service
        self.identity_service = identity_service
        self.strategy = strategy
        self.frontend_url = settings.frontend_url.rstrip("/")

    async def execute(self, request: CompleteExternalLoginRequest) -> ExternalLoginResult:
        """Execute the callback flow.

        Steps:
        1. Check the callback carries a code and the expected state
        2. Exchange the code for the Google profile
        3. Resolve the profile to a local user
        4. Issue a session or token per the configured strategy
        """
        with logfire.span("complete_external_login", mode=self.strategy.mode.value):
            if request.error:
                logfire.info("Google sign-in declined", error=request.error)
                return self._failure(AUTH_FAILED)

            if not request.code or not request.state:
                logfire.warn("Google callback missing code or state")
                return self._failure(AUTH_FAILED)

            if not request.expected_state or not secrets.compare_digest(
                request.state.encode(), request.expected_state.encode()
            ):
                logfire.warn("Google callback state mismatch")
                return self._failure(AUTH_FAILED)

            try:
                profile = await self.auth_service.complete_login(request.code, request.state)
            except ProviderProfileError as e:
                logfire.warn("Google returned no usable profile", error=str(e))
                return self._failure(NO_USER)
            except (ProviderError, ProviderDisabledError) as e:
                logfire.error("Google sign-in failed", error=str(e))
                return self._failure(AUTH_FAILED)

            try:
                user = await self.identity_service.resolve(profile)
            except IdentityResolutionError as e:
                logfire.error(
                    "Identity resolution failed", error=str(e), transient=e.transient
                )
                return self._failure(AUTH_FAILED)

            try:
                credential = await self.strategy.issue(user)
            except DomainError as e:
                logfire.error(
                    "Credential issuance failed", user_id=str(user.id), error=str(e)
                )
                return self._failure(LOGIN_FAILED)

            logfire.info("Google sign-in completed", user_id=str(user.id))
            return ExternalLoginResult(
                redirect_url=self.strategy.redirect_url(self.frontend_url, credential),
                session=credential.session,
            )

    def _failure(self, code: str) -> ExternalLoginResult:
        return ExternalLoginResult(
            redirect_url=f"{self.frontend_url}/?error={code}", error=code
        )
