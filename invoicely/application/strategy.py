"""Credential issuance strategies.

After a successful Google sign-in the browser is handed either a server-side
session (set as a cookie) or a bearer token (passed in the redirect URL).
Which one is chosen once from `auth.mode` when the container is built.
"""

from abc import ABC, abstractmethod
from urllib.parse import urlencode

import logfire
from pydantic import BaseModel, ConfigDict

from invoicely.domain.model import Session, User
from invoicely.domain.service import SessionService, TokenService
from invoicely.domain.value import AuthMode


class IssuedCredential(BaseModel):
    """Credential handed to the browser after external sign-in."""

    model_config = ConfigDict(frozen=True)

    token: str | None = None
    session: Session | None = None


class AuthStrategy(ABC):
    """How a signed-in user is given a credential."""

    mode: AuthMode

    @abstractmethod
    async def issue(self, user: User) -> IssuedCredential:
        """Issue a credential for the user."""
        pass

    @abstractmethod
    def redirect_url(self, frontend_url: str, credential: IssuedCredential) -> str:
        """Frontend URL the browser lands on after sign-in."""
        pass


class TokenAuth(AuthStrategy):
    """Hand out a bearer token in the callback redirect."""

    mode = AuthMode.TOKEN

    def __init__(self, token_service: TokenService) -> None:
        self.token_service = token_service

    async def issue(self, user: User) -> IssuedCredential:
        return IssuedCredential(token=self.token_service.issue(user.id, user.email))

    def redirect_url(self, frontend_url: str, credential: IssuedCredential) -> str:
        return f"{frontend_url}/auth/callback?{urlencode({'token': credential.token})}"


class SessionAuth(AuthStrategy):
    """Establish a server-side session, carried by cookie."""

    mode = AuthMode.SESSION

    def __init__(self, session_service: SessionService) -> None:
        self.session_service = session_service

    async def issue(self, user: User) -> IssuedCredential:
        session = await self.session_service.establish(user.id)
        return IssuedCredential(session=session)

    def redirect_url(self, frontend_url: str, credential: IssuedCredential) -> str:
        return f"{frontend_url}/auth/callback"


def select_strategy(
    mode: AuthMode, token_service: TokenService, session_service: SessionService
) -> AuthStrategy:
    """Build the strategy for the configured mode."""
    if mode == AuthMode.TOKEN:
        strategy: AuthStrategy = TokenAuth(token_service)
    else:
        strategy = SessionAuth(session_service)
    logfire.info("Auth strategy selected", mode=strategy.mode.value)
    return strategy
