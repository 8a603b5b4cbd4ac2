"""Request authentication use case."""

import logfire
from pydantic import BaseModel, ConfigDict

from invoicely.domain.error import NotFoundError, UnauthenticatedError
from invoicely.domain.model import User
from invoicely.domain.service import SessionService, TokenService, UserService
from invoicely.domain.value import CredentialKind, SessionId, UserId
from invoicely.util.jwt import ExpiredTokenError, JWTError

from ..base import BaseUseCase


class Credentials(BaseModel):
    """Credentials presented by a request.

    `session_id` is the already signature-checked value of the session
    cookie.
    """

    bearer_token: str | None = None
    session_id: str | None = None

    @property
    def present(self) -> bool:
        return bool(self.bearer_token or self.session_id)


class AuthContext(BaseModel):
    """Authenticated identity of a request.

    `user` is loaded for session credentials. Bearer tokens are trusted as
    signed, so only the claims are available.
    """

    model_config = ConfigDict(frozen=True)

    user_id: UserId
    email: str
    method: CredentialKind
    session_id: SessionId | None = None
    user: User | None = None


class AuthenticateUseCase(BaseUseCase):
    """Use case for turning request credentials into an AuthContext."""

    def __init__(
        self,
        token_service: TokenService,
        session_service: SessionService,
        user_service: UserService,
    ) -> None:
        """Initialize authenticate use case.

        Args:
            token_service: Bearer token domain service
            session_service: Session domain service
            user_service: User domain service
        """
        self.token_service = token_service
        self.session_service = session_service
        self.user_service = user_service

    async def execute(self, request: Credentials) -> AuthContext:
        """Authenticate a request.

        A bearer token takes precedence. An invalid bearer token is rejected
        even when a valid session cookie is also present.

        Args:
            request: Presented credentials

        Returns:
            Authenticated context

        Raises:
            UnauthenticatedError: If no valid credential was presented
        """
        if not request.present:
            raise UnauthenticatedError()
        if request.bearer_token:
            return self._from_token(request.bearer_token)
        return await self._from_session(SessionId(request.session_id))

    def _from_token(self, token: str) -> AuthContext:
        try:
            claims = self.token_service.verify(token)
        except ExpiredTokenError as e:
            raise UnauthenticatedError("Token has expired") from e
        except JWTError as e:
            raise UnauthenticatedError("Invalid token") from e

        return AuthContext(
            user_id=UserId(claims.sub),
            email=claims.email,
            method=CredentialKind.BEARER,
        )

    async def _from_session(self, session_id: SessionId) -> AuthContext:
        user_id = await self.session_service.resolve(session_id)
        try:
            user = await self.user_service.get_by_id(user_id)
        except NotFoundError as e:
            logfire.warn("Session belongs to a missing user", user_id=str(user_id))
            await self.session_service.discard(session_id)
            raise UnauthenticatedError("Session user no longer exists") from e

        return AuthContext(
            user_id=user.id,
            email=str(user.email),
            method=CredentialKind.SESSION,
            session_id=session_id,
            user=user,
        )
