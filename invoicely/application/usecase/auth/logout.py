"""Logout use case."""

import logfire
from pydantic import BaseModel

from invoicely.domain.service import SessionService, TokenService
from invoicely.domain.value import SessionId

from ..base import BaseUseCase
from .authenticate import Credentials


class LogoutResponse(BaseModel):
    """Logout response."""

    message: str
    session_destroyed: bool
    clear_cookie: bool


class LogoutUseCase(BaseUseCase):
    """Use case for ending a session.

    Bearer tokens cannot be revoked; for them logout only tells the client
    to forget the token.
    """

    def __init__(self, session_service: SessionService, token_service: TokenService) -> None:
        """Initialize logout use case.

        Args:
            session_service: Session domain service
            token_service: Bearer token domain service, to name the user in logs
        """
        self.session_service = session_service
        self.token_service = token_service

    async def execute(self, request: Credentials) -> LogoutResponse:
        """Destroy the session named by the cookie, if any.

        Logout never fails on bad credentials; there is nothing to protect.

        Raises:
            StoreUnavailableError: If the session store cannot be reached
        """
        destroyed = False
        if not request.present:
            logfire.info("Logout without credentials")
        elif request.session_id:
            await self.session_service.destroy(SessionId(request.session_id))
            destroyed = True
        else:
            user_id = self.token_service.user_id_from_token(request.bearer_token)
            logfire.info(
                "Logout with bearer token, nothing to revoke",
                user_id=str(user_id) if user_id else None,
            )

        return LogoutResponse(
            message="Logged out successfully",
            session_destroyed=destroyed,
            clear_cookie=request.session_id is not None,
        )
