"""Get current user use case."""

from pydantic import BaseModel

from invoicely.domain.service import UserService
from invoicely.domain.value import CredentialKind

from ..base import BaseUseCase
from .authenticate import AuthContext
from .common import UserInfo


class CurrentUserResponse(BaseModel):
    """Get current user response."""

    user: UserInfo
    method: CredentialKind


class GetCurrentUserUseCase(BaseUseCase):
    """Use case for getting the current authenticated user."""

    def __init__(self, user_service: UserService) -> None:
        """Initialize get current user use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(self, request: AuthContext) -> CurrentUserResponse:
        """Return the profile of the authenticated user.

        Args:
            request: Authenticated context

        Returns:
            User profile

        Raises:
            NotFoundError: If a bearer token names a user that no longer exists
        """
        user = request.user or await self.user_service.get_by_id(request.user_id)
        return CurrentUserResponse(user=UserInfo.from_user(user), method=request.method)
