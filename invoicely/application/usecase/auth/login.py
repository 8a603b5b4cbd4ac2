"""Login use case."""

import logfire
from pydantic import BaseModel

from invoicely.domain.error import (
    ExternalOnlyAccountError,
    FieldError,
    InvalidCredentialsError,
    ValidationError,
)
from invoicely.domain.service import PasswordService, TokenService, UserService
from invoicely.domain.value import Email

from ..base import BaseUseCase
from .common import AuthResponse, UserInfo, field_error


class LoginRequest(BaseModel):
    """Password login request."""

    email: str
    password: str


class LoginUseCase(BaseUseCase):
    """Use case for email and password login."""

    def __init__(
        self,
        user_service: UserService,
        password_service: PasswordService,
        token_service: TokenService,
    ) -> None:
        """Initialize login use case.

        Args:
            user_service: User domain service
            password_service: Password hashing domain service
            token_service: Bearer token domain service
        """
        self.user_service = user_service
        self.password_service = password_service
        self.token_service = token_service

    async def execute(self, request: LoginRequest) -> AuthResponse:
        """Execute login flow.

        Args:
            request: Login request

        Returns:
            User and bearer token

        Raises:
            ValidationError: If the email is malformed or the password empty
            InvalidCredentialsError: If the email is unknown or the password wrong
            ExternalOnlyAccountError: If the account only signs in with Google
        """
        email = _validate(request)

        with logfire.span("login"):
            user = await self.user_service.get_user_by_email(email)
            if not user:
                logfire.info("Login failed", reason="unknown_email")
                raise InvalidCredentialsError()

            if not user.password_hash:
                logfire.info("Login failed", reason="external_only", user_id=str(user.id))
                raise ExternalOnlyAccountError()

            if not self.password_service.verify(request.password, user.password_hash):
                logfire.info("Login failed", reason="wrong_password", user_id=str(user.id))
                raise InvalidCredentialsError()

            logfire.info("User logged in", user_id=str(user.id))
            token = self.token_service.issue(user.id, user.email)

            return AuthResponse(
                message="Login successful",
                user=UserInfo.from_user(user),
                token=token,
            )


def _validate(request: LoginRequest) -> Email:
    errors: list[FieldError] = []
    email = None

    try:
        email = Email(request.email)
    except ValueError as e:
        errors.append(field_error("email", e))
    if not request.password:
        errors.append(FieldError(field="password", message="Password is required"))

    if errors:
        raise ValidationError(errors)
    return email
