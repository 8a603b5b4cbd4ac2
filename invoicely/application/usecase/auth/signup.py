"""Signup use case."""

from uuid import uuid4

import logfire
from pydantic import BaseModel

from invoicely.domain.error import (
    ConflictError,
    DuplicateEmailError,
    FieldError,
    ValidationError,
)
from invoicely.domain.model import User
from invoicely.domain.service import PasswordService, TokenService, UserService
from invoicely.domain.value import DisplayName, Email, Password, UserId

from ..base import BaseUseCase
from .common import AuthResponse, UserInfo, field_error


class SignupRequest(BaseModel):
    """Signup request."""

    display_name: str
    email: str
    password: str


class SignupUseCase(BaseUseCase):
    """Use case for creating a password account."""

    def __init__(
        self,
        user_service: UserService,
        password_service: PasswordService,
        token_service: TokenService,
    ) -> None:
        """Initialize signup use case.

        Args:
            user_service: User domain service
            password_service: Password hashing domain service
            token_service: Bearer token domain service
        """
        self.user_service = user_service
        self.password_service = password_service
        self.token_service = token_service

    async def execute(self, request: SignupRequest) -> AuthResponse:
        """Execute signup flow.

        Steps:
        1. Validate display name, email and password
        2. Reject an email that is already registered
        3. Hash the password and store the user
        4. Issue a bearer token

        Args:
            request: Signup request

        Returns:
            Created user and token

        Raises:
            ValidationError: If any field is invalid
            DuplicateEmailError: If the email is already registered
        """
        display_name, email, password = _validate(request)

        with logfire.span("signup"):
            if await self.user_service.get_user_by_email(email):
                logfire.info("Signup rejected, email already registered")
                raise DuplicateEmailError()

            user = User(
                id=UserId(uuid4()),
                display_name=display_name.root,
                email=email,
                password_hash=self.password_service.hash(password),
            )

            try:
                created = await self.user_service.create(user)
            except ConflictError as e:
                # Lost a race with a concurrent signup
                raise DuplicateEmailError() from e

            token = self.token_service.issue(created.id, created.email)

            return AuthResponse(
                message="User created successfully",
                user=UserInfo.from_user(created),
                token=token,
            )


def _validate(request: SignupRequest) -> tuple[DisplayName, Email, Password]:
    errors: list[FieldError] = []
    display_name = email = password = None

    try:
        display_name = DisplayName(request.display_name)
    except ValueError as e:
        errors.append(field_error("display_name", e))
    try:
        email = Email(request.email)
    except ValueError as e:
        errors.append(field_error("email", e))
    try:
        password = Password(request.password)
    except ValueError as e:
        errors.append(field_error("password", e))

    if errors:
        raise ValidationError(errors)
    return display_name, email, password
