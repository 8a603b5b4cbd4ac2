"""User domain service."""

import logfire

from invoicely.domain.error import NotFoundError
from invoicely.domain.model import User
from invoicely.domain.repository import UserRepository
from invoicely.domain.value import Email, UserId


class UserService:
    """Domain service for user operations."""

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Args:
            user_id: User ID

        Returns:
            User entity

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.get_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))
            return user

    async def get_user_by_email(self, email: Email) -> User | None:
        """Get user by email.

        Args:
            email: User email

        Returns:
            User if found, None otherwise
        """
        with logfire.span("user_service.get_user_by_email"):
            user = await self.user_repository.find_by_email(email)
            if user:
                logfire.info("User found by email", user_id=str(user.id))
            return user

    async def create(self, user: User) -> User:
        """Create a new user.

        Args:
            user: User to create

        Returns:
            Stored user

        Raises:
            ConflictError: If the email or external ID is taken
        """
        with logfire.span("user_service.create", user_id=str(user.id)):
            created = await self.user_repository.insert(user)
            logfire.info(
                "User created",
                user_id=str(created.id),
                has_password=created.has_password,
                is_linked=created.is_linked,
            )
            return created
