"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from invoicely.domain.model.user import User
from invoicely.domain.value import Email, UserId


class UserRepository(ABC):
    """Repository for the User aggregate.

    Every method may raise StoreUnavailableError when the store cannot be
    reached. Uniqueness of email and external ID is enforced here, not by
    callers checking first.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: Email) -> Optional[User]:
        """Find a user by email.

        Args:
            email: The user's email address

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_external_id(self, external_id: str) -> Optional[User]:
        """Find a user by external provider subject ID.

        Args:
            external_id: Provider's stable subject identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def insert(self, user: User) -> User:
        """Insert a new user.

        Args:
            user: The user to create

        Returns:
            The stored user

        Raises:
            ConflictError: If the email or external ID is already taken
        """
        pass

    @abstractmethod
    async def update_link_fields(
        self, user_id: UserId, external_id: str, avatar_url: Optional[str]
    ) -> User:
        """Attach an external identity (and avatar) to an existing user.

        Args:
            user_id: User to update
            external_id: Provider subject ID to attach
            avatar_url: New avatar, or None to keep the current one

        Returns:
            The updated user

        Raises:
            NotFoundError: If the user does not exist
            ConflictError: If the external ID belongs to another user
        """
        pass
