"""In-memory user repository for testing."""

from typing import Optional

from invoicely.domain.error import ConflictError, NotFoundError, StoreUnavailableError
from invoicely.domain.model.user import User
from invoicely.domain.repository.user import UserRepository
from invoicely.domain.value import Email, UserId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing.

    Enforces the same uniqueness rules as the database. Set `unavailable`
    to make every call fail as if the store were down.
    """

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}
        self.unavailable = False

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        self._check_available()
        return self._users.get(user_id)

    async def find_by_email(self, email: Email) -> Optional[User]:
        """Find a user by their email."""
        self._check_available()
        for user in self._users.values():
            if user.email == email:
                return user
        return None

    async def find_by_external_id(self, external_id: str) -> Optional[User]:
        """Find a user by Google subject ID."""
        self._check_available()
        for user in self._users.values():
            if user.external_id == external_id:
                return user
        return None

    async def insert(self, user: User) -> User:
        """Insert a new user, rejecting duplicate email or external ID."""
        self._check_available()
        for other in self._users.values():
            if other.email == user.email:
                raise ConflictError("User", "email")
            if user.external_id and other.external_id == user.external_id:
                raise ConflictError("User", "external_id")
        if user.id in self._users:
            raise ConflictError("User", "id")
        self._users[user.id] = user
        return user

    async def update_link_fields(
        self, user_id: UserId, external_id: str, avatar_url: Optional[str]
    ) -> User:
        """Attach an external ID (and avatar, when given) to a user."""
        self._check_available()
        user = self._users.get(user_id)
        if not user:
            raise NotFoundError("User", str(user_id))
        for other in self._users.values():
            if other.id != user_id and other.external_id == external_id:
                raise ConflictError("User", "external_id")

        update: dict = {"external_id": external_id}
        if avatar_url is not None:
            update["avatar_url"] = avatar_url
        updated = user.model_copy(update=update)
        self._users[user_id] = updated
        return updated

    def _check_available(self) -> None:
        if self.unavailable:
            raise StoreUnavailableError("User store unavailable")
