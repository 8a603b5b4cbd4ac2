"""PostgreSQL implementation of User repository."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from invoicely.domain.error import NotFoundError
from invoicely.domain.model import User
from invoicely.domain.repository import UserRepository
from invoicely.domain.value import Email, UserId
from invoicely.persistence.errors import store_errors
from invoicely.persistence.mappers import row_to_user, user_to_dict
from invoicely.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository.

    Writes run in a SAVEPOINT so a uniqueness violation leaves the request
    transaction usable for a retry.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return await self._find_one(users_table.c.id == user_id)

    async def find_by_email(self, email: Email) -> Optional[User]:
        """Find a user by their (lower-cased) email."""
        return await self._find_one(users_table.c.email == email.root)

    async def find_by_external_id(self, external_id: str) -> Optional[User]:
        """Find a user by Google subject ID."""
        return await self._find_one(users_table.c.external_id == external_id)

    async def insert(self, user: User) -> User:
        """Insert a new user.

        Args:
            user: User to insert

        Returns:
            Inserted user

        Raises:
            ConflictError: If email or external ID is already taken
        """
        async with store_errors("User"):
            async with self.session.begin_nested():
                await self.session.execute(
                    users_table.insert().values(**user_to_dict(user))
                )
        return user

    async def update_link_fields(
        self, user_id: UserId, external_id: str, avatar_url: Optional[str]
    ) -> User:
        """Attach an external ID (and avatar, when given) to a user.

        Args:
            user_id: User to update
            external_id: Google subject ID
            avatar_url: Avatar URL, None keeps the current one

        Returns:
            Updated user

        Raises:
            NotFoundError: If the user does not exist
            ConflictError: If the external ID belongs to another user
        """
        values = {"external_id": external_id}
        if avatar_url is not None:
            values["avatar_url"] = avatar_url

        stmt = (
            users_table.update()
            .where(users_table.c.id == user_id)
            .values(**values)
            .returning(*users_table.c)
        )

        async with store_errors("User"):
            async with self.session.begin_nested():
                result = await self.session.execute(stmt)
                row = result.mappings().first()

        if not row:
            raise NotFoundError("User", str(user_id))
        return row_to_user(dict(row))

    async def _find_one(self, condition) -> Optional[User]:
        stmt = select(users_table).where(condition)
        async with store_errors("User"):
            result = await self.session.execute(stmt)
            row = result.mappings().first()
        return row_to_user(dict(row)) if row else None
