"""Unit tests for IdentityService."""

import pytest

from invoicely.domain.error import (
    ConflictError,
    IdentityResolutionError,
)
from invoicely.domain.model import User
from invoicely.domain.service import IdentityService
from invoicely.domain.value import Email
from invoicely.persistence.repository.inmemory import InMemoryUserRepository
from tests.factories import make_profile, make_user


class RacingUserRepository(InMemoryUserRepository):
    """Simulates another request inserting the same Google user first."""

    def __init__(self, winner: User) -> None:
        super().__init__()
        self.winner = winner
        self.insert_attempts = 0

    async def insert(self, user: User) -> User:
        self.insert_attempts += 1
        if self.insert_attempts == 1:
            self._users[self.winner.id] = self.winner
            raise ConflictError("User", "external_id")
        return await super().insert(user)


class CountingUserRepository(InMemoryUserRepository):
    """Records every write."""

    def __init__(self) -> None:
        super().__init__()
        self.writes: list[str] = []

    async def insert(self, user: User) -> User:
        self.writes.append("insert")
        return await super().insert(user)

    async def update_link_fields(self, user_id, external_id, avatar_url) -> User:
        self.writes.append("update_link_fields")
        return await super().update_link_fields(user_id, external_id, avatar_url)

    def users_with_email(self, email: str) -> list[User]:
        return [u for u in self._users.values() if u.email == Email(email)]


class AlwaysConflictingUserRepository(InMemoryUserRepository):
    async def insert(self, user: User) -> User:
        raise ConflictError("User", "email")


@pytest.fixture
def repository() -> CountingUserRepository:
    return CountingUserRepository()


@pytest.fixture
def service(repository) -> IdentityService:
    return IdentityService(repository)


class TestResolveNewUser:
    """Profiles with no matching user create one."""

    @pytest.mark.asyncio
    async def test_creates_external_only_user(self, service, repository):
        user = await service.resolve(make_profile())

        assert user.external_id == "google-123"
        assert user.email == Email("bob@gmail.com")
        assert user.display_name == "Bob Builder"
        assert user.avatar_url == "https://example.com/bob.jpg"
        assert user.password_hash is None
        assert await repository.find_by_external_id("google-123") == user

    @pytest.mark.asyncio
    async def test_display_name_falls_back_to_email_local_part(self, service):
        user = await service.resolve(make_profile(display_name=None))

        assert user.display_name == "bob"

    @pytest.mark.asyncio
    async def test_display_name_falls_back_to_user(self, service):
        user = await service.resolve(make_profile(display_name="  ", email=None))

        assert user.display_name == "user"

    @pytest.mark.asyncio
    async def test_placeholder_email_when_profile_has_none(self, service):
        user = await service.resolve(make_profile(external_id="g-42", email=None))

        assert user.email == Email("g-42@oauth.invalid")

    @pytest.mark.asyncio
    async def test_invalid_profile_email_ignored(self, service):
        user = await service.resolve(make_profile(external_id="g-43", email="nonsense"))

        assert user.email == Email("g-43@oauth.invalid")

    @pytest.mark.asyncio
    async def test_long_display_name_truncated(self, service):
        user = await service.resolve(make_profile(display_name="x" * 150))

        assert len(user.display_name) == 100


class TestResolveExistingUser:
    """Profiles that match an existing user reuse it."""

    @pytest.mark.asyncio
    async def test_resolve_is_idempotent(self, service, repository):
        first = await service.resolve(make_profile())
        writes_after_first = list(repository.writes)

        second = await service.resolve(make_profile())

        assert second == first
        assert writes_after_first == ["insert"]
        assert repository.writes == writes_after_first

    @pytest.mark.asyncio
    async def test_linked_user_resolves_without_writes(self, service, repository):
        await repository.insert(make_user(email="bob@gmail.com"))
        linked = await service.resolve(make_profile())
        repository.writes.clear()

        again = await service.resolve(make_profile())

        assert again == linked
        assert repository.writes == []

    @pytest.mark.asyncio
    async def test_returning_user_found_even_if_email_changed(self, service):
        first = await service.resolve(make_profile(email="bob@gmail.com"))
        second = await service.resolve(make_profile(email="robert@gmail.com"))

        assert second.id == first.id

    @pytest.mark.asyncio
    async def test_links_password_account_with_same_email(self, service, repository):
        existing = await repository.insert(make_user(email="bob@gmail.com"))
        assert len(repository.users_with_email("bob@gmail.com")) == 1

        user = await service.resolve(make_profile())

        assert user.id == existing.id
        assert user.external_id == "google-123"
        assert user.password_hash == existing.password_hash
        assert user.avatar_url == "https://example.com/bob.jpg"
        assert repository.users_with_email("bob@gmail.com") == [user]

    @pytest.mark.asyncio
    async def test_linking_keeps_avatar_when_profile_has_none(self, service, repository):
        await repository.insert(
            make_user(email="bob@gmail.com", avatar_url="https://example.com/old.jpg")
        )

        user = await service.resolve(make_profile(avatar_url=None))

        assert user.avatar_url == "https://example.com/old.jpg"

    @pytest.mark.asyncio
    async def test_email_match_is_case_insensitive(self, service, repository):
        existing = await repository.insert(make_user(email="bob@gmail.com"))

        user = await service.resolve(make_profile(email="Bob@Gmail.com"))

        assert user.id == existing.id

    @pytest.mark.asyncio
    async def test_refuses_to_relink_to_other_identity(self, service, repository):
        await repository.insert(
            make_user(email="bob@gmail.com", external_id="google-other")
        )

        with pytest.raises(IdentityResolutionError) as exc_info:
            await service.resolve(make_profile())

        assert exc_info.value.transient is False


class TestResolveFailures:
    """Conflicts and store failures."""

    @pytest.mark.asyncio
    async def test_conflict_retries_and_returns_winner(self):
        winner = make_user(
            email="bob@gmail.com", password_hash=None, external_id="google-123"
        )
        repository = RacingUserRepository(winner)

        user = await IdentityService(repository).resolve(make_profile())

        assert user.id == winner.id
        assert repository.insert_attempts == 1

    @pytest.mark.asyncio
    async def test_persistent_conflict_gives_up(self):
        service = IdentityService(AlwaysConflictingUserRepository())

        with pytest.raises(IdentityResolutionError) as exc_info:
            await service.resolve(make_profile())

        assert exc_info.value.transient is False

    @pytest.mark.asyncio
    async def test_store_unavailable_is_transient(self, service, repository):
        repository.unavailable = True

        with pytest.raises(IdentityResolutionError) as exc_info:
            await service.resolve(make_profile())

        assert exc_info.value.transient is True
