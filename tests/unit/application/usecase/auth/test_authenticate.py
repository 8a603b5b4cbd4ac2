"""Unit tests for AuthenticateUseCase, GetCurrentUserUseCase and LogoutUseCase."""

from uuid import uuid4

from dishka import AsyncContainer
import pytest

from invoicely.application.usecase.auth import (
    AuthenticateUseCase,
    Credentials,
    GetCurrentUserUseCase,
    LogoutUseCase,
)
from invoicely.domain.error import NotFoundError, UnauthenticatedError
from invoicely.domain.repository import SessionRepository, UserRepository
from invoicely.domain.service import SessionService, TokenService
from invoicely.domain.value import CredentialKind, Email, UserId
from tests.factories import make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def stored_user(container: AsyncContainer, **kwargs):
    user_repository = await container.get(UserRepository)
    return await user_repository.insert(make_user(**kwargs))


class TestAuthenticate:
    """Tests for AuthenticateUseCase."""

    @pytest.mark.asyncio
    async def test_bearer_token_authenticates(self, unit_env: AsyncContainer):
        user = await stored_user(unit_env)
        token = (await unit_env.get(TokenService)).issue(user.id, user.email)
        use_case = await unit_env.get(AuthenticateUseCase)

        context = await use_case.execute(Credentials(bearer_token=token))

        assert context.user_id == user.id
        assert context.email == "alice@example.com"
        assert context.method == CredentialKind.BEARER
        assert context.user is None

    @pytest.mark.asyncio
    async def test_bearer_token_needs_no_store_lookup(self, unit_env: AsyncContainer):
        """Tokens are trusted as signed, even for users the store does not know."""
        token_service = await unit_env.get(TokenService)
        token = token_service.issue(UserId(uuid4()), Email("ghost@example.com"))
        use_case = await unit_env.get(AuthenticateUseCase)

        context = await use_case.execute(Credentials(bearer_token=token))

        assert context.email == "ghost@example.com"

    @pytest.mark.asyncio
    async def test_session_authenticates_and_loads_user(self, unit_env: AsyncContainer):
        user = await stored_user(unit_env)
        session = await (await unit_env.get(SessionService)).establish(user.id)
        use_case = await unit_env.get(AuthenticateUseCase)

        context = await use_case.execute(Credentials(session_id=session.id))

        assert context.method == CredentialKind.SESSION
        assert context.session_id == session.id
        assert context.user == user

    @pytest.mark.asyncio
    async def test_bearer_token_takes_precedence(self, unit_env: AsyncContainer):
        alice = await stored_user(unit_env)
        bob = await stored_user(unit_env, email="bob@example.com", display_name="bob")
        token = (await unit_env.get(TokenService)).issue(alice.id, alice.email)
        session = await (await unit_env.get(SessionService)).establish(bob.id)
        use_case = await unit_env.get(AuthenticateUseCase)

        context = await use_case.execute(
            Credentials(bearer_token=token, session_id=session.id)
        )

        assert context.user_id == alice.id
        assert context.method == CredentialKind.BEARER

    @pytest.mark.asyncio
    async def test_invalid_bearer_does_not_fall_back_to_session(
        self, unit_env: AsyncContainer
    ):
        user = await stored_user(unit_env)
        session = await (await unit_env.get(SessionService)).establish(user.id)
        use_case = await unit_env.get(AuthenticateUseCase)

        with pytest.raises(UnauthenticatedError):
            await use_case.execute(
                Credentials(bearer_token="garbage", session_id=session.id)
            )

    @pytest.mark.asyncio
    async def test_no_credentials_rejected(self, unit_env: AsyncContainer):
        use_case = await unit_env.get(AuthenticateUseCase)

        with pytest.raises(UnauthenticatedError):
            await use_case.execute(Credentials())

    @pytest.mark.asyncio
    async def test_unknown_session_rejected(self, unit_env: AsyncContainer):
        use_case = await unit_env.get(AuthenticateUseCase)

        with pytest.raises(UnauthenticatedError):
            await use_case.execute(Credentials(session_id="nope"))

    @pytest.mark.asyncio
    async def test_session_of_deleted_user_rejected(self, unit_env: AsyncContainer):
        session_service = await unit_env.get(SessionService)
        session = await session_service.establish(UserId(uuid4()))
        use_case = await unit_env.get(AuthenticateUseCase)

        with pytest.raises(UnauthenticatedError):
            await use_case.execute(Credentials(session_id=session.id))

        with pytest.raises(UnauthenticatedError):
            await session_service.resolve(session.id)
        # Removed outside the request transaction, so it survives the 401
        session_repository = await unit_env.get(SessionRepository)
        assert session_repository.purged == [session.id]


class TestGetCurrentUser:
    """Tests for GetCurrentUserUseCase."""

    @pytest.mark.asyncio
    async def test_returns_profile_for_bearer(self, unit_env: AsyncContainer):
        user = await stored_user(unit_env)
        token = (await unit_env.get(TokenService)).issue(user.id, user.email)
        context = await (await unit_env.get(AuthenticateUseCase)).execute(
            Credentials(bearer_token=token)
        )
        use_case = await unit_env.get(GetCurrentUserUseCase)

        response = await use_case.execute(context)

        assert response.user.id == str(user.id)
        assert response.method == CredentialKind.BEARER

    @pytest.mark.asyncio
    async def test_profile_never_exposes_password_hash(self, unit_env: AsyncContainer):
        user = await stored_user(unit_env)
        session = await (await unit_env.get(SessionService)).establish(user.id)
        context = await (await unit_env.get(AuthenticateUseCase)).execute(
            Credentials(session_id=session.id)
        )
        use_case = await unit_env.get(GetCurrentUserUseCase)

        response = await use_case.execute(context)

        assert "password_hash" not in response.model_dump()["user"]

    @pytest.mark.asyncio
    async def test_bearer_for_missing_user_not_found(self, unit_env: AsyncContainer):
        token = (await unit_env.get(TokenService)).issue(
            UserId(uuid4()), Email("ghost@example.com")
        )
        context = await (await unit_env.get(AuthenticateUseCase)).execute(
            Credentials(bearer_token=token)
        )
        use_case = await unit_env.get(GetCurrentUserUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(context)


class TestLogout:
    """Tests for LogoutUseCase."""

    @pytest.mark.asyncio
    async def test_logout_destroys_session(self, unit_env: AsyncContainer):
        user = await stored_user(unit_env)
        session_service = await unit_env.get(SessionService)
        session = await session_service.establish(user.id)
        use_case = await unit_env.get(LogoutUseCase)

        response = await use_case.execute(Credentials(session_id=session.id))

        assert response.session_destroyed is True
        assert response.clear_cookie is True
        with pytest.raises(UnauthenticatedError):
            await session_service.resolve(session.id)

    @pytest.mark.asyncio
    async def test_logout_twice_is_harmless(self, unit_env: AsyncContainer):
        user = await stored_user(unit_env)
        session = await (await unit_env.get(SessionService)).establish(user.id)
        use_case = await unit_env.get(LogoutUseCase)

        await use_case.execute(Credentials(session_id=session.id))
        response = await use_case.execute(Credentials(session_id=session.id))

        assert response.message == "Logged out successfully"

    @pytest.mark.asyncio
    async def test_bearer_logout_is_noop(self, unit_env: AsyncContainer):
        user = await stored_user(unit_env)
        token_service = await unit_env.get(TokenService)
        token = token_service.issue(user.id, user.email)
        use_case = await unit_env.get(LogoutUseCase)

        response = await use_case.execute(Credentials(bearer_token=token))

        assert response.session_destroyed is False
        assert response.clear_cookie is False
        # Tokens cannot be revoked
        assert token_service.verify(token).sub == user.id

    @pytest.mark.asyncio
    async def test_logout_with_bad_bearer_still_succeeds(self, unit_env: AsyncContainer):
        use_case = await unit_env.get(LogoutUseCase)

        response = await use_case.execute(Credentials(bearer_token="not-a-token"))

        assert response.session_destroyed is False

    @pytest.mark.asyncio
    async def test_logout_without_credentials(self, unit_env: AsyncContainer):
        use_case = await unit_env.get(LogoutUseCase)

        response = await use_case.execute(Credentials())

        assert response.session_destroyed is False
        assert response.clear_cookie is False
