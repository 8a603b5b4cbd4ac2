"""Identity resolution domain service.

Maps a profile from the external identity provider onto exactly one local
user. Lookup order:

1. by external ID - returning users, no writes
2. by email - link the external ID to an existing password account
3. create a new external-only user

A uniqueness conflict on write means another request resolved the same
profile first, so resolution starts over from step 1.
"""

from uuid import uuid4

import logfire

from invoicely.domain.error import (
    ConflictError,
    IdentityResolutionError,
    StoreUnavailableError,
)
from invoicely.domain.model import User
from invoicely.domain.repository import UserRepository
from invoicely.domain.value import Email, ExternalProfile, UserId

from .base import Service

MAX_RESOLVE_ATTEMPTS = 3
FALLBACK_DISPLAY_NAME = "user"
PLACEHOLDER_EMAIL_DOMAIN = "oauth.invalid"


class IdentityService(Service):
    """Finds, links or creates the local user for an external profile."""

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize identity service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def resolve(self, profile: ExternalProfile) -> User:
        """Resolve an external profile to a local user.

        Args:
            profile: Profile from the identity provider

        Returns:
            Existing, linked or newly created user

        Raises:
            IdentityResolutionError: If the store fails or conflicts persist
        """
        with logfire.span("identity_service.resolve", external_id=profile.external_id):
            for attempt in range(1, MAX_RESOLVE_ATTEMPTS + 1):
                try:
                    return await self._resolve_once(profile)
                except ConflictError as e:
                    logfire.warn(
                        "Identity resolution conflict, retrying",
                        external_id=profile.external_id,
                        attempt=attempt,
                        error=str(e),
                    )
                except StoreUnavailableError as e:
                    logfire.error(
                        "User store unavailable during identity resolution",
                        external_id=profile.external_id,
                        error=str(e),
                    )
                    raise IdentityResolutionError(
                        "User store unavailable", transient=True
                    ) from e

            raise IdentityResolutionError(
                f"Could not resolve identity after {MAX_RESOLVE_ATTEMPTS} attempts"
            )

    async def _resolve_once(self, profile: ExternalProfile) -> User:
        existing = await self.user_repository.find_by_external_id(profile.external_id)
        if existing:
            logfire.info("Returning external user", user_id=str(existing.id))
            return existing

        email = _profile_email(profile)
        if email:
            by_email = await self.user_repository.find_by_email(email)
            if by_email:
                return await self._link(by_email, profile)

        return await self._create(profile, email)

    async def _link(self, user: User, profile: ExternalProfile) -> User:
        if user.external_id is not None:
            # Same email, different provider subject
            logfire.error(
                "Email already linked to another external identity",
                user_id=str(user.id),
            )
            raise IdentityResolutionError("Account is linked to another identity")

        linked = await self.user_repository.update_link_fields(
            user.id, profile.external_id, profile.avatar_url
        )
        logfire.info(
            "External identity linked to existing user",
            user_id=str(linked.id),
            external_id=profile.external_id,
        )
        return linked

    async def _create(self, profile: ExternalProfile, email: Email | None) -> User:
        user = User(
            id=UserId(uuid4()),
            display_name=_display_name(profile, email),
            email=email or Email(f"{profile.external_id}@{PLACEHOLDER_EMAIL_DOMAIN}"),
            password_hash=None,
            external_id=profile.external_id,
            avatar_url=profile.avatar_url,
        )
        created = await self.user_repository.insert(user)
        logfire.info(
            "External user created",
            user_id=str(created.id),
            external_id=profile.external_id,
            placeholder_email=email is None,
        )
        return created


def _profile_email(profile: ExternalProfile) -> Email | None:
    if not profile.email:
        return None
    try:
        return Email(profile.email)
    except ValueError:
        logfire.warn("Ignoring invalid email from provider", external_id=profile.external_id)
        return None


def _display_name(profile: ExternalProfile, email: Email | None) -> str:
    name = (profile.display_name or "").strip()
    if not name and email:
        name = email.local_part
    return (name or FALLBACK_DISPLAY_NAME)[:100]
