"""External identity provider domain service."""

import logfire

from invoicely.domain.error import ProviderDisabledError
from invoicely.domain.value import ExternalProfile

from .base import Service


class OAuthClient:
    """OAuth client interface for the external identity provider."""

    @property
    def is_configured(self) -> bool:
        """Whether the client has the credentials it needs."""
        raise NotImplementedError

    async def initiate_authorization(self, state: str) -> str:
        """Build the authorization URL.

        Args:
            state: State parameter for CSRF protection

        Returns:
            Authorization URL to redirect user to
        """
        raise NotImplementedError

    async def complete_authorization(self, code: str, state: str) -> ExternalProfile:
        """Exchange the callback code for the user's profile.

        Args:
            code: Authorization code from OAuth callback
            state: State parameter for verification

        Returns:
            Provider profile
        """
        raise NotImplementedError


class AuthService(Service):
    """Domain service for external-provider sign-in."""

    def __init__(self, oauth_client: OAuthClient) -> None:
        """Initialize auth service.

        Args:
            oauth_client: Provider OAuth client
        """
        self.oauth_client = oauth_client

    @property
    def enabled(self) -> bool:
        """Whether external sign-in is available."""
        return self.oauth_client.is_configured

    async def initiate_login(self, state: str) -> str:
        """Start the provider login flow.

        Args:
            state: State parameter for CSRF protection

        Returns:
            Authorization URL to redirect user to

        Raises:
            ProviderDisabledError: If the provider is not configured
        """
        self._ensure_enabled()
        return await self.oauth_client.initiate_authorization(state)

    async def complete_login(self, code: str, state: str) -> ExternalProfile:
        """Finish the provider login flow.

        Args:
            code: Authorization code from OAuth callback
            state: State parameter for verification

        Returns:
            Provider profile

        Raises:
            ProviderDisabledError: If the provider is not configured
            ProviderError: If the provider exchange fails
        """
        self._ensure_enabled()
        return await self.oauth_client.complete_authorization(code, state)

    def _ensure_enabled(self) -> None:
        if not self.enabled:
            logfire.warn("External sign-in requested but not configured")
            raise ProviderDisabledError("Google sign-in is not configured")
