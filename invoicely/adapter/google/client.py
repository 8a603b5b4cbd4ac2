"""Google OAuth 2.0 client implementation.

Authorization code flow for a confidential web client, requesting the
`openid profile email` scopes.
"""

from urllib.parse import urlencode

import httpx
import logfire

from invoicely.adapter.error import ProviderError, ProviderProfileError
from invoicely.config import GoogleOAuthSettings
from invoicely.domain.service.auth_service import OAuthClient
from invoicely.domain.value import ExternalProfile

AUTHORIZE_URL = "https://accounts.google.com/o/oauth2/v2/auth"
TOKEN_URL = "https://oauth2.googleapis.com/token"
USER_INFO_URL = "https://openidconnect.googleapis.com/v1/userinfo"
SCOPE = "openid profile email"


class GoogleOAuthError(ProviderError):
    """Google OAuth error."""

    pass


class GoogleOAuthClient(OAuthClient):
    """Base class for Google OAuth clients.

    Provides type distinction for dependency injection.
    """

    pass


class RealGoogleOAuthClient(GoogleOAuthClient):
    """Google OAuth 2.0 client talking to Google's endpoints."""

    def __init__(self, settings: GoogleOAuthSettings, timeout: float = 10.0) -> None:
        """Initialize Google OAuth client.

        Args:
            settings: Google OAuth settings (client credentials, callback URL)
            timeout: Timeout for calls to Google, in seconds
        """
        self.client_id = settings.client_id
        self.client_secret = settings.client_secret
        self.redirect_uri = settings.callback_url
        self.timeout = timeout

    @property
    def is_configured(self) -> bool:
        """Whether client ID and secret are both set."""
        return bool(self.client_id and self.client_secret)

    async def initiate_authorization(self, state: str) -> str:
        """Build the Google authorization URL.

        Args:
            state: State parameter for CSRF protection

        Returns:
            Authorization URL to redirect user to
        """
        params = {
            "response_type": "code",
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "scope": SCOPE,
            "state": state,
            "prompt": "select_account",
        }

        logfire.info("Google OAuth authorization initiated", redirect_uri=self.redirect_uri)

        return f"{AUTHORIZE_URL}?{urlencode(params)}"

    async def complete_authorization(self, code: str, state: str) -> ExternalProfile:
        """Complete Google OAuth authorization flow.

        Args:
            code: Authorization code from Google callback
            state: State parameter (checked by the caller against the cookie)

        Returns:
            Profile from Google

        Raises:
            GoogleOAuthError: If the token exchange or userinfo call fails
            ProviderProfileError: If Google returns no subject ID
        """
        _ = state
        access_token = await self._exchange_code_for_token(code)
        user_info = await self._get_user_info(access_token)

        subject = user_info.get("sub")
        if not subject:
            raise ProviderProfileError("Google profile has no subject ID")

        # Unverified addresses must not drive account linking
        email = user_info.get("email") if user_info.get("email_verified") else None

        logfire.info("Google OAuth completed", external_id=subject, has_email=bool(email))

        return ExternalProfile(
            external_id=str(subject),
            email=email,
            display_name=user_info.get("name"),
            avatar_url=user_info.get("picture"),
        )

    async def _exchange_code_for_token(self, code: str) -> str:
        """Exchange authorization code for access token.

        Args:
            code: Authorization code from callback

        Returns:
            Access token

        Raises:
            GoogleOAuthError: If token exchange fails
        """
        data = {
            "code": code,
            "grant_type": "authorization_code",
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "redirect_uri": self.redirect_uri,
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    TOKEN_URL,
                    data=data,
                    headers={"Accept": "application/json"},
                )
        except httpx.HTTPError as e:
            logfire.error("Google token exchange HTTP error", error=str(e))
            raise GoogleOAuthError(f"HTTP error during token exchange: {e}")

        if response.status_code != 200:
            logfire.error(
                "Google token exchange failed",
                status_code=response.status_code,
                error=response.text,
            )
            raise GoogleOAuthError(f"Token exchange failed: {response.status_code}")

        access_token = response.json().get("access_token")
        if not access_token:
            raise GoogleOAuthError("Token response has no access token")
        return access_token

    async def _get_user_info(self, access_token: str) -> dict:
        """Get the signed-in user's profile.

        Args:
            access_token: OAuth access token

        Returns:
            OpenID Connect userinfo claims

        Raises:
            GoogleOAuthError: If the request fails
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(
                    USER_INFO_URL,
                    headers={"Authorization": f"Bearer {access_token}"},
                )
        except httpx.HTTPError as e:
            logfire.error("Google userinfo HTTP error", error=str(e))
            raise GoogleOAuthError(f"HTTP error fetching user info: {e}")

        if response.status_code != 200:
            logfire.error(
                "Google userinfo request failed",
                status_code=response.status_code,
                error=response.text,
            )
            raise GoogleOAuthError(f"User info request failed: {response.status_code}")

        return response.json()


class MockGoogleOAuthClient(GoogleOAuthClient):
    """Mock Google OAuth client for development and testing.

    Returns deterministic profiles without calling Google. The code
    `invalid` fails the exchange and `no-profile` yields no usable profile.
    """

    def __init__(self, profile: ExternalProfile | None = None, configured: bool = True):
        self.profile = profile or ExternalProfile(
            external_id="google-mock-123",
            email="mock.user@gmail.com",
            display_name="Mock Google User",
            avatar_url="https://example.com/avatar.jpg",
        )
        self.configured = configured

    @property
    def is_configured(self) -> bool:
        return self.configured

    async def initiate_authorization(self, state: str) -> str:
        """Return mock authorization URL."""
        return f"https://accounts.google.com/o/oauth2/v2/auth?state={state}&mock=true"

    async def complete_authorization(self, code: str, state: str) -> ExternalProfile:
        """Return the configured mock profile."""
        _ = state
        if code == "invalid":
            raise GoogleOAuthError("Invalid authorization code")
        if code == "no-profile":
            raise ProviderProfileError("Google profile has no subject ID")
        return self.profile
