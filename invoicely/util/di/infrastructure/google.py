"""Google infrastructure providers."""

from dishka import Scope, provide
import logfire

from invoicely.adapter.google import GoogleOAuthClient, RealGoogleOAuthClient
from invoicely.config import GoogleOAuthSettings
from invoicely.util.di.base import ProviderBase


class GoogleProvider(ProviderBase):
    """Google component base."""

    __mock_component__ = "google"


class ProdGoogleProvider(GoogleProvider):
    """Production Google provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_google_oauth_client(self, settings: GoogleOAuthSettings) -> GoogleOAuthClient:
        """Provide Google OAuth client.

        Missing credentials do not fail startup; the sign-in routes answer
        503 instead.

        Returns:
            Google OAuth 2.0 client
        """
        if not settings.enabled:
            logfire.warn("Google OAuth credentials not configured, Google sign-in disabled")

        return RealGoogleOAuthClient(settings)
