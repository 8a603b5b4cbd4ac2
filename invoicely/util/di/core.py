"""Core DI providers."""

from dishka import Scope, provide

from invoicely.config import AuthSettings, GoogleOAuthSettings, Settings
from invoicely.util.di.base import ProviderBase


class ConfigProvider(ProviderBase):
    """Config component base.

    Settings are built once per container and shared read-only.
    """

    __mock_component__ = "config"


class ProdConfigProvider(ConfigProvider):
    """Production config provider.

    Settings are loaded from environment variables and .env file automatically.
    """

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()


class SettingsSectionProvider(ProviderBase):
    """Exposes nested settings sections to the services that need them."""

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide auth settings."""
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_google_settings(self, auth_settings: AuthSettings) -> GoogleOAuthSettings:
        """Provide Google OAuth settings."""
        return auth_settings.google
