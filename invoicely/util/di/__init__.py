"""Dependency injection module.

Providers come in two kinds. Mockable components (config, Google,
persistence) have a production and a mock implementation, picked when the
container is built. Concrete providers (settings sections, domain and
application layers) are always used as they are.
"""

from typing import Type

from invoicely.util.di.application import ProdApplicationProvider
from invoicely.util.di.base import (
    COMPONENTS,
    Component,
    DependencyInjectionError,
    ProviderBase,
)
from invoicely.util.di.core import (
    ConfigProvider,
    ProdConfigProvider,
    SettingsSectionProvider,
)
from invoicely.util.di.domain import ProdDomainProvider
from invoicely.util.di.infrastructure import (
    GoogleProvider,
    PersistenceProvider,
    ProdGoogleProvider,
    ProdPersistenceProvider,
)

PROVIDERS: list[Type[ProviderBase]] = [
    ConfigProvider,
    GoogleProvider,
    PersistenceProvider,
    SettingsSectionProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Pick the implementation of a provider entry.

    Concrete providers are returned unchanged. For a mockable component the
    subclass whose `__is_mock__` matches `use_mock` is returned; mock
    subclasses only exist once the test package has been imported.

    Raises:
        DependencyInjectionError: If the component has no such implementation
    """
    if not base.is_mockable():
        return base

    for candidate in base.__subclasses__():
        if candidate.__is_mock__ == use_mock:
            return candidate

    kind = "mock" if use_mock else "production"
    raise DependencyInjectionError(
        f"No {kind} implementation for component '{base.__mock_component__}'"
    )


__all__ = [
    "COMPONENTS",
    "Component",
    "DependencyInjectionError",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    "ConfigProvider",
    "GoogleProvider",
    "PersistenceProvider",
    "ProdApplicationProvider",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdGoogleProvider",
    "ProdPersistenceProvider",
    "SettingsSectionProvider",
]
