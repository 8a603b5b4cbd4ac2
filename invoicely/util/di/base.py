"""Base classes for dependency injection providers."""

from typing import ClassVar, Literal, get_args

from dishka import Provider

# Components with a production and a mock implementation
Component = Literal["config", "google", "persistence"]
COMPONENTS: frozenset[str] = frozenset(get_args(Component))


class DependencyInjectionError(Exception):
    """A provider could not be selected or the container is misconfigured."""

    pass


class ProviderBase(Provider):
    """Base for all DI providers.

    Mockable components declare `__mock_component__` on an empty base
    class, with one subclass per implementation flagged by `__is_mock__`.
    Concrete providers leave both at their defaults.
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False

    @classmethod
    def is_mockable(cls) -> bool:
        return cls.__mock_component__ is not None and bool(cls.__subclasses__())
