"""Mock providers for testing."""

from .config import MockConfigProvider, make_test_settings
from .google import MockGoogleProvider
from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = [
    "MockConfigProvider",
    "MockGoogleProvider",
    "MockPersistenceProvider",
    "build_test_container",
    "make_test_settings",
]
