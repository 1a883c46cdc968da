"""Mock providers for testing."""

from .captcha import MockCaptchaProvider
from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = [
    "MockCaptchaProvider",
    "MockPersistenceProvider",
    "build_test_container",
]
