import pytest

from targetdash.core.config import get_settings
from targetdash.core.logging import configure_logging


@pytest.fixture(autouse=True, scope="session")
def _configure_logging() -> None:
    configure_logging()


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
