"""Global test configuration for scope_guard tests."""

from collections.abc import Generator

import pytest

from scope_guard import config


@pytest.fixture(autouse=True)
def default_settings() -> Generator[None, None, None]:
    """Start and leave every test with the default settings."""
    config.reset()
    yield
    config.reset()
