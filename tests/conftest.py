"""Pytest configuration and fixtures."""

import pytest

from factom_monitor.config import Settings
from tests.fakes import NODE_URL, FakeNode


@pytest.fixture
def fast_settings():
    """Settings with short intervals, no .env lookup."""
    return Settings(
        _env_file=None,
        factomd_url=NODE_URL,
        poll_interval=0.01,
        request_timeout=0.5,
    )


@pytest.fixture
def node():
    """FakeNode at height 0, minute 0."""
    return FakeNode()
