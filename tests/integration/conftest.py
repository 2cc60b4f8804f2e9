"""Fixtures for integration tests against a real remote server."""

import os

import pytest

from selenium_remote.config import Settings


@pytest.fixture
def remote_settings():
    """
    Settings for a live JSON Wire Protocol server.

    Integration tests run only when SELENIUM_REMOTE_INTEGRATION is set; the
    server itself is configured with the usual SELENIUM_REMOTE_* variables.
    """
    if not os.environ.get("SELENIUM_REMOTE_INTEGRATION"):
        pytest.skip("SELENIUM_REMOTE_INTEGRATION not set")
    return Settings()
