"""Pytest configuration and shared fixtures for tumblr-client tests."""

import pytest

from tumblr_client import TumblrClient
from tumblr_client.testing import DUMMY_API_URL, DUMMY_CREDENTIALS, RecordingTransport


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    """Auto-cleanup: Clear credential environment variables before each test.

    This prevents a developer's real Tumblr credentials from leaking into tests.
    """
    import os

    test_prefixes = ("TEST_", "TUMBLR_")

    for key in list(os.environ.keys()):
        if any(key.startswith(prefix) for prefix in test_prefixes):
            monkeypatch.delenv(key, raising=False)

    yield


@pytest.fixture
def transport():
    """Mock transport answering every request with an empty success envelope."""
    return RecordingTransport()


@pytest.fixture
async def oauth_client(transport):
    """Client with full OAuth1 credentials talking to the mock transport."""
    client = TumblrClient(**DUMMY_CREDENTIALS, base_url=DUMMY_API_URL, transport=transport)
    yield client
    await client.aclose()
