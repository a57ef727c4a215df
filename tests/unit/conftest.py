"""Pytest configuration and shared fixtures for unit tests."""

import pytest
import resendpager
from resendpager import Credentials, PageFetcher, Paginator

from tests.unit.fixtures import API_KEY, FakeTransport


@pytest.fixture
def transport_factory():
    """Create a ``FakeTransport`` and a paginator wired to it."""

    def _make(responses=None, factory=None):
        transport = FakeTransport(responses, factory)
        fetcher = PageFetcher(Credentials(API_KEY), transport=transport)
        return transport, Paginator(fetcher)

    return _make


@pytest.fixture
def logged_in():
    """Log the module-level API in for the duration of a test."""
    auth = resendpager.login(api_key=API_KEY)
    yield auth
    auth.logout()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep the caller's Resend settings out of the tests."""
    for var in ("RESEND_API_KEY", "RESEND_API_URL", "RESEND_TIMEOUT", "RESEND_MAX_RETRIES"):
        monkeypatch.delenv(var, raising=False)
