"""Pytest configuration and shared fixtures for http-credentials-core tests."""

import pytest

from http_credentials_core.auth.properties import MappingProperties


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    """Auto-cleanup: Clear proxy/NTLM properties and netrc overrides before each test.

    This prevents the developer's own proxy settings leaking into resolution tests.
    """
    import os

    for key in list(os.environ.keys()):
        if key.startswith("http.") or key == "NETRC":
            monkeypatch.delenv(key, raising=False)

    yield


@pytest.fixture
def no_properties():
    """Empty property source: no proxy settings, no NTLM domain."""
    return MappingProperties()


@pytest.fixture
def proxy_properties():
    """Property source describing an authenticated environment proxy."""
    return MappingProperties(
        {
            "http.proxyHost": "proxy.example.com",
            "http.proxyPort": "8080",
            "http.proxyUser": "alice",
            "http.proxyPassword": "secret",
        }
    )
