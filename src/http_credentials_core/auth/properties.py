"""Configuration lookups for proxy and NTLM settings.

System credential resolution reads a handful of well-known keys:

- ``http.proxyHost`` / ``http.proxyPort``: proxy the environment credentials apply to
- ``http.proxyUser`` / ``http.proxyPassword``: proxy user name and password
- ``http.auth.ntlm.domain``: forces NTLM credentials with this domain

Keys are looked up verbatim through a :class:`PropertySource`:

- EnvironmentProperties: ``os.environ`` plus an optional .env file (python-dotenv)
- MappingProperties: a plain mapping supplied by the caller

Example:
    ```python
    from http_credentials_core.auth.properties import EnvironmentProperties, ProxySettings

    # .env
    # http.proxyHost=proxy.internal
    # http.proxyPort=3128
    properties = EnvironmentProperties(dotenv_path="/app/.env")
    settings = ProxySettings.from_properties(properties)
    settings.scope()  # AuthScope(host='proxy.internal', port=3128, ...)
    ```

Security Considerations:
    - Property values are never logged in full (masked with ***)
    - Thread-safe dotenv loading with lock
"""

import logging
import os
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from threading import Lock
from typing import Protocol

from dotenv import load_dotenv

from http_credentials_core.auth.scope import AuthScope

logger = logging.getLogger(__name__)

PROXY_HOST = "http.proxyHost"
PROXY_PORT = "http.proxyPort"
PROXY_USER = "http.proxyUser"
PROXY_PASSWORD = "http.proxyPassword"
NTLM_DOMAIN = "http.auth.ntlm.domain"

_PORT_PATTERN = re.compile(r"\+?[0-9]{1,5}")
MAX_PORT = 65535


class PropertySource(Protocol):
    """Read-only key/value lookup."""

    def get(self, key: str) -> str | None:
        """Return the value for ``key`` or None if unset."""
        ...


class MappingProperties:
    """Property source backed by a caller-supplied mapping.

    The mapping is copied, so later changes to it are not seen.
    """

    def __init__(self, values: Mapping[str, str] | None = None):
        self._values = dict(values or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)


class EnvironmentProperties:
    """Property source backed by environment variables and a .env file.

    The .env file is loaded into ``os.environ`` once, before the first
    lookup. Variables already set in the environment win over .env values.

    Attributes:
        _dotenv_loaded: Whether .env file has been loaded.
        _dotenv_lock: Thread lock for safe dotenv loading.
    """

    def __init__(self, dotenv_path: str | Path | None = None, load_dotenv: bool = True):
        """Initialize environment property source.

        Args:
            dotenv_path: Path to .env file. If None, searches parent directories
                for .env file (default behavior of python-dotenv).
            load_dotenv: Whether to load .env file. Set to False to read
                only the process environment.
        """
        self._dotenv_loaded = False
        self._dotenv_lock = Lock()
        self._dotenv_path = dotenv_path
        self._load_dotenv_enabled = load_dotenv

    def _ensure_dotenv_loaded(self) -> None:
        """Ensure .env file is loaded (thread-safe)."""
        if self._dotenv_loaded or not self._load_dotenv_enabled:
            return

        with self._dotenv_lock:
            # Double-check pattern for thread safety
            if self._dotenv_loaded:
                return

            try:
                load_dotenv(dotenv_path=self._dotenv_path)
                logger.debug("Loaded .env file for property lookups")
            except OSError as e:
                logger.warning(f"Failed to load .env file: {e}")
            self._dotenv_loaded = True

    def get(self, key: str) -> str | None:
        self._ensure_dotenv_loaded()
        value = os.environ.get(key)
        if value is not None:
            logger.debug(f"Resolved property '{key}' from environment: ***")
        return value


@dataclass(frozen=True)
class ProxySettings:
    """Snapshot of the proxy-related properties.

    All four keys are read together so a single resolution sees one
    consistent view even if the environment changes concurrently.
    """

    host: str | None = None
    port: str | None = None
    user: str | None = None
    password: str | None = field(default=None, repr=False)

    @classmethod
    def from_properties(cls, properties: PropertySource) -> "ProxySettings":
        return cls(
            host=properties.get(PROXY_HOST),
            port=properties.get(PROXY_PORT),
            user=properties.get(PROXY_USER),
            password=properties.get(PROXY_PASSWORD),
        )

    def scope(self) -> AuthScope | None:
        """Return the scope of the configured proxy.

        Returns:
            AuthScope for the proxy host and port, or None when no proxy is
            configured. A port that is not an integer in 0..65535 counts as
            unconfigured.
        """
        if self.host is None or self.port is None:
            return None
        if not _PORT_PATTERN.fullmatch(self.port) or int(self.port) > MAX_PORT:
            logger.debug(f"Ignoring invalid {PROXY_PORT} value {self.port!r}")
            return None
        return AuthScope(self.host, int(self.port))
