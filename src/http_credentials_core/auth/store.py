"""In-memory store of explicitly registered credentials."""

import logging
from threading import Lock
from typing import Any, Protocol

from http_credentials_core.auth.models import Credentials
from http_credentials_core.auth.scope import AuthScope

logger = logging.getLogger(__name__)


class CredentialsStore(Protocol):
    """Protocol for stores of explicitly registered credentials."""

    def set_credentials(self, scope: AuthScope, credentials: Credentials | None) -> None:
        """Register ``credentials`` for ``scope``, replacing any existing entry."""
        ...

    def get_credentials(self, scope: AuthScope, context: Any = None) -> Credentials | None:
        """Return the credentials registered for ``scope``, or None."""
        ...

    def clear(self) -> None:
        """Remove every registered credential."""
        ...


class BasicCredentialsStore:
    """Thread-safe, dict-backed :class:`CredentialsStore`.

    Lookups try the exact scope first, then fall back to the registered
    scope that matches best (highest non-negative :meth:`AuthScope.match`).

    Example:
        ```python
        store = BasicCredentialsStore()
        store.set_credentials(AuthScope("api.example.com"), UsernamePasswordCredentials("alice", "pw"))

        # Any port / realm / scheme on that host matches the wildcard entry
        store.get_credentials(AuthScope("api.example.com", 443, realm="admin"))
        ```
    """

    def __init__(self) -> None:
        self._credentials: dict[AuthScope, Credentials] = {}
        self._lock = Lock()

    def set_credentials(self, scope: AuthScope, credentials: Credentials | None) -> None:
        if scope is None:
            raise ValueError("Auth scope may not be None")
        if credentials is None:
            with self._lock:
                removed = self._credentials.pop(scope, None)
            if removed is not None:
                logger.debug(f"Removed credentials for {scope}")
            return

        with self._lock:
            self._credentials[scope] = credentials
        logger.debug(f"Registered credentials for {scope}")

    def get_credentials(self, scope: AuthScope, context: Any = None) -> Credentials | None:
        if scope is None:
            raise ValueError("Auth scope may not be None")
        with self._lock:
            credentials = self._credentials.get(scope)
            if credentials is not None:
                return credentials

            best_match = -1
            for candidate, candidate_credentials in self._credentials.items():
                factor = scope.match(candidate)
                if factor > best_match:
                    best_match = factor
                    credentials = candidate_credentials
            return credentials

    def clear(self) -> None:
        with self._lock:
            self._credentials.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._credentials)

    def __repr__(self) -> str:
        with self._lock:
            scopes = ", ".join(str(scope) for scope in self._credentials)
        return f"{type(self).__name__}([{scopes}])"
