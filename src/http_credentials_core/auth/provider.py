"""Credentials provider combining explicit and system credentials.

Resolution order (highest to lowest priority):
1. Credentials registered with :meth:`SystemDefaultCredentialsProvider.set_credentials`
2. Host prompt (server, then proxy)
3. Proxy environment settings

Example:
    ```python
    from http_credentials_core.auth import AuthScope, SystemDefaultCredentialsProvider
    from http_credentials_core.auth.models import UsernamePasswordCredentials
    from http_credentials_core.auth.prompt import NetrcPrompt

    provider = SystemDefaultCredentialsProvider(prompt=NetrcPrompt("~/.netrc"))

    # Explicit registrations always win
    provider.set_credentials(AuthScope("api.example.com", 443), UsernamePasswordCredentials("alice", "pw"))
    provider.get_credentials(AuthScope("api.example.com", 443, realm="admin", scheme="basic"))

    # Anything else falls back to netrc and the proxy environment
    provider.get_credentials(AuthScope("files.example.com", 443, scheme="basic"))
    ```

Security Considerations:
    - Resolved credentials are not cached; each call resolves afresh
    - Prompt failures propagate instead of being reported as "no credentials"
"""

import asyncio
import logging

from http_credentials_core.auth.context import RequestContext
from http_credentials_core.auth.exceptions import InvalidAuthScopeError
from http_credentials_core.auth.models import Credentials
from http_credentials_core.auth.prompt import CredentialPrompt, NetrcPrompt
from http_credentials_core.auth.properties import EnvironmentProperties, PropertySource
from http_credentials_core.auth.scope import AuthScope
from http_credentials_core.auth.store import BasicCredentialsStore, CredentialsStore
from http_credentials_core.auth.system import SystemCredentialResolver, build_credentials

logger = logging.getLogger(__name__)


class SystemDefaultCredentialsProvider:
    """Credentials store that falls back to host-level credentials.

    Explicitly registered credentials are returned as-is. Only when none
    match does the provider ask the host system, and system credentials
    are never written back to the store.

    The provider is safe to share between threads. Lookups may block on
    the prompt; use :meth:`aget_credentials` from async code.

    Args:
        store: Store of explicit credentials. Defaults to a new
            :class:`BasicCredentialsStore`.
        prompt: Host credential prompt. Defaults to :class:`NetrcPrompt`.
        properties: Source of proxy/NTLM settings. Defaults to
            :class:`EnvironmentProperties`.
    """

    def __init__(
        self,
        store: CredentialsStore | None = None,
        prompt: CredentialPrompt | None = None,
        properties: PropertySource | None = None,
    ):
        self._store = store if store is not None else BasicCredentialsStore()
        self._properties = properties if properties is not None else EnvironmentProperties()
        self._resolver = SystemCredentialResolver(
            prompt if prompt is not None else NetrcPrompt(),
            self._properties,
        )

    def set_credentials(self, scope: AuthScope, credentials: Credentials | None) -> None:
        """Register explicit credentials for ``scope``."""
        self._store.set_credentials(scope, credentials)

    def get_credentials(self, scope: AuthScope, context: RequestContext | None = None) -> Credentials | None:
        """Resolve the credentials to use for ``scope``.

        Args:
            scope: Scope being authenticated.
            context: Context of the request in flight, if any.

        Returns:
            Credentials, or None if neither tier has any.

        Raises:
            InvalidAuthScopeError: If ``scope`` is None.
            MalformedTargetURIError: If ``context`` holds a request whose URL
                cannot be parsed.
        """
        if scope is None:
            raise InvalidAuthScopeError("Auth scope may not be None")

        local_credentials = self._store.get_credentials(scope, context)
        if local_credentials is not None:
            logger.debug(f"Using explicitly registered credentials for {scope}")
            return local_credentials

        if scope.host is None:
            return None

        system_credentials = self._resolver.resolve(scope, context)
        if system_credentials is None:
            logger.debug(f"No credentials found for {scope}")
            return None

        return build_credentials(system_credentials, scope, self._properties)

    async def aget_credentials(self, scope: AuthScope, context: RequestContext | None = None) -> Credentials | None:
        """Async variant of :meth:`get_credentials` running on a worker thread."""
        return await asyncio.to_thread(self.get_credentials, scope, context)

    def clear(self) -> None:
        """Remove all explicitly registered credentials."""
        self._store.clear()
