"""httpx authentication backed by a credentials provider.

``CredentialsProviderAuth`` sends each request as-is. When the server (401)
or a proxy (407) answers with a challenge, it asks the provider for
credentials matching the challenge's scheme and realm and retries once.
Proxy challenges are scoped to the proxy passed as ``proxy``; without one
a 407 is returned unanswered.

| Challenge | 401 (server)               | 407 (proxy)                      |
|-----------|----------------------------|----------------------------------|
| Basic     | ``Authorization: Basic``   | ``Proxy-Authorization: Basic``   |
| Digest    | delegated to DigestAuth    | not supported                    |
| other     | response returned as-is    | response returned as-is          |

Example:
    ```python
    import httpx

    from http_credentials_core.auth import SystemDefaultCredentialsProvider
    from http_credentials_core.transport import CredentialsProviderAuth

    proxy = "http://proxy.internal:3128"
    auth = CredentialsProviderAuth(SystemDefaultCredentialsProvider(), proxy=proxy)

    async with httpx.AsyncClient(auth=auth, proxy=proxy) as client:
        response = await client.get("https://intranet.example.com/report")
    ```
"""

import logging
from base64 import b64encode
from collections.abc import AsyncGenerator, Generator
from dataclasses import dataclass, field
from urllib.request import parse_http_list

import httpx

from http_credentials_core.auth.context import HttpContext
from http_credentials_core.auth.models import Credentials
from http_credentials_core.auth.provider import SystemDefaultCredentialsProvider
from http_credentials_core.auth.schemes import BASIC, DIGEST
from http_credentials_core.auth.scope import AuthScope, Origin

logger = logging.getLogger(__name__)

DEFAULT_PORTS = {"http": 80, "https": 443}


@dataclass(frozen=True)
class Challenge:
    """One challenge from a ``WWW-Authenticate`` or ``Proxy-Authenticate`` header."""

    scheme: str
    params: dict[str, str] = field(default_factory=dict)

    @property
    def realm(self) -> str | None:
        return self.params.get("realm")


def parse_challenges(header: str) -> list[Challenge]:
    """Split an authenticate header into its challenges.

    Args:
        header: Header value, e.g. ``'Negotiate, Basic realm="corp"'``.

    Returns:
        Challenges in header order. Token68 data is ignored.
    """
    challenges: list[Challenge] = []
    for item in parse_http_list(header):
        item = item.strip()
        if not item:
            continue
        first, _, rest = item.partition(" ")
        if "=" in first and challenges:
            # Parameter continuing the previous challenge
            _add_param(challenges[-1].params, item)
            continue
        challenge = Challenge(scheme=first)
        if rest.strip():
            _add_param(challenge.params, rest.strip())
        challenges.append(challenge)
    return challenges


def _add_param(params: dict[str, str], item: str) -> None:
    name, sep, value = item.partition("=")
    if not sep:
        return
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] == '"':
        value = value[1:-1]
    params[name.strip().lower()] = value


class CredentialsProviderAuth(httpx.Auth):
    """httpx ``Auth`` that answers server and proxy challenges from a provider.

    The blocking provider lookup runs on a worker thread in async clients.

    Args:
        provider: Provider to ask for credentials.
        proxy: URL of the proxy the client sends requests through. Proxy
            (407) challenges are resolved against this host and port.
    """

    def __init__(self, provider: SystemDefaultCredentialsProvider, proxy: httpx.URL | str | None = None):
        self._provider = provider
        self._proxy = httpx.URL(proxy) if proxy is not None else None

    def sync_auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        response = yield request

        selected = self._select_challenge(response)
        if selected is None:
            return
        scope = self._scope_for(request, response, selected)
        if scope is None:
            return
        credentials = self._provider.get_credentials(scope, HttpContext.for_request(request))

        retry = self._authenticate(request, response, selected, credentials)
        if retry is not None:
            yield retry

    async def async_auth_flow(self, request: httpx.Request) -> AsyncGenerator[httpx.Request, httpx.Response]:
        response = yield request

        selected = self._select_challenge(response)
        if selected is None:
            return
        scope = self._scope_for(request, response, selected)
        if scope is None:
            return
        credentials = await self._provider.aget_credentials(scope, HttpContext.for_request(request))

        retry = self._authenticate(request, response, selected, credentials)
        if retry is not None:
            yield retry

    def _select_challenge(self, response: httpx.Response) -> Challenge | None:
        if response.status_code == 401:
            header = response.headers.get("www-authenticate")
            supported = (DIGEST.upper(), BASIC.upper())
        elif response.status_code == 407:
            header = response.headers.get("proxy-authenticate")
            supported = (BASIC.upper(),)
        else:
            return None

        if not header:
            return None

        challenges = {c.scheme.upper(): c for c in reversed(parse_challenges(header))}
        for scheme in supported:
            if scheme in challenges:
                return challenges[scheme]

        logger.debug(f"No supported challenge in {header!r} (HTTP {response.status_code})")
        return None

    def _scope_for(self, request: httpx.Request, response: httpx.Response, challenge: Challenge) -> AuthScope | None:
        if response.status_code == 407:
            if self._proxy is None:
                logger.debug(f"Proxy challenge for {request.url.host} but no proxy configured")
                return None
            url = self._proxy
        else:
            url = request.url
        port = url.port if url.port is not None else DEFAULT_PORTS.get(url.scheme, -1)
        origin = Origin(url.scheme, url.host, port)
        return AuthScope.for_origin(origin, realm=challenge.realm, scheme=challenge.scheme)

    def _authenticate(
        self,
        request: httpx.Request,
        response: httpx.Response,
        challenge: Challenge,
        credentials: Credentials | None,
    ) -> httpx.Request | None:
        if credentials is None:
            logger.debug(f"No credentials for {challenge.scheme} challenge from {request.url.host}")
            return None

        if challenge.scheme.upper() == DIGEST.upper():
            digest_flow = httpx.DigestAuth(credentials.user_principal, credentials.password).auth_flow(request)
            next(digest_flow)
            try:
                return digest_flow.send(response)
            except StopIteration:
                return None

        token = b64encode(f"{credentials.user_principal}:{credentials.password}".encode()).decode("ascii")
        header = "Proxy-Authorization" if response.status_code == 407 else "Authorization"
        request.headers[header] = f"Basic {token}"
        return request
