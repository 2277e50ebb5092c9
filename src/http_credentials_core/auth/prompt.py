"""Host-level credential prompts.

A prompt is asked for credentials when nothing was registered explicitly.
Implementations may block (reading files, asking a user, calling a
keychain), so callers should keep them off latency-sensitive paths.

Available prompts:
- NoPrompt: never returns credentials
- NetrcPrompt: reads host credentials from a netrc file
- CallbackPrompt: delegates to a user-supplied function

Example:
    ```python
    from http_credentials_core.auth import SystemDefaultCredentialsProvider
    from http_credentials_core.auth.models import PasswordAuthentication
    from http_credentials_core.auth.prompt import CallbackPrompt, RequestorType


    def ask(request):
        if request.requestor_type is RequestorType.PROXY:
            return PasswordAuthentication("proxy-user", "proxy-pass")
        return None


    provider = SystemDefaultCredentialsProvider(prompt=CallbackPrompt(ask))
    ```
"""

import enum
import logging
import netrc
import os
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

import httpx

from http_credentials_core.auth.models import PasswordAuthentication

logger = logging.getLogger(__name__)


class RequestorType(enum.Enum):
    """Which party is asking the user to authenticate."""

    SERVER = "server"
    PROXY = "proxy"


@dataclass(frozen=True)
class PromptRequest:
    """Everything known about a credential request, handed to callbacks."""

    host: str
    address: str | None
    port: int
    protocol: str
    realm: str | None
    scheme: str | None
    url: httpx.URL | None
    requestor_type: RequestorType


class CredentialPrompt(Protocol):
    """Protocol for host credential prompts."""

    def request_password_authentication(
        self,
        host: str,
        address: str | None,
        port: int,
        protocol: str,
        realm: str | None,
        scheme: str | None,
        url: httpx.URL | None,
        requestor_type: RequestorType,
    ) -> PasswordAuthentication | None:
        """Ask the host system for credentials.

        Args:
            host: Host name requesting authentication.
            address: Resolved address of the host, if known.
            port: Port of the requesting host.
            protocol: URL scheme of the connection ("http" or "https").
            realm: Realm label from the challenge.
            scheme: Host-facing scheme name (see ``translate_scheme``).
            url: URL of the request that triggered the challenge, if known.
            requestor_type: Whether a server or a proxy is asking.

        Returns:
            User name and password, or None if the host has none to offer.
        """
        ...


class NoPrompt:
    """Prompt that never supplies credentials."""

    def request_password_authentication(self, host, address, port, protocol, realm, scheme, url, requestor_type):
        return None


class NetrcPrompt:
    """Prompt backed by a netrc file.

    Only server requests are answered; netrc has no notion of proxies.
    The file path comes from ``path``, else the ``NETRC`` environment
    variable, else ``~/.netrc``. A missing file means no credentials; a
    malformed one raises ``netrc.NetrcParseError``.

    Args:
        path: Explicit netrc path.
    """

    def __init__(self, path: str | Path | None = None):
        self._path = path

    def _netrc_path(self) -> Path:
        if self._path is not None:
            return Path(os.path.expanduser(str(self._path)))
        from_env = os.environ.get("NETRC")
        if from_env:
            return Path(os.path.expanduser(from_env))
        return Path.home() / ".netrc"

    def request_password_authentication(self, host, address, port, protocol, realm, scheme, url, requestor_type):
        if requestor_type is not RequestorType.SERVER:
            return None

        path = self._netrc_path()
        if not path.is_file():
            logger.debug(f"No netrc file at {path}")
            return None

        authenticators = netrc.netrc(str(path)).authenticators(host)
        if authenticators is None:
            return None

        login, _account, password = authenticators
        if not login:
            return None
        logger.debug(f"Resolved credentials for {host} from netrc file {path} (***)")
        return PasswordAuthentication(login, password or "")


class CallbackPrompt:
    """Prompt that delegates to a function taking a :class:`PromptRequest`.

    Exceptions raised by the callback propagate to the caller.
    """

    def __init__(self, callback: Callable[[PromptRequest], PasswordAuthentication | None]):
        self._callback = callback

    def request_password_authentication(self, host, address, port, protocol, realm, scheme, url, requestor_type):
        request = PromptRequest(
            host=host,
            address=address,
            port=port,
            protocol=protocol,
            realm=realm,
            scheme=scheme,
            url=url,
            requestor_type=requestor_type,
        )
        return self._callback(request)
