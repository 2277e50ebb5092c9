"""Credential resolution for outgoing HTTP requests.

This module provides:
- Authentication scopes with wildcard matching
- A thread-safe store for explicitly registered credentials
- Fallback to host-level credentials (netrc, prompt callbacks, proxy settings)
- NTLM-aware credential construction

Example:
    ```python
    from http_credentials_core.auth import AuthScope, SystemDefaultCredentialsProvider

    provider = SystemDefaultCredentialsProvider()
    credentials = provider.get_credentials(AuthScope("api.example.com", 443, scheme="basic"))
    ```
"""

from http_credentials_core.auth.context import HTTP_REQUEST, HttpContext
from http_credentials_core.auth.exceptions import (
    CredentialError,
    InvalidAuthScopeError,
    MalformedTargetURIError,
)
from http_credentials_core.auth.models import (
    Credentials,
    NTCredentials,
    PasswordAuthentication,
    UsernamePasswordCredentials,
)
from http_credentials_core.auth.provider import SystemDefaultCredentialsProvider
from http_credentials_core.auth.scope import ANY_PORT, AuthScope, Origin
from http_credentials_core.auth.store import BasicCredentialsStore

__all__ = [
    "ANY_PORT",
    "AuthScope",
    "BasicCredentialsStore",
    "CredentialError",
    "Credentials",
    "HTTP_REQUEST",
    "HttpContext",
    "InvalidAuthScopeError",
    "MalformedTargetURIError",
    "NTCredentials",
    "Origin",
    "PasswordAuthentication",
    "SystemDefaultCredentialsProvider",
    "UsernamePasswordCredentials",
]
