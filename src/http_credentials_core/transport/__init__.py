"""Transport-level integration with httpx.

Modules:
    auth: httpx ``Auth`` flow answering 401/407 challenges from a credentials provider

Example:
    ```python
    import httpx

    from http_credentials_core.auth import SystemDefaultCredentialsProvider
    from http_credentials_core.transport import CredentialsProviderAuth

    client = httpx.Client(auth=CredentialsProviderAuth(SystemDefaultCredentialsProvider()))
    ```
"""

from http_credentials_core.transport.auth import Challenge, CredentialsProviderAuth, parse_challenges

__all__ = ["Challenge", "CredentialsProviderAuth", "parse_challenges"]
