"""HTTP Credentials Core - Credential resolution for outgoing HTTP requests.

This library resolves the credential to present for a protection space
(host, port, realm, scheme) by combining two tiers:
- Explicitly registered credentials (highest priority)
- Host-level credentials (netrc/prompt callbacks, proxy environment settings)

Example:
    ```python
    import httpx

    from http_credentials_core.auth import AuthScope, SystemDefaultCredentialsProvider
    from http_credentials_core.auth.models import UsernamePasswordCredentials
    from http_credentials_core.transport import CredentialsProviderAuth

    provider = SystemDefaultCredentialsProvider()
    provider.set_credentials(
        AuthScope("api.example.com", 443),
        UsernamePasswordCredentials("alice", "s3cret"),
    )

    with httpx.Client(auth=CredentialsProviderAuth(provider)) as client:
        response = client.get("https://api.example.com/private")
    ```
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
