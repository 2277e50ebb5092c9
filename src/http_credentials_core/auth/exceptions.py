"""Custom exceptions for credential resolution.

"No credential found" is never an exception: every layer reports it as
``None``. The exceptions here cover caller mistakes and broken internal
state that must not be silently turned into "no credentials".

Example:
    ```python
    from http_credentials_core.auth.exceptions import InvalidAuthScopeError

    if scope is None:
        raise InvalidAuthScopeError("Auth scope may not be None")
    ```
"""


class CredentialError(Exception):
    """Root of the errors raised while resolving HTTP credentials.

    Catch this to handle both a bad lookup and a broken request context.
    """

    pass


class InvalidAuthScopeError(CredentialError, ValueError):
    """Raised when a credential lookup is made without an auth scope.

    Example:
        ```python
        try:
            provider.get_credentials(None)
        except InvalidAuthScopeError as e:
            print(f"Bad lookup: {e}")
        ```
    """

    pass


class MalformedTargetURIError(CredentialError, RuntimeError):
    """Raised when the in-flight request carries a URI that is not a usable URL.

    A request being executed should always have an absolute URL, so this
    signals an inconsistent request context rather than missing credentials.

    Attributes:
        uri: The offending request URI (None if the context had no request).
    """

    def __init__(self, message: str, uri: str | None = None):
        """Initialize MalformedTargetURIError.

        Args:
            message: Error message describing the problem.
            uri: The request URI that could not be parsed.
        """
        super().__init__(message)
        self.uri = uri
