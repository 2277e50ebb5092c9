"""Per-request execution context."""

from typing import Any, Protocol

import httpx

from http_credentials_core.auth.exceptions import MalformedTargetURIError

HTTP_REQUEST = "current-request"


class RequestContext(Protocol):
    """Attribute bag describing the request being executed."""

    def get_attribute(self, name: str) -> Any:
        ...


class HttpContext:
    """Dict-backed :class:`RequestContext`.

    Example:
        ```python
        context = HttpContext.for_request(httpx.Request("GET", "https://api.example.com/items"))
        context.get_attribute(HTTP_REQUEST).url.host  # 'api.example.com'
        ```
    """

    def __init__(self, attributes: dict[str, Any] | None = None):
        self._attributes = dict(attributes or {})

    @classmethod
    def for_request(cls, request: Any) -> "HttpContext":
        return cls({HTTP_REQUEST: request})

    def get_attribute(self, name: str) -> Any:
        return self._attributes.get(name)

    def set_attribute(self, name: str, value: Any) -> None:
        self._attributes[name] = value

    def remove_attribute(self, name: str) -> Any:
        return self._attributes.pop(name, None)


def get_target_host_url(context: RequestContext | None) -> httpx.URL | None:
    """Return the absolute URL of the request held by ``context``.

    Args:
        context: Request context, or None when the caller has no request
            in flight (e.g. looking credentials up ahead of time).

    Returns:
        Parsed request URL, or None when no context was supplied.

    Raises:
        MalformedTargetURIError: If the context holds no request, or its URL
            is not an absolute URL with a scheme and host.
    """
    if context is None:
        return None

    request = context.get_attribute(HTTP_REQUEST)
    if request is None:
        raise MalformedTargetURIError("Request context does not hold a current request")

    uri = str(request.url)
    try:
        url = httpx.URL(uri)
    except httpx.InvalidURL as e:
        raise MalformedTargetURIError(f"Unexpected request url format: {uri}", uri=uri) from e

    if not url.scheme or not url.host:
        raise MalformedTargetURIError(f"Unexpected request url format: {uri}", uri=uri)
    return url
