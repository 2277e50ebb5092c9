"""Testing utilities for code that resolves HTTP credentials.

Fakes for the provider's collaborators so tests can control the host
prompt and configuration without touching ``~/.netrc`` or ``os.environ``.

Example:
    ```python
    from http_credentials_core.auth import AuthScope, SystemDefaultCredentialsProvider
    from http_credentials_core.auth.properties import MappingProperties
    from http_credentials_core.testing import RecordingPrompt


    def test_proxy_prompt_is_used():
        prompt = RecordingPrompt(proxy=("bob", "pw"))
        provider = SystemDefaultCredentialsProvider(prompt=prompt, properties=MappingProperties())

        credentials = provider.get_credentials(AuthScope("proxy.local", 3128))

        assert credentials.username == "bob"
        assert [call.requestor_type.name for call in prompt.calls] == ["SERVER", "PROXY"]
    ```
"""

from http_credentials_core.auth.models import PasswordAuthentication
from http_credentials_core.auth.prompt import PromptRequest, RequestorType


class RecordingPrompt:
    """Prompt returning canned answers per requestor type and recording every call.

    Args:
        server: (username, password) returned for SERVER requests, or None.
        proxy: (username, password) returned for PROXY requests, or None.
    """

    def __init__(self, server: tuple[str, str] | None = None, proxy: tuple[str, str] | None = None):
        self._answers = {
            RequestorType.SERVER: PasswordAuthentication(*server) if server else None,
            RequestorType.PROXY: PasswordAuthentication(*proxy) if proxy else None,
        }
        self.calls: list[PromptRequest] = []

    def request_password_authentication(self, host, address, port, protocol, realm, scheme, url, requestor_type):
        self.calls.append(
            PromptRequest(
                host=host,
                address=address,
                port=port,
                protocol=protocol,
                realm=realm,
                scheme=scheme,
                url=url,
                requestor_type=requestor_type,
            )
        )
        return self._answers[requestor_type]


class FailingPrompt:
    """Prompt that raises whenever it is asked."""

    def __init__(self, error: Exception | None = None):
        self._error = error or AssertionError("host prompt must not be consulted")

    def request_password_authentication(self, host, address, port, protocol, realm, scheme, url, requestor_type):
        raise self._error


__all__ = ["FailingPrompt", "RecordingPrompt"]
