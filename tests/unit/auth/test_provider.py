"""Tests for SystemDefaultCredentialsProvider."""

import httpx
import pytest

from http_credentials_core.auth import (
    AuthScope,
    BasicCredentialsStore,
    HttpContext,
    InvalidAuthScopeError,
    NTCredentials,
    SystemDefaultCredentialsProvider,
    UsernamePasswordCredentials,
)
from http_credentials_core.auth.prompt import NoPrompt
from http_credentials_core.auth.properties import EnvironmentProperties, MappingProperties
from http_credentials_core.testing import FailingPrompt, RecordingPrompt

EXPLICIT = UsernamePasswordCredentials("explicit", "pw")


class TestExplicitCredentials:
    """Test that explicit registrations short-circuit system resolution."""

    def test_explicit_credentials_returned_without_prompting(self, proxy_properties):
        provider = SystemDefaultCredentialsProvider(prompt=FailingPrompt(), properties=proxy_properties)
        provider.set_credentials(AuthScope("proxy.example.com", 8080), EXPLICIT)

        assert provider.get_credentials(AuthScope("proxy.example.com", 8080)) is EXPLICIT

    def test_explicit_wildcard_match(self, no_properties):
        provider = SystemDefaultCredentialsProvider(prompt=FailingPrompt(), properties=no_properties)
        provider.set_credentials(AuthScope("h"), EXPLICIT)

        assert provider.get_credentials(AuthScope("h", 443, realm="r", scheme="basic")) is EXPLICIT

    def test_explicit_credentials_not_rewritten_by_ntlm_domain(self):
        properties = MappingProperties({"http.auth.ntlm.domain": "CORP"})
        provider = SystemDefaultCredentialsProvider(prompt=FailingPrompt(), properties=properties)
        provider.set_credentials(AuthScope("h", 80), EXPLICIT)

        assert provider.get_credentials(AuthScope("h", 80, scheme="basic")) is EXPLICIT

    def test_clear_falls_through_to_system(self):
        prompt = RecordingPrompt(server=("system", "pw"))
        provider = SystemDefaultCredentialsProvider(prompt=prompt, properties=MappingProperties())
        provider.set_credentials(AuthScope("h", 80), EXPLICIT)
        assert provider.get_credentials(AuthScope("h", 80)) is EXPLICIT
        assert prompt.calls == []

        provider.clear()

        assert provider.get_credentials(AuthScope("h", 80)) == UsernamePasswordCredentials("system", "pw")
        assert len(prompt.calls) == 1

    def test_uses_supplied_store(self, no_properties):
        store = BasicCredentialsStore()
        store.set_credentials(AuthScope("h", 80), EXPLICIT)
        provider = SystemDefaultCredentialsProvider(store=store, prompt=FailingPrompt(), properties=no_properties)

        assert provider.get_credentials(AuthScope("h", 80)) is EXPLICIT

    def test_system_credentials_not_stored(self):
        store = BasicCredentialsStore()
        provider = SystemDefaultCredentialsProvider(
            store=store,
            prompt=RecordingPrompt(server=("system", "pw")),
            properties=MappingProperties(),
        )

        provider.get_credentials(AuthScope("h", 80))

        assert len(store) == 0


class TestSystemCredentials:
    """Test fallback to host-level credentials."""

    def test_none_scope_rejected(self, no_properties):
        provider = SystemDefaultCredentialsProvider(prompt=NoPrompt(), properties=no_properties)

        with pytest.raises(InvalidAuthScopeError):
            provider.get_credentials(None, HttpContext())

    def test_scope_without_host_skips_system(self, no_properties):
        provider = SystemDefaultCredentialsProvider(prompt=FailingPrompt(), properties=no_properties)
        assert provider.get_credentials(AuthScope(port=80)) is None

    def test_nothing_found(self, no_properties):
        provider = SystemDefaultCredentialsProvider(prompt=NoPrompt(), properties=no_properties)
        assert provider.get_credentials(AuthScope("h", 80)) is None

    def test_proxy_environment(self, proxy_properties):
        provider = SystemDefaultCredentialsProvider(prompt=NoPrompt(), properties=proxy_properties)

        assert provider.get_credentials(AuthScope("proxy.example.com", 8080)) == UsernamePasswordCredentials(
            "alice", "secret"
        )
        assert provider.get_credentials(AuthScope("other.example.com", 80)) is None

    def test_proxy_environment_bad_port(self):
        properties = MappingProperties(
            {
                "http.proxyHost": "proxy.example.com",
                "http.proxyPort": "notanumber",
                "http.proxyUser": "alice",
                "http.proxyPassword": "secret",
            }
        )
        provider = SystemDefaultCredentialsProvider(prompt=NoPrompt(), properties=properties)

        assert provider.get_credentials(AuthScope("proxy.example.com", 8080)) is None

    def test_proxy_environment_out_of_range_port(self):
        properties = MappingProperties(
            {
                "http.proxyHost": "proxy.example.com",
                "http.proxyPort": "99999999999",
                "http.proxyUser": "alice",
            }
        )
        provider = SystemDefaultCredentialsProvider(prompt=NoPrompt(), properties=properties)

        assert provider.get_credentials(AuthScope("proxy.example.com")) is None

    def test_ntlm_domain_override(self):
        properties = MappingProperties({"http.auth.ntlm.domain": "CORP"})
        provider = SystemDefaultCredentialsProvider(prompt=RecordingPrompt(server=("alice", "pw")), properties=properties)

        result = provider.get_credentials(AuthScope("h", 80, scheme="Basic"))

        assert result == NTCredentials("alice", "pw", None, "CORP")

    def test_ntlm_scheme(self, no_properties):
        provider = SystemDefaultCredentialsProvider(
            prompt=RecordingPrompt(server=("alice", "pw")), properties=no_properties
        )

        result = provider.get_credentials(AuthScope("h", 80, scheme="ntlm"))

        assert isinstance(result, NTCredentials)
        assert result.domain is None

    def test_context_url_reaches_prompt(self, no_properties):
        prompt = RecordingPrompt()
        provider = SystemDefaultCredentialsProvider(prompt=prompt, properties=no_properties)
        context = HttpContext.for_request(httpx.Request("GET", "https://h/private"))

        provider.get_credentials(AuthScope("h", 443), context)

        assert prompt.calls[0].url == httpx.URL("https://h/private")

    def test_reads_environment_by_default(self, monkeypatch):
        monkeypatch.setenv("http.proxyHost", "proxy.example.com")
        monkeypatch.setenv("http.proxyPort", "3128")
        monkeypatch.setenv("http.proxyUser", "env-user")
        provider = SystemDefaultCredentialsProvider(
            prompt=NoPrompt(), properties=EnvironmentProperties(load_dotenv=False)
        )

        assert provider.get_credentials(AuthScope("proxy.example.com", 3128)) == UsernamePasswordCredentials(
            "env-user", ""
        )

    def test_netrc_prompt_by_default(self, tmp_path, monkeypatch):
        netrc_file = tmp_path / "netrc"
        netrc_file.write_text("machine h login netrc-user password netrc-pw\n")
        netrc_file.chmod(0o600)
        monkeypatch.setenv("NETRC", str(netrc_file))

        provider = SystemDefaultCredentialsProvider(properties=MappingProperties())

        assert provider.get_credentials(AuthScope("h", 443)) == UsernamePasswordCredentials("netrc-user", "netrc-pw")


class TestAsync:
    """Test the async wrapper."""

    async def test_aget_credentials(self, proxy_properties):
        provider = SystemDefaultCredentialsProvider(prompt=NoPrompt(), properties=proxy_properties)

        result = await provider.aget_credentials(AuthScope("proxy.example.com", 8080))

        assert result == UsernamePasswordCredentials("alice", "secret")

    async def test_aget_credentials_propagates_errors(self, no_properties):
        provider = SystemDefaultCredentialsProvider(prompt=NoPrompt(), properties=no_properties)

        with pytest.raises(InvalidAuthScopeError):
            await provider.aget_credentials(None)
