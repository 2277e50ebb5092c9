"""Host-level (system) credential resolution.

Resolution order for a scope (first match wins):
1. Host prompt, asked as the server
2. Host prompt, asked as a proxy
3. Proxy environment settings (``http.proxyHost`` and friends)

The raw pair is then turned into typed credentials by
:func:`build_credentials`, which applies the NTLM rules.
"""

import logging

from http_credentials_core.auth.context import RequestContext, get_target_host_url
from http_credentials_core.auth.models import (
    Credentials,
    NTCredentials,
    PasswordAuthentication,
    UsernamePasswordCredentials,
)
from http_credentials_core.auth.properties import NTLM_DOMAIN, PropertySource, ProxySettings
from http_credentials_core.auth.prompt import CredentialPrompt, RequestorType
from http_credentials_core.auth.schemes import is_ntlm, translate_scheme
from http_credentials_core.auth.scope import AuthScope

logger = logging.getLogger(__name__)


class SystemCredentialResolver:
    """Look up a raw user name / password pair from the host system.

    Args:
        prompt: Host credential prompt to ask first.
        properties: Source of the proxy environment settings.
    """

    def __init__(self, prompt: CredentialPrompt, properties: PropertySource):
        self._prompt = prompt
        self._properties = properties

    def resolve(self, scope: AuthScope, context: RequestContext | None = None) -> PasswordAuthentication | None:
        """Resolve system credentials for ``scope``.

        Args:
            scope: Scope being authenticated. Must have a host.
            context: Context of the request in flight, if any.

        Returns:
            Raw credentials, or None if the host system has none.

        Raises:
            MalformedTargetURIError: If ``context`` holds a request whose URL
                cannot be parsed.
        """
        credentials = self._prompt_for(scope, RequestorType.SERVER, context)
        if credentials is not None:
            logger.debug(f"Resolved server credentials for {scope} from host prompt")
            return credentials

        credentials = self._prompt_for(scope, RequestorType.PROXY, context)
        if credentials is not None:
            logger.debug(f"Resolved proxy credentials for {scope} from host prompt")
            return credentials

        return self._from_proxy_settings(scope)

    def _prompt_for(
        self,
        scope: AuthScope,
        requestor_type: RequestorType,
        context: RequestContext | None,
    ) -> PasswordAuthentication | None:
        if scope.origin is not None:
            protocol = scope.origin.scheme_name
        else:
            protocol = "https" if scope.port == 443 else "http"

        target_url = get_target_host_url(context)
        # No address hint: an address mismatch would stop realm matching
        return self._prompt.request_password_authentication(
            scope.host,
            None,
            scope.port,
            protocol,
            scope.realm,
            translate_scheme(scope.scheme),
            target_url,
            requestor_type,
        )

    def _from_proxy_settings(self, scope: AuthScope) -> PasswordAuthentication | None:
        settings = ProxySettings.from_properties(self._properties)
        proxy_scope = settings.scope()
        if proxy_scope is None:
            return None
        if scope.match(proxy_scope) < 0:
            logger.debug(f"Proxy environment settings do not apply to {scope}")
            return None
        if settings.user is None:
            return None

        logger.debug(f"Resolved proxy credentials for {scope} from environment settings (***)")
        return PasswordAuthentication(settings.user, settings.password or "")


def build_credentials(
    raw: PasswordAuthentication,
    scope: AuthScope,
    properties: PropertySource,
) -> Credentials:
    """Turn a raw system pair into typed credentials.

    A configured ``http.auth.ntlm.domain`` always produces NTLM credentials
    for that domain, whatever the scheme. Otherwise an NTLM scope gets NTLM
    credentials without a domain (the user name may be ``DOMAIN\\user``)
    and anything else gets plain user name / password credentials.

    Args:
        raw: Raw user name and password.
        scope: Scope the credentials were resolved for.
        properties: Source of the NTLM domain setting.

    Returns:
        NTCredentials or UsernamePasswordCredentials.
    """
    domain = properties.get(NTLM_DOMAIN)
    if domain is not None:
        return NTCredentials(raw.username, raw.password, None, domain)
    if is_ntlm(scope.scheme):
        return NTCredentials(raw.username, raw.password, None, None)
    return UsernamePasswordCredentials(raw.username, raw.password)
