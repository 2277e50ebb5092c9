"""Authentication scheme names and their host-facing spellings."""

from types import MappingProxyType

BASIC = "Basic"
DIGEST = "Digest"
NTLM = "NTLM"
SPNEGO = "Negotiate"
KERBEROS = "Kerberos"

# Keyed by the upper-cased internal token. Read-only after import.
SCHEME_MAP = MappingProxyType(
    {
        BASIC.upper(): "Basic",
        DIGEST.upper(): "Digest",
        NTLM.upper(): "NTLM",
        SPNEGO.upper(): "SPNEGO",
        "SPNEGO": "SPNEGO",
        KERBEROS.upper(): "Kerberos",
    }
)


def translate_scheme(token: str | None) -> str | None:
    """Translate an internal scheme token to the name host credential prompts expect.

    Lookup is case-insensitive. Unknown schemes are returned unchanged so
    they still reach the prompt with their original spelling.

    Args:
        token: Scheme token such as ``"basic"`` or ``"Negotiate"``.

    Returns:
        Canonical scheme name, the input itself when unknown, or None for None.
    """
    if token is None:
        return None
    return SCHEME_MAP.get(token.upper(), token)


def is_ntlm(scheme: str | None) -> bool:
    """Return True if ``scheme`` names NTLM (any case)."""
    return scheme is not None and scheme.upper() == NTLM.upper()
