"""Authentication scopes (protection spaces) and their matching rules."""

from dataclasses import dataclass

ANY_PORT = -1


@dataclass(frozen=True)
class Origin:
    """Target host a request is sent to (scheme, host, port)."""

    scheme_name: str
    host: str
    port: int = ANY_PORT

    def __post_init__(self) -> None:
        object.__setattr__(self, "scheme_name", self.scheme_name.lower())
        object.__setattr__(self, "host", self.host.lower())

    def __str__(self) -> str:
        if self.port == ANY_PORT:
            return f"{self.scheme_name}://{self.host}"
        return f"{self.scheme_name}://{self.host}:{self.port}"


@dataclass(frozen=True)
class AuthScope:
    """Protection space a credential applies to.

    ``None`` for host, realm or scheme and ``ANY_PORT`` for port act as
    wildcards. Hosts are stored lower-cased; schemes keep the caller's
    spelling and are compared case-insensitively.

    Attributes:
        host: Host name, or None for any host.
        port: Port number, or ANY_PORT for any port.
        realm: Realm label, or None for any realm.
        scheme: Authentication scheme name, or None for any scheme.
        origin: Origin the scope was derived from, if known.
    """

    host: str | None = None
    port: int = ANY_PORT
    realm: str | None = None
    scheme: str | None = None
    origin: Origin | None = None

    def __post_init__(self) -> None:
        if self.host is not None:
            object.__setattr__(self, "host", self.host.lower())
        if self.port < 0:
            object.__setattr__(self, "port", ANY_PORT)

    @classmethod
    def for_origin(cls, origin: Origin, realm: str | None = None, scheme: str | None = None) -> "AuthScope":
        """Build a scope for a concrete origin."""
        return cls(host=origin.host, port=origin.port, realm=realm, scheme=scheme, origin=origin)

    def match(self, other: "AuthScope") -> int:
        """Compare two scopes and return a specificity score.

        Each component that is equal on both sides adds to the score
        (origin 1, scheme 2, realm 4, port 8, host 16). A component that
        is concrete on both sides but different is a mismatch. A wildcard
        on either side neither adds nor disqualifies.

        Args:
            other: Scope to compare against.

        Returns:
            Non-negative score on a match, -1 when the scopes conflict.
        """
        factor = 0

        if self.origin == other.origin:
            factor += 1
        elif self.origin is not None and other.origin is not None:
            return -1

        this_scheme = self.scheme.upper() if self.scheme is not None else None
        that_scheme = other.scheme.upper() if other.scheme is not None else None
        if this_scheme == that_scheme:
            factor += 2
        elif this_scheme is not None and that_scheme is not None:
            return -1

        if self.realm == other.realm:
            factor += 4
        elif self.realm is not None and other.realm is not None:
            return -1

        if self.port == other.port:
            factor += 8
        elif self.port != ANY_PORT and other.port != ANY_PORT:
            return -1

        if self.host == other.host:
            factor += 16
        elif self.host is not None and other.host is not None:
            return -1

        return factor

    def __str__(self) -> str:
        parts = []
        if self.scheme:
            parts.append(self.scheme.upper())
        if self.realm:
            parts.append(f"'{self.realm}'")
        parts.append(f"{self.host or '<any host>'}:{self.port if self.port != ANY_PORT else '<any port>'}")
        return " ".join(parts)
