"""Credential models."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class UsernamePasswordCredentials:
    """Plain user name and password, used by Basic and Digest."""

    username: str
    password: str = field(default="", repr=False)

    def __post_init__(self) -> None:
        if self.username is None:
            raise ValueError("Username may not be None")
        if self.password is None:
            object.__setattr__(self, "password", "")

    @property
    def user_principal(self) -> str:
        return self.username


@dataclass(frozen=True)
class NTCredentials:
    """NTLM credentials with an optional Windows domain and workstation.

    Domain and workstation are upper-cased. When no domain is given the
    user name may itself carry one (``DOMAIN\\user``); it is kept as-is.
    """

    username: str
    password: str = field(default="", repr=False)
    workstation: str | None = None
    domain: str | None = None

    def __post_init__(self) -> None:
        if self.username is None:
            raise ValueError("Username may not be None")
        if self.password is None:
            object.__setattr__(self, "password", "")
        if self.workstation is not None:
            object.__setattr__(self, "workstation", self.workstation.upper())
        if self.domain is not None:
            object.__setattr__(self, "domain", self.domain.upper())

    @property
    def user_principal(self) -> str:
        """User name qualified with the domain, e.g. ``CORP\\alice``."""
        if self.domain:
            return f"{self.domain}\\{self.username}"
        return self.username


Credentials = UsernamePasswordCredentials | NTCredentials


@dataclass(frozen=True)
class PasswordAuthentication:
    """Raw user name / password pair obtained from the host system.

    Transient: produced by a prompt or the proxy environment and turned
    into a :data:`Credentials` value straight away.
    """

    username: str
    password: str = field(default="", repr=False)

    def __post_init__(self) -> None:
        if self.password is None:
            object.__setattr__(self, "password", "")
