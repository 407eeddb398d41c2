"""Connection settings shared by every issue tracker client."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ClientConfig:
    """Where the tracker lives and who to log in as.

    Supplied once and never mutated by the client.

    Args:
        host:        Hostname of the tracker (e.g. 'jira.example.com')
        username:    Login name used for the session exchange
        password:    Password used for the session exchange
        protocol:    'http' or 'https'. A trailing ':' is tolerated
        port:        Optional port, omitted from the URL when empty
        api_version: Version segment placed in every resource path
        timeout:     Seconds before a request is abandoned, None for the transport default
    """

    host: str
    username: str
    password: str = field(repr=False)
    protocol: str = "https"
    port: int | str | None = None
    api_version: str = "2"
    timeout: float | None = None

    @property
    def base_url(self) -> str:
        scheme = self.protocol.rstrip(":")
        netloc = self.host if self.port in (None, "") else f"{self.host}:{self.port}"
        return f"{scheme}://{netloc}"
