"""
Cluster member registry.

Parses a cluster URL such as "http://host1:8080,host2:8081" into an ordered
list of members sharing one scheme. Membership is fixed after parsing; only
the active flag of each member changes, and only the cluster selector
changes it.
"""

from typing import List, Tuple
from urllib.parse import urlsplit

from chronos.errors import ConfigurationError

SUPPORTED_SCHEMES = ("http", "https")


class Member:
    """One candidate Chronos host (host[:port])."""

    __slots__ = ("_host", "active")

    def __init__(self, host: str, active: bool = True):
        self._host = host
        self.active = active

    @property
    def host(self) -> str:
        return self._host

    def __repr__(self) -> str:
        state = "active" if self.active else "inactive"
        return f"Member({self._host!r}, {state})"


def parse_cluster_url(url: str) -> Tuple[str, List[Member]]:
    """
    Parse a cluster URL into its scheme and members.

    The host segment may hold several comma-separated host[:port] entries.
    User info and path are ignored; every member starts active.

    Args:
        url: Cluster URL

    Returns:
        Tuple of (protocol, members in configuration order)

    Raises:
        ConfigurationError: if the URL cannot be parsed, the scheme is not
            http/https, or a host entry is empty or has an invalid port
    """
    try:
        parts = urlsplit(url)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"chronos: invalid cluster url {url!r}: {e}")

    if parts.scheme not in SUPPORTED_SCHEMES:
        raise ConfigurationError(
            f"chronos: cluster url scheme {parts.scheme} is not supported"
        )

    hosts = parts.netloc.rpartition("@")[2]
    if not hosts:
        raise ConfigurationError(f"chronos: cluster url {url!r} has no hosts")

    members = []
    for addr in hosts.split(","):
        addr = addr.strip()
        if not addr:
            raise ConfigurationError(
                f"chronos: cluster url {url!r} contains an empty host entry"
            )
        try:
            urlsplit(f"//{addr}").port
        except ValueError as e:
            raise ConfigurationError(
                f"chronos: cluster url {url!r} has an invalid host entry {addr!r}: {e}"
            )
        members.append(Member(addr))

    return parts.scheme, members
