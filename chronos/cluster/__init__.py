"""
Cluster membership and failover.

- members: parses the cluster URL into members
- rwlock: reader/writer lock guarding the cluster state
- selector: current-member selection and background recovery
"""

from .members import Member, parse_cluster_url, SUPPORTED_SCHEMES
from .rwlock import ReadWriteLock
from .selector import (
    Cluster,
    PING_PATH,
    DEFAULT_RETRY_INTERVAL,
)

__all__ = [
    # members
    "Member",
    "parse_cluster_url",
    "SUPPORTED_SCHEMES",
    # rwlock
    "ReadWriteLock",
    # selector
    "Cluster",
    "PING_PATH",
    "DEFAULT_RETRY_INTERVAL",
]
