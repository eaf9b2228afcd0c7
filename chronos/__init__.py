"""
Client for the Chronos job scheduler.

Talks to a cluster of equivalent Chronos hosts, failing over between them
when one becomes unreachable and bringing it back once it answers /ping.
"""

from .client import Client, SCHEDULER_STAT_METRICS
from .cluster import Cluster, Member, parse_cluster_url
from .config import Config
from .errors import (
    ChronosError,
    ConfigurationError,
    NoAvailableMemberError,
    APIError,
    InvalidResponseError,
    JobNotFoundError,
    InvalidJobError,
)
from .schemas import (
    Container,
    EnvVar,
    Job,
    JobStat,
    JobStatHistogram,
    JobStatTasksHistory,
    JobType,
    Parameter,
    Volume,
    new_container_job,
    new_docker_container,
)
from .transport import HttpxTransport, Transport

__version__ = "0.1.0"

__all__ = [
    # Client
    "Client",
    "Config",
    "SCHEDULER_STAT_METRICS",
    # Cluster
    "Cluster",
    "Member",
    "parse_cluster_url",
    # Transport
    "HttpxTransport",
    "Transport",
    # Errors
    "ChronosError",
    "ConfigurationError",
    "NoAvailableMemberError",
    "APIError",
    "InvalidResponseError",
    "JobNotFoundError",
    "InvalidJobError",
    # Schemas
    "Container",
    "EnvVar",
    "Job",
    "JobStat",
    "JobStatHistogram",
    "JobStatTasksHistory",
    "JobType",
    "Parameter",
    "Volume",
    "new_container_job",
    "new_docker_container",
]
