"""
Chronos client exceptions.

Transport failures are not part of this hierarchy: they are raised by httpx
and handled by the client's failover loop.
"""


class ChronosError(Exception):
    """Base exception for all chronos client errors."""
    pass


class ConfigurationError(ChronosError):
    """
    Raised when the client or cluster configuration is invalid.

    Examples:
    - Cluster URL that cannot be parsed
    - Scheme other than http/https
    - Empty host list
    """
    pass


class NoAvailableMemberError(ChronosError):
    """Raised when no cluster member is currently active."""

    def __init__(self, message: str = "chronos: no available cluster member"):
        super().__init__(message)


class APIError(ChronosError):
    """Raised when Chronos answers with a non-2xx status."""

    def __init__(self, status_code: int, content: str = ""):
        self.status_code = status_code
        self.content = content
        super().__init__(content or f"API call returns status {status_code}")


class InvalidResponseError(ChronosError):
    """Raised when a successful response body cannot be decoded."""
    pass


class JobNotFoundError(ChronosError):
    """Raised when a requested job does not exist."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Job not found: {name}")


class InvalidJobError(ChronosError):
    """Raised when a job definition fails validation."""
    pass
