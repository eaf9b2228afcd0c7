"""
Client configuration.

Values can be given explicitly or read from the environment. Entry points
load a .env file first, so the same variables may live there.
"""

import os
from dataclasses import dataclass

from chronos.errors import ConfigurationError

DEFAULT_URL = "http://127.0.0.1:8080"
DEFAULT_REQUEST_TIMEOUT = 5
DEFAULT_PROBE_INTERVAL = 5.0


@dataclass
class Config:
    """
    Settings for a Chronos client.

    url may carry several comma-separated members sharing one scheme,
    e.g. "http://host1:8080,host2:8081".
    """
    url: str = DEFAULT_URL
    # seconds, applied to every request regardless of member
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    http_basic_auth_user: str = ""
    http_basic_password: str = ""
    # seconds between liveness probes of an inactive member
    probe_interval: float = DEFAULT_PROBE_INTERVAL

    @property
    def basic_auth(self):
        """(user, password) tuple, or None when no user is configured."""
        if not self.http_basic_auth_user:
            return None
        return (self.http_basic_auth_user, self.http_basic_password)

    @classmethod
    def from_env(cls) -> "Config":
        """
        Build a config from CHRONOS_* environment variables.

        Variables:
        - CHRONOS_URL
        - CHRONOS_REQUEST_TIMEOUT
        - CHRONOS_HTTP_BASIC_AUTH_USER
        - CHRONOS_HTTP_BASIC_PASSWORD
        - CHRONOS_PROBE_INTERVAL

        Raises:
            ConfigurationError: if a numeric variable is not a number
        """
        return cls(
            url=os.getenv("CHRONOS_URL", DEFAULT_URL),
            request_timeout=_float_env("CHRONOS_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT),
            http_basic_auth_user=os.getenv("CHRONOS_HTTP_BASIC_AUTH_USER", ""),
            http_basic_password=os.getenv("CHRONOS_HTTP_BASIC_PASSWORD", ""),
            probe_interval=_float_env("CHRONOS_PROBE_INTERVAL", DEFAULT_PROBE_INTERVAL),
        )


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}")
