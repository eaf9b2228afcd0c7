"""
HTTP transport used by the client and by cluster liveness probes.

send() reports every HTTP status as a normal result. Only failures to
complete an exchange raise, as httpx.TransportError (connection refused,
timeout, DNS failure, protocol error).
"""

import logging
from typing import Dict, Optional, Protocol, Tuple

import httpx

logger = logging.getLogger(__name__)

USER_AGENT = "chronos-client/0.1"


class Transport(Protocol):
    """Protocol for anything that can carry one HTTP exchange."""

    def send(
        self,
        method: str,
        url: str,
        body: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Tuple[int, str]:
        """
        Send one request and return (status_code, response_text).

        Raises:
            httpx.TransportError: if the exchange could not be completed
        """
        ...


class HttpxTransport:
    """Transport backed by a shared httpx.Client."""

    def __init__(
        self,
        timeout: float = 5.0,
        auth: Optional[Tuple[str, str]] = None,
        headers: Optional[Dict[str, str]] = None,
        client: Optional[httpx.Client] = None,
    ):
        """
        Args:
            timeout: Request timeout in seconds
            auth: Optional HTTP basic (user, password)
            headers: Extra headers sent with every request
            client: Pre-built httpx.Client, mostly for tests
        """
        default_headers = {"User-Agent": USER_AGENT}
        if headers:
            default_headers.update(headers)

        self.timeout = timeout
        self._client = client or httpx.Client(
            timeout=timeout,
            auth=auth,
            headers=default_headers,
        )

    def send(
        self,
        method: str,
        url: str,
        body: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Tuple[int, str]:
        response = self._client.request(
            method,
            url,
            content=body.encode("utf-8") if body else None,
            headers=headers,
        )
        return response.status_code, response.text

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "HttpxTransport":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
