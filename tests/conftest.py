"""
Pytest configuration and shared fixtures.

No test talks to the network: HTTP goes through FakeTransport and time goes
through RecordingWait.
"""

import threading
from typing import Dict, List, Optional, Tuple

import httpx
import pytest

from chronos.cluster import Cluster


class FakeTransport:
    """
    Scripted transport.

    Each URL maps to a list of results, consumed in order; the last result
    repeats. A result is a (status, text) tuple or an exception to raise.
    Unrouted URLs raise httpx.ConnectError.
    """

    def __init__(self):
        self.calls: List[Tuple[str, str, Optional[str], Optional[Dict[str, str]]]] = []
        self._routes: Dict[str, list] = {}
        self._lock = threading.Lock()
        self.closed = False

    def route(self, url: str, *results) -> None:
        with self._lock:
            self._routes[url] = list(results)

    def send(self, method, url, body=None, headers=None):
        with self._lock:
            self.calls.append((method, url, body, headers))
            results = self._routes.get(url)
            if not results:
                raise httpx.ConnectError(f"connection refused: {url}")
            result = results.pop(0) if len(results) > 1 else results[0]

        if isinstance(result, Exception):
            raise result
        return result

    def urls(self, method: Optional[str] = None) -> List[str]:
        with self._lock:
            return [c[1] for c in self.calls if method is None or c[0] == method]

    def close(self) -> None:
        self.closed = True


class RecordingWait:
    """
    Stand-in for the recovery timer.

    Records every requested interval and returns immediately. After
    `stop_after` waits it reports shutdown so probe loops end.
    """

    def __init__(self, stop_after: Optional[int] = None):
        self.intervals: List[float] = []
        self.stop_after = stop_after

    def __call__(self, seconds: float) -> bool:
        self.intervals.append(seconds)
        return self.stop_after is not None and len(self.intervals) >= self.stop_after


@pytest.fixture
def transport():
    """Fresh scripted transport."""
    return FakeTransport()


@pytest.fixture
def recording_wait():
    return RecordingWait()


@pytest.fixture
def make_cluster(transport):
    """
    Factory for clusters sharing the `transport` fixture.

    Clusters are closed at teardown so parked recovery threads exit.
    """
    created = []

    def _make(url: str = "http://a:8080,b:8080", **kwargs) -> Cluster:
        kwargs.setdefault("transport", transport)
        kwargs.setdefault("retry_interval", 60.0)
        cluster = Cluster(url, **kwargs)
        created.append(cluster)
        return cluster

    yield _make

    for cluster in created:
        cluster.close(timeout=2)


@pytest.fixture
def join_recoveries():
    """Returns a helper that waits for every recovery thread of a cluster."""

    def _join(cluster: Cluster, timeout: float = 5.0) -> None:
        for thread in list(cluster._recoveries):
            thread.join(timeout)
            assert not thread.is_alive(), f"{thread.name} did not finish"

    return _join
