"""
Cluster selector and failover protocol.

The Cluster is the single source of truth for which member the next request
should use. Request issuers call get_member() for a base URL and report a
transport failure with mark_inactive(). The failed member is then polled in
a background thread until its /ping endpoint answers 200, at which point it
is reinstated.

Selection rule after a failure: the member list is scanned in configuration
order and the LAST active member becomes current. Later-configured hosts are
therefore preferred after any failover event.

All state changes happen under the exclusive side of a reader/writer lock;
get_member() takes the shared side. Probes run outside the lock.
"""

import logging
import threading
from typing import Callable, Dict, List, Optional, Tuple

import httpx

from chronos.cluster.members import Member, parse_cluster_url
from chronos.cluster.rwlock import ReadWriteLock
from chronos.errors import NoAvailableMemberError
from chronos.transport import HttpxTransport, Transport

logger = logging.getLogger(__name__)

PING_PATH = "/ping"
DEFAULT_RETRY_INTERVAL = 5.0  # seconds
DEFAULT_PROBE_TIMEOUT = 5.0  # seconds

# wait(seconds) -> True when interrupted by shutdown
WaitFunc = Callable[[float], bool]


class Cluster:
    """
    Tracks Chronos members and picks the one to use for each request.

    Per-member state machine:
    - Active -> Inactive: mark_inactive() after a transport failure
    - Inactive -> Active: background probe of /ping returns 200

    There is no terminal state; members may flap for the process lifetime.
    """

    def __init__(
        self,
        url: str,
        transport: Optional[Transport] = None,
        retry_interval: float = DEFAULT_RETRY_INTERVAL,
        wait: Optional[WaitFunc] = None,
    ):
        """
        Initialize the cluster from a URL.

        Args:
            url: Cluster URL, e.g. "http://host1:8080,host2:8081"
            transport: Transport for liveness probes (created if omitted)
            retry_interval: Seconds between probes of an inactive member
            wait: Timer used between probes; defaults to waiting on the
                shutdown event

        Raises:
            ConfigurationError: if the URL is invalid
        """
        self.url = url
        self.protocol, members = parse_cluster_url(url)
        self._members: Tuple[Member, ...] = tuple(members)
        self._current: Optional[Member] = self._members[0]

        self.retry_interval = retry_interval
        self._owns_transport = transport is None
        self._transport = transport or HttpxTransport(timeout=DEFAULT_PROBE_TIMEOUT)

        self._lock = ReadWriteLock()
        self._stop_event = threading.Event()
        self._wait = wait or self._stop_event.wait
        self._recoveries: List[threading.Thread] = []
        self._recoveries_lock = threading.Lock()

        logger.info(
            f"Chronos cluster initialized: protocol={self.protocol}, "
            f"members={[m.host for m in self._members]}"
        )

    @property
    def members(self) -> Tuple[Member, ...]:
        """Members in configuration order."""
        return self._members

    @property
    def closed(self) -> bool:
        return self._stop_event.is_set()

    def member_url(self, member: Member) -> str:
        """Base URL (scheme://host) of a member."""
        return f"{self.protocol}://{member.host}"

    # =========================================================================
    # Selection
    # =========================================================================

    def get_member(self) -> str:
        """
        Get the base URL of the current member.

        Returns:
            Base URL such as "http://host1:8080"

        Raises:
            NoAvailableMemberError: if no member is currently active
        """
        with self._lock.read_locked():
            current = self._current
            if current is None or not current.active:
                raise NoAvailableMemberError()
            return self.member_url(current)

    def mark_inactive(self, member_url: Optional[str] = None) -> None:
        """
        Demote a member after a transport failure and fail over.

        Steps, atomic with respect to get_member():
        1. Mark the failed member inactive
        2. Clear current
        3. Start a recovery thread for the failed member
        4. Rescan: the last active member in configuration order becomes
           current (none if every member is down)

        Args:
            member_url: Base URL the caller failed against. Defaults to the
                current member. A member that is already inactive keeps its
                existing recovery thread.
        """
        with self._lock.write_locked():
            member = self._find_target(member_url)
            if member is not None and member.active:
                member.active = False
                logger.warning(
                    f"Chronos member {member.host} marked inactive, "
                    f"probing every {self.retry_interval}s"
                )
                self._spawn_recovery(member)

            self._current = None
            self._rescan()

            if self._current is None:
                logger.error("No active Chronos members left in cluster")
            else:
                logger.info(f"Chronos cluster failed over to {self._current.host}")

    def _find_target(self, member_url: Optional[str]) -> Optional[Member]:
        if member_url is None:
            return self._current
        for member in self._members:
            if self.member_url(member) == member_url:
                return member
        logger.warning(f"mark_inactive called for unknown member {member_url}")
        return None

    def _rescan(self) -> None:
        # Last active member wins; callers must hold the write lock.
        for member in self._members:
            if member.active:
                self._current = member

    # =========================================================================
    # Recovery
    # =========================================================================

    def _spawn_recovery(self, member: Member) -> None:
        thread = threading.Thread(
            target=self._recover,
            args=(member,),
            name=f"chronos-recovery-{member.host}",
            daemon=True,
        )
        with self._recoveries_lock:
            self._recoveries = [t for t in self._recoveries if t.is_alive()]
            self._recoveries.append(thread)
        thread.start()

    def _recover(self, member: Member) -> bool:
        """
        Probe a failed member until it answers, then reinstate it.

        Polls at a constant interval with no retry limit. Stops early only
        when the cluster is closed.

        Returns:
            True if the member was reinstated, False if stopped by close()
        """
        url = self.member_url(member)
        attempt = 0

        while not self._stop_event.is_set():
            attempt += 1
            if self._probe(url):
                self._reinstate(member)
                logger.info(
                    f"Chronos member {member.host} recovered after {attempt} probe(s)"
                )
                return True

            logger.debug(
                f"Chronos member {member.host} still down "
                f"(attempt {attempt}), retrying in {self.retry_interval}s"
            )
            if self._wait(self.retry_interval):
                break

        logger.info(f"Recovery of Chronos member {member.host} stopped")
        return False

    def _probe(self, base_url: str) -> bool:
        """Liveness probe: True only for HTTP 200 on /ping."""
        try:
            status, _ = self._transport.send("GET", base_url + PING_PATH)
        except httpx.HTTPError as e:
            logger.debug(f"Probe of {base_url} failed: {e}")
            return False
        except Exception as e:
            logger.error(f"Unexpected error probing {base_url}: {e}", exc_info=True)
            return False

        if status != 200:
            logger.debug(f"Probe of {base_url} returned HTTP {status}")
        return status == 200

    def _reinstate(self, member: Member) -> None:
        with self._lock.write_locked():
            member.active = True
            # A fully drained cluster regains a current member here; an
            # existing current member is left alone.
            if self._current is None:
                self._rescan()
                logger.info(f"Chronos cluster current member is now {self._current.host}")

    # =========================================================================
    # Lifecycle / status
    # =========================================================================

    def recovering(self) -> List[str]:
        """Hosts with a recovery thread still running."""
        with self._recoveries_lock:
            return [
                t.name[len("chronos-recovery-"):]
                for t in self._recoveries
                if t.is_alive()
            ]

    def close(self, timeout: Optional[float] = None) -> None:
        """
        Stop all recovery threads and release the probe transport.

        Recovery loops exit at their next wait. Safe to call more than once.

        Args:
            timeout: Seconds to wait for each recovery thread to finish
        """
        if self._stop_event.is_set():
            return
        self._stop_event.set()

        with self._recoveries_lock:
            threads = list(self._recoveries)
            self._recoveries = []
        for thread in threads:
            thread.join(timeout)

        if self._owns_transport:
            self._transport.close()
        logger.debug("Chronos cluster closed")

    def status(self) -> Dict:
        """Snapshot of the cluster state."""
        with self._lock.read_locked():
            current = self._current
            members = [
                {
                    "host": m.host,
                    "url": self.member_url(m),
                    "active": m.active,
                }
                for m in self._members
            ]

        return {
            "protocol": self.protocol,
            "current": self.member_url(current) if current else None,
            "members": members,
            "recovering": self.recovering(),
        }
