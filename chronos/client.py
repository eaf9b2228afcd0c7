"""
Chronos REST API client.

Every request goes through the cluster: the client asks for the current
member, sends the request, and on a transport failure reports the member
as inactive and retries against whichever member the cluster reports next.
The loop ends with a response or with NoAvailableMemberError once every
member is down.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from chronos.cluster import Cluster
from chronos.config import Config
from chronos.errors import (
    APIError,
    InvalidJobError,
    InvalidResponseError,
    JobNotFoundError,
    NoAvailableMemberError,
)
from chronos.schemas import Job, JobStat, JobType
from chronos.transport import HttpxTransport, Transport

logger = logging.getLogger(__name__)

JSON_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}

SCHEDULER_STAT_METRICS = (
    "99thPercentile",
    "98thPercentile",
    "95thPercentile",
    "75thPercentile",
    "median",
    "mean",
)

_JOB_ENDPOINTS = {
    JobType.DEPENDENCY_BASED: "/scheduler/dependency",
    JobType.SCHEDULE_BASED: "/scheduler/iso8601",
}


class Client:
    """
    Client for one Chronos cluster.

    Example:
        >>> with Client(Config(url="http://host1:4400,host2:4400")) as client:
        ...     for job in client.jobs():
        ...         print(job.name, job.success_count)
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        transport: Optional[Transport] = None,
        cluster: Optional[Cluster] = None,
    ):
        """
        Args:
            config: Client settings (defaults to Config())
            transport: HTTP transport; built from config if omitted
            cluster: Cluster; built from config.url if omitted, sharing
                the transport

        Raises:
            ConfigurationError: if config.url is invalid
        """
        self.config = config or Config()
        self._transport = transport or HttpxTransport(
            timeout=self.config.request_timeout,
            auth=self.config.basic_auth,
        )
        self.cluster = cluster or Cluster(
            self.config.url,
            transport=self._transport,
            retry_interval=self.config.probe_interval,
        )

    # =========================================================================
    # Request plumbing
    # =========================================================================

    def _http_request(
        self, method: str, uri: str, body: Optional[str] = None
    ) -> Tuple[int, str]:
        while True:
            try:
                base_url = self.cluster.get_member()
            except NoAvailableMemberError:
                logger.error(f"[http] {method} {uri}: no available Chronos member")
                raise

            url = f"{base_url}{uri}"
            logger.debug(f"[http] request: {method}, uri: {uri}, url: {url}")

            try:
                return self._transport.send(method, url, body=body, headers=JSON_HEADERS)
            except httpx.TransportError as e:
                logger.warning(
                    f"[http] {method} {url} failed ({type(e).__name__}: {e}), "
                    f"failing over"
                )
                self.cluster.mark_inactive(base_url)

    def _api_call(
        self,
        method: str,
        uri: str,
        payload: Optional[Dict[str, Any]] = None,
        decode: bool = False,
    ) -> Any:
        """
        Issue an API call and check its status.

        Args:
            method: HTTP method
            uri: Path below the member base URL
            payload: JSON body, if any
            decode: Parse the response body as JSON

        Returns:
            Decoded JSON if decode is set, otherwise None

        Raises:
            APIError: on a non-2xx status
            InvalidResponseError: if decode is set and the body is not JSON
            NoAvailableMemberError: if every member is down
        """
        body = json.dumps(payload) if payload is not None else None
        logger.debug(f"[api]: method: {method}, uri: {uri}, body: {body}")

        status, content = self._http_request(method, uri, body)
        logger.debug(f"[api] result: status: {status}, content: {content}")

        if not 200 <= status < 300:
            raise APIError(status, content)

        if not decode:
            return None
        try:
            return json.loads(content)
        except ValueError as e:
            logger.debug(f"failed to unmarshal the response from chronos, error: {e}")
            raise InvalidResponseError("invalid response from chronos") from e

    # =========================================================================
    # Jobs
    # =========================================================================

    def jobs(self) -> List[Job]:
        data = self._api_call("GET", "/scheduler/jobs", decode=True)
        try:
            return [Job.model_validate(item) for item in data or []]
        except (TypeError, ValidationError) as e:
            raise InvalidResponseError(f"invalid job list from chronos: {e}") from e

    def job(self, name: str) -> Job:
        """
        Look up a single job by name.

        Raises:
            JobNotFoundError: if no job has that name
        """
        for job in self.jobs():
            if job.name == name:
                return job
        raise JobNotFoundError(name)

    def run_job(self, name: str) -> None:
        """Trigger a manual run of a job."""
        self._api_call("PUT", f"/scheduler/job/{_segment(name)}")

    def delete_job(self, name: str) -> None:
        self._api_call("DELETE", f"/scheduler/job/{_segment(name)}")

    def kill_job(self, name: str) -> None:
        """Kill all running tasks of a job."""
        self._api_call("DELETE", f"/scheduler/task/kill/{_segment(name)}")

    def create_job(self, job: Job) -> None:
        """
        Create a job on the endpoint matching its type.

        Raises:
            InvalidJobError: if the job has neither or both of parents and schedule
        """
        self._api_call("POST", _job_endpoint(job), payload=job.to_payload())

    def update_job(self, job: Job) -> None:
        self._api_call("PUT", _job_endpoint(job), payload=job.to_payload())

    # =========================================================================
    # Statistics
    # =========================================================================

    def job_stat(self, name: str) -> JobStat:
        data = self._api_call("GET", f"/scheduler/job/stat/{_segment(name)}", decode=True)
        try:
            return JobStat.model_validate(data or {})
        except ValidationError as e:
            raise InvalidResponseError(f"invalid job stat from chronos: {e}") from e

    def scheduler_stats(self, metric: str) -> List[Dict[str, Any]]:
        """
        Per-job value of one run-time metric across the scheduler.

        Args:
            metric: One of SCHEDULER_STAT_METRICS

        Raises:
            ValueError: for an unknown metric
        """
        if metric not in SCHEDULER_STAT_METRICS:
            raise ValueError(
                f"unknown metric {metric!r}, expected one of {', '.join(SCHEDULER_STAT_METRICS)}"
            )
        return self._api_call("GET", f"/scheduler/stats/{metric}", decode=True) or []

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def close(self) -> None:
        self.cluster.close(timeout=self.config.request_timeout)
        close = getattr(self._transport, "close", None)
        if close is not None:
            close()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def _segment(name: str) -> str:
    return quote(name, safe="")


def _job_endpoint(job: Job) -> str:
    endpoint = _JOB_ENDPOINTS.get(job.job_type)
    if endpoint is None:
        raise InvalidJobError("job must include one of parents and schedule")
    return endpoint
