"""
Job schemas.

A Chronos job is either schedule-based (ISO 8601 repeating interval in
`schedule`) or dependency-based (list of `parents`). Wire names are
camelCase; Python attributes are snake_case.
"""

import re
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from chronos.errors import InvalidJobError

from .container import Container, new_docker_container


REPEAT_RE = re.compile(r"R(?P<times>\d+)?")
START_TIME_RE = re.compile(
    r"(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})"
    r"T(?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2})"
    r"(?P<zone>Z|[+-]\d{2}:\d{2})"
)
INTERVAL_RE = re.compile(
    r"P((?P<year>\d+)Y)?((?P<month>\d+)M)?((?P<day>\d+)D)?"
    r"(T((?P<hour>\d+)H)?((?P<minute>\d+)M)?((?P<second>\d+)S)?)?"
)

# Omitted from the payload when empty
_OMIT_WHEN_EMPTY = ("container", "schedule", "scheduleTimeZone", "parents")


class JobType(str, Enum):
    DEPENDENCY_BASED = "dependency"
    SCHEDULE_BASED = "schedule"
    UNKNOWN = "unknown"


class EnvVar(BaseModel):
    """Environment variable passed to the job command."""

    name: str
    value: str


class Job(BaseModel):
    """Chronos job definition and its run counters."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = ""
    description: str = ""

    command: str = ""
    shell: bool = True
    arguments: List[str] = Field(default_factory=list)
    run_as_user: str = Field(default="", alias="runAsUser")

    environment_variables: List[EnvVar] = Field(
        default_factory=list, alias="environmentVariables"
    )

    async_: bool = Field(default=False, alias="async")
    disabled: bool = False
    high_priority: bool = Field(default=False, alias="highPriority")
    soft_error: bool = Field(default=False, alias="softError")
    data_processing_job_type: bool = Field(default=False, alias="dataProcessingJobType")

    container: Optional[Container] = None

    cpus: float = 0.0
    disk: float = 0.0
    memory: float = Field(default=0.0, alias="mem")

    uris: List[str] = Field(default_factory=list)

    epsilon: str = "PT60S"

    # Run counters, maintained by Chronos
    success_count: int = Field(default=0, alias="successCount")
    error_count: int = Field(default=0, alias="errorCount")
    last_success: str = Field(default="", alias="lastSuccess")
    last_error: str = Field(default="", alias="lastError")
    errors_since_last_success: int = Field(default=0, alias="errorsSinceLastSuccess")

    executor: str = ""
    executor_flags: str = Field(default="", alias="executorFlags")

    retries: int = 2

    owner: str = ""
    owner_name: str = Field(default="", alias="ownerName")

    constraints: List[List[str]] = Field(default_factory=list)

    # Schedule-based jobs only
    schedule: Optional[str] = None
    schedule_time_zone: Optional[str] = Field(default=None, alias="scheduleTimeZone")

    # Dependency-based jobs only
    parents: Optional[List[str]] = None

    @property
    def job_type(self) -> JobType:
        has_parents = bool(self.parents)
        has_schedule = bool(self.schedule)

        if has_parents and not has_schedule:
            return JobType.DEPENDENCY_BASED
        if has_schedule and not has_parents:
            return JobType.SCHEDULE_BASED
        return JobType.UNKNOWN

    def check_schedule(self) -> None:
        """
        Validate `schedule` as an ISO 8601 repeating interval.

        Format: R[n]/<start time>/<period>, e.g. "R/2024-01-01T00:00:00Z/PT1H"

        Raises:
            InvalidJobError: naming the first malformed part
        """
        parts = (self.schedule or "").split("/")
        if len(parts) != 3:
            raise InvalidJobError("chronos: schedule should contain 3 elements")

        repeat, start_time, interval = parts

        if not REPEAT_RE.fullmatch(repeat):
            raise InvalidJobError("chronos: schedule: repeat field syntax error")

        if not START_TIME_RE.fullmatch(start_time):
            raise InvalidJobError("chronos: schedule: startTime field syntax error")

        if not INTERVAL_RE.fullmatch(interval):
            raise InvalidJobError("chronos: schedule: interval field syntax error")

    def sanity_check(self) -> None:
        """
        Raises:
            InvalidJobError: if the job type is unknown or the schedule is malformed
        """
        job_type = self.job_type
        if job_type == JobType.UNKNOWN:
            raise InvalidJobError("chronos: job type unknown")
        if job_type == JobType.SCHEDULE_BASED:
            self.check_schedule()

    def add_env_var(self, name: str, value: str) -> "Job":
        self.environment_variables.append(EnvVar(name=name, value=value))
        return self

    def add_uri(self, uri: str) -> "Job":
        self.uris.append(uri)
        return self

    def to_payload(self) -> Dict[str, Any]:
        """Wire representation, camelCase keys."""
        payload = self.model_dump(by_alias=True)
        for key in _OMIT_WHEN_EMPTY:
            if not payload.get(key):
                payload.pop(key, None)
        return payload


def new_container_job(image: str = "") -> Job:
    """Job preconfigured with a docker container."""
    return Job(container=new_docker_container(image))
