"""
Wire schemas for the Chronos REST API.
"""

from .container import Volume, Parameter, Container, new_docker_container
from .jobs import EnvVar, Job, JobType, new_container_job
from .stats import JobStatHistogram, JobStatTasksHistory, JobStat

__all__ = [
    # container
    "Volume",
    "Parameter",
    "Container",
    "new_docker_container",
    # jobs
    "EnvVar",
    "Job",
    "JobType",
    "new_container_job",
    # stats
    "JobStatHistogram",
    "JobStatTasksHistory",
    "JobStat",
]
