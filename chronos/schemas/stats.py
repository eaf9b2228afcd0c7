"""
Job statistics schemas returned by /scheduler/job/stat/<name>.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class JobStatHistogram(BaseModel):
    """Run-time percentiles of a job, in milliseconds."""

    model_config = ConfigDict(populate_by_name=True)

    percentile_75th: float = Field(default=0.0, alias="75thPercentile")
    percentile_95th: float = Field(default=0.0, alias="95thPercentile")
    percentile_98th: float = Field(default=0.0, alias="98thPercentile")
    percentile_99th: float = Field(default=0.0, alias="99thPercentile")
    median: float = Field(default=0.0, alias="Median")
    mean: float = 0.0
    count: int = 0


class JobStatTasksHistory(BaseModel):
    """One past task of a job."""

    model_config = ConfigDict(populate_by_name=True)

    task_id: str = Field(default="", alias="taskId")
    job_name: str = Field(default="", alias="jobName")
    slave_id: str = Field(default="", alias="slaveId")
    start_time: str = Field(default="", alias="startTime")
    end_time: str = Field(default="", alias="endTime")
    duration: str = ""
    status: str = ""
    num_elements_processed: int = Field(default=0, alias="numElementsProcessed")


class JobStat(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    histogram: Optional[JobStatHistogram] = None
    task_stat_history: List[JobStatTasksHistory] = Field(
        default_factory=list, alias="taskStatHistory"
    )
