"""
Container schemas for containerized Chronos jobs.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Volume(BaseModel):
    """Host path mounted into the container."""

    model_config = ConfigDict(populate_by_name=True)

    host_path: str = Field(default="", alias="hostPath")
    container_path: str = Field(default="", alias="containerPath")
    mode: str = Field(default="", description="RO or RW")


class Parameter(BaseModel):
    """Extra docker run parameter (key/value)."""

    key: str
    value: str


class Container(BaseModel):
    """Container settings of a job."""

    model_config = ConfigDict(populate_by_name=True)

    type: str = ""
    image: str = ""
    network: str = ""
    volumes: Optional[List[Volume]] = None
    parameters: Optional[List[Parameter]] = None
    force_pull_image: bool = Field(default=False, alias="forcePullImage")

    def add_volume(self, host_path: str, container_path: str, mode: str) -> "Container":
        if self.volumes is None:
            self.volumes = []
        self.volumes.append(
            Volume(host_path=host_path, container_path=container_path, mode=mode)
        )
        return self

    def add_parameter(self, key: str, value: str) -> "Container":
        if self.parameters is None:
            self.parameters = []
        self.parameters.append(Parameter(key=key, value=value))
        return self


def new_docker_container(image: str = "") -> Container:
    """Docker container on the bridge network."""
    return Container(type="DOCKER", network="BRIDGE", image=image)
