"""Typed views of the JSON emitted by docker and docker compose."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _Response(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


class VersionInfo(_Response):
    """Version block of `docker version`."""

    version: str = Field(alias="Version")


class DockerVersionResponse(_Response):
    """Response from `docker version --format {{json .}}`."""

    client: VersionInfo | None = Field(default=None, alias="Client")
    server: VersionInfo | None = Field(default=None, alias="Server")


class ComposeVersionResponse(_Response):
    """Response from `docker compose version --format json`."""

    version: str


class ComposeConfigResponse(_Response):
    """Response from `docker compose config --format=json`."""

    name: str | None = None
    services: dict[str, dict[str, Any]] = Field(default_factory=dict)

    @field_validator("services", mode="before")
    @classmethod
    def empty_if_none(cls, value: Any) -> Any:
        return value if value is not None else {}


class Publisher(_Response):
    """Port publication reported by `docker compose ps`."""

    url: str = Field(default="", alias="URL")
    target_port: int = Field(alias="TargetPort")
    published_port: int = Field(default=0, alias="PublishedPort")
    protocol: str = Field(default="tcp", alias="Protocol")


class ComposePsResponse(_Response):
    """One container entry from `docker compose ps --format=json`."""

    id: str = Field(default="", alias="ID")
    name: str = Field(alias="Name")
    service: str = Field(default="", alias="Service")
    project: str = Field(default="", alias="Project")
    image: str = Field(default="", alias="Image")
    state: str = Field(alias="State")
    labels: dict[str, str] = Field(default_factory=dict, alias="Labels")
    publishers: list[Publisher] = Field(default_factory=list, alias="Publishers")

    @field_validator("labels", mode="before")
    @classmethod
    def parse_labels(cls, value: Any) -> Any:
        """Parse labels given as a "key=value,key2=value2" string."""
        if value is None or value == "":
            return {}
        if isinstance(value, str):
            labels = {}
            for item in value.split(","):
                key, _, label_value = item.partition("=")
                if key.strip():
                    labels[key.strip()] = label_value
            return labels
        return value

    @field_validator("publishers", mode="before")
    @classmethod
    def empty_if_none(cls, value: Any) -> Any:
        return value if value is not None else []

    @property
    def is_running(self) -> bool:
        return self.state != "exited"
