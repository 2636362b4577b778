"""Commands understood by :class:`~compose_lifecycle.core.cli.DockerCli`.

Each command knows whether it runs against ``docker`` or ``docker compose``,
the level at which its output should be reported, its arguments, and how to
turn its standard output into a typed response.
"""

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import Any, ClassVar, Generic, TypeVar

import pydantic

from compose_lifecycle.core.log_level import LogLevel
from compose_lifecycle.core.responses import (
    ComposeConfigResponse,
    ComposePsResponse,
    ComposeVersionResponse,
    DockerVersionResponse,
)
from compose_lifecycle.utils.errors import DockerOutputParseError, ValidationError

ResponseT = TypeVar("ResponseT")
ModelT = TypeVar("ModelT", bound=pydantic.BaseModel)


class CommandType(str, Enum):
    """Executable a command is run with."""

    DOCKER = "docker"
    COMPOSE = "compose"


class DockerCliCommand(ABC, Generic[ResponseT]):
    """Base class for docker CLI commands."""

    command_type: ClassVar[CommandType] = CommandType.COMPOSE
    log_level: LogLevel = LogLevel.OFF

    @abstractmethod
    def args(self) -> list[str]:
        """Return the arguments following the executable and global options."""

    def parse(self, output: str) -> ResponseT:  # noqa: ARG002
        """Convert standard output into the command response."""
        return None  # type: ignore[return-value]


def _load_json(output: str) -> Any:
    try:
        return json.loads(output)
    except json.JSONDecodeError as e:
        raise DockerOutputParseError(f"Failed to parse JSON output: {output[:200]!r}") from e


def _to_model(model: type[ModelT], data: Any) -> ModelT:
    try:
        return model.model_validate(data)
    except pydantic.ValidationError as e:
        raise DockerOutputParseError(f"Unexpected {model.__name__} output: {e}") from e


def _timeout_seconds(timeout: timedelta) -> str:
    if timeout < timedelta(0):
        raise ValidationError(f"Timeout must not be negative: {timeout}")
    return str(int(timeout.total_seconds()))


class DockerVersion(DockerCliCommand[DockerVersionResponse]):
    """`docker version`, used to check the daemon is reachable."""

    command_type = CommandType.DOCKER

    def args(self) -> list[str]:
        return ["version", "--format", "{{json .}}"]

    def parse(self, output: str) -> DockerVersionResponse:
        return _to_model(DockerVersionResponse, _load_json(output))


class ComposeVersion(DockerCliCommand[ComposeVersionResponse]):
    """`docker compose version`."""

    def args(self) -> list[str]:
        return ["version", "--format", "json"]

    def parse(self, output: str) -> ComposeVersionResponse:
        return _to_model(ComposeVersionResponse, _load_json(output))


class ComposeConfig(DockerCliCommand[ComposeConfigResponse]):
    """`docker compose config`, the resolved topology for the active profiles."""

    def args(self) -> list[str]:
        return ["config", "--format=json"]

    def parse(self, output: str) -> ComposeConfigResponse:
        return _to_model(ComposeConfigResponse, _load_json(output))


class ComposePs(DockerCliCommand[list[ComposePsResponse]]):
    """`docker compose ps`.

    Older compose releases print a single JSON array, newer ones print one
    JSON object per line. Both are accepted.
    """

    def args(self) -> list[str]:
        return ["ps", "--format=json"]

    def parse(self, output: str) -> list[ComposePsResponse]:
        stripped = output.strip()
        if not stripped:
            return []
        if stripped.startswith("["):
            entries = _load_json(stripped)
        else:
            entries = [_load_json(line) for line in stripped.splitlines() if line.strip()]
        return [_to_model(ComposePsResponse, entry) for entry in entries]


@dataclass(frozen=True)
class ComposeUp(DockerCliCommand[None]):
    """`docker compose up`, waiting for containers to be running and healthy."""

    log_level: LogLevel
    arguments: tuple[str, ...] = ()

    def args(self) -> list[str]:
        return ["up", "--no-color", "--detach", "--wait", *self.arguments]


@dataclass(frozen=True)
class ComposeDown(DockerCliCommand[None]):
    """`docker compose down`."""

    timeout: timedelta
    arguments: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        _timeout_seconds(self.timeout)

    def args(self) -> list[str]:
        return ["down", "--timeout", _timeout_seconds(self.timeout), *self.arguments]


@dataclass(frozen=True)
class ComposeStart(DockerCliCommand[None]):
    """`docker compose start`."""

    log_level: LogLevel
    arguments: tuple[str, ...] = ()

    def args(self) -> list[str]:
        return ["start", *self.arguments]


@dataclass(frozen=True)
class ComposeStop(DockerCliCommand[None]):
    """`docker compose stop`."""

    timeout: timedelta
    arguments: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        _timeout_seconds(self.timeout)

    def args(self) -> list[str]:
        return ["stop", "--timeout", _timeout_seconds(self.timeout), *self.arguments]
