"""Shared test helpers for compose-lifecycle tests."""

import subprocess
from typing import Any

from compose_lifecycle.core.commands import ComposeDown, ComposeStop, DockerCliCommand

COMPOSE_YAML = """\
services:
  redis:
    image: redis:7
    ports:
      - "6379"
"""


class RecordingDockerCli:
    """Stand-in for DockerCli that records commands and returns canned output.

    Outputs are keyed by compose subcommand ("config", "ps", ...).
    """

    def __init__(self, outputs: dict[str, str] | None = None) -> None:
        self.outputs = outputs or {}
        self.commands: list[DockerCliCommand[Any]] = []
        self.waited: list[float] = []

    def run(self, command: DockerCliCommand[Any]) -> Any:
        self.commands.append(command)
        if isinstance(command, ComposeDown | ComposeStop):
            self.waited.append(command.timeout.total_seconds())
        return command.parse(self.outputs.get(command.args()[0], ""))

    def args(self) -> list[list[str]]:
        return [command.args() for command in self.commands]


def ps_entry(
    name: str = "app-redis-1",
    service: str = "redis",
    state: str = "running",
    publishers: list[dict[str, Any]] | None = None,
    labels: str = "com.docker.compose.project=app,com.docker.compose.service=redis",
) -> dict[str, Any]:
    """Build one `docker compose ps --format=json` entry."""
    return {
        "ID": "abc123",
        "Name": name,
        "Service": service,
        "Project": "app",
        "Image": "redis:7",
        "State": state,
        "Labels": labels,
        "Publishers": publishers
        if publishers is not None
        else [{"URL": "0.0.0.0", "TargetPort": 6379, "PublishedPort": 32768, "Protocol": "tcp"}],
    }


def completed(
    stdout: str = "", stderr: str = "", returncode: int = 0
) -> subprocess.CompletedProcess[str]:
    """Build a completed subprocess result."""
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)
