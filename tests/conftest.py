"""Pytest configuration and shared fixtures."""

import json
import subprocess
from pathlib import Path

import pytest

from compose_lifecycle.core.cli import DockerCli
from compose_lifecycle.core.compose_file import DockerComposeFile
from compose_lifecycle.core.options import DockerComposeOptions
from tests.helpers import COMPOSE_YAML, RecordingDockerCli, ps_entry


@pytest.fixture
def compose_path(tmp_path: Path) -> Path:
    """Write a compose.yaml into a temporary directory."""
    path = tmp_path / "compose.yaml"
    path.write_text(COMPOSE_YAML)
    return path


@pytest.fixture
def compose_file(compose_path: Path) -> DockerComposeFile:
    """Create a compose file reference for the temporary compose.yaml."""
    return DockerComposeFile.of(compose_path)


@pytest.fixture
def docker_cli(compose_file: DockerComposeFile) -> DockerCli:
    """Create a DockerCli with the compose executable already detected."""
    options = DockerComposeOptions.get(compose_file, {"dev"}, ["--project-name", "app"])
    cli = DockerCli(options=options)
    cli._compose_executable = ["docker", "compose"]
    return cli


@pytest.fixture
def recording_cli() -> RecordingDockerCli:
    """Create a recording CLI with one running redis service."""
    return RecordingDockerCli(
        outputs={
            "config": json.dumps({"name": "app", "services": {"redis": {"image": "redis:7"}}}),
            "ps": json.dumps(ps_entry()),
        }
    )


@pytest.fixture(scope="session")
def docker_available() -> bool:
    """Check if docker compose is available for integration tests."""
    try:
        subprocess.run(
            ["docker", "compose", "version"],
            capture_output=True,
            check=True,
            timeout=10,
        )
        subprocess.run(["docker", "info"], capture_output=True, check=True, timeout=10)
        return True
    except (OSError, subprocess.SubprocessError):
        return False


@pytest.fixture
def skip_if_no_docker(docker_available: bool) -> None:
    """Fail test if Docker is not available."""
    if not docker_available:
        pytest.fail("Docker is required for integration tests but is not available")
