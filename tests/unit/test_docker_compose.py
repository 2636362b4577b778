"""Unit tests for the DockerCompose facade."""

import json
import time
from datetime import timedelta
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from compose_lifecycle.core.cli import DockerCli
from compose_lifecycle.core.commands import (
    ComposeDown,
    ComposeStart,
    ComposeStop,
    ComposeUp,
)
from compose_lifecycle.core.compose import DefaultDockerCompose, DockerCompose
from compose_lifecycle.core.compose_file import DockerComposeFile
from compose_lifecycle.core.log_level import LogLevel
from compose_lifecycle.core.options import DockerComposeOptions
from compose_lifecycle.utils.errors import ProcessExitError
from tests.helpers import RecordingDockerCli, completed, ps_entry


@pytest.fixture
def compose(recording_cli: RecordingDockerCli) -> DefaultDockerCompose:
    """Create a DockerCompose backed by the recording CLI."""
    return DefaultDockerCompose(recording_cli, "docker.local")  # type: ignore[arg-type]


class TestLifecycleOperations:
    """Test lifecycle calls are passed through to the CLI."""

    def test_up(self, compose: DefaultDockerCompose, recording_cli: RecordingDockerCli) -> None:
        """Test up runs the up command at the given level."""
        compose.up(LogLevel.INFO)

        command = recording_cli.commands[0]
        assert isinstance(command, ComposeUp)
        assert command.log_level is LogLevel.INFO
        assert command.arguments == ()

    def test_up_with_arguments(
        self, compose: DefaultDockerCompose, recording_cli: RecordingDockerCli
    ) -> None:
        """Test extra arguments reach the up command in order."""
        compose.up(LogLevel.DEBUG, ["--build", "--quiet-pull"])
        assert recording_cli.args()[0][-2:] == ["--build", "--quiet-pull"]

    def test_down(self, compose: DefaultDockerCompose, recording_cli: RecordingDockerCli) -> None:
        """Test down passes the timeout."""
        compose.down(timedelta(seconds=30), ["--volumes"])

        command = recording_cli.commands[0]
        assert isinstance(command, ComposeDown)
        assert command.args() == ["down", "--timeout", "30", "--volumes"]

    def test_start(self, compose: DefaultDockerCompose, recording_cli: RecordingDockerCli) -> None:
        """Test start runs the start command."""
        compose.start(LogLevel.WARN)

        command = recording_cli.commands[0]
        assert isinstance(command, ComposeStart)
        assert command.log_level is LogLevel.WARN

    def test_stop(self, compose: DefaultDockerCompose, recording_cli: RecordingDockerCli) -> None:
        """Test stop passes the timeout."""
        compose.stop(timedelta(seconds=5))

        command = recording_cli.commands[0]
        assert isinstance(command, ComposeStop)
        assert command.args() == ["stop", "--timeout", "5"]

    @pytest.mark.parametrize(
        ("operation", "value"),
        [
            ("up", LogLevel.INFO),
            ("start", LogLevel.INFO),
            ("down", timedelta(seconds=10)),
            ("stop", timedelta(seconds=10)),
        ],
    )
    def test_omitted_arguments_equal_empty_list(self, operation: str, value: object) -> None:
        """Test calling without arguments is the same as passing an empty list."""
        implicit = RecordingDockerCli()
        explicit = RecordingDockerCli()

        getattr(DefaultDockerCompose(implicit), operation)(value)  # type: ignore[arg-type]
        getattr(DefaultDockerCompose(explicit), operation)(value, [])  # type: ignore[arg-type]

        assert implicit.commands == explicit.commands
        assert implicit.args() == explicit.args()

    @pytest.mark.parametrize("operation", ["down", "stop"])
    def test_force_stop_does_not_wait(self, operation: str) -> None:
        """Test FORCE_STOP asks the CLI for a zero wait."""
        cli = RecordingDockerCli()
        compose = DefaultDockerCompose(cli)  # type: ignore[arg-type]

        started = time.monotonic()
        getattr(compose, operation)(DockerCompose.FORCE_STOP)
        elapsed = time.monotonic() - started

        assert cli.waited == [0.0]
        assert cli.args()[0][1:3] == ["--timeout", "0"]
        assert elapsed < 1

    def test_force_stop_is_zero(self) -> None:
        """Test FORCE_STOP is a zero duration."""
        assert DockerCompose.FORCE_STOP == timedelta(0)

    def test_failures_propagate(self) -> None:
        """Test CLI failures reach the caller unchanged."""
        cli = MagicMock(spec=DockerCli)
        error = ProcessExitError(["docker", "compose", "up"], 1, "", "boom")
        cli.run.side_effect = error

        with pytest.raises(ProcessExitError) as exc_info:
            DefaultDockerCompose(cli).up(LogLevel.INFO)

        assert exc_info.value is error
        assert cli.run.call_count == 1


class TestQueries:
    """Test service queries."""

    def test_has_defined_services(self, compose: DefaultDockerCompose) -> None:
        """Test services in the resolved config are reported."""
        assert compose.has_defined_services() is True

    def test_has_no_defined_services(self) -> None:
        """Test a config without services for the active profiles."""
        cli = RecordingDockerCli(outputs={"config": json.dumps({"name": "app", "services": {}})})
        assert DefaultDockerCompose(cli).has_defined_services() is False  # type: ignore[arg-type]

    @patch("compose_lifecycle.core.cli.subprocess.run")
    def test_has_defined_services_resolves_config_for_active_profiles(
        self, mock_run: MagicMock, docker_cli: DockerCli
    ) -> None:
        """Test only services of the active profiles count as defined."""
        mock_run.return_value = completed(stdout=json.dumps({"name": "app", "services": {}}))

        assert DefaultDockerCompose(docker_cli).has_defined_services() is False

        cmd = mock_run.call_args[0][0]
        profile = cmd.index("--profile")
        assert cmd[profile : profile + 2] == ["--profile", "dev"]
        assert profile < cmd.index("config")
        assert cmd[-2:] == ["config", "--format=json"]

    def test_get_running_services(self, compose: DefaultDockerCompose) -> None:
        """Test running services are built from ps output."""
        services = compose.get_running_services()

        assert len(services) == 1
        service = services[0]
        assert service.name == "app-redis-1"
        assert service.service == "redis"
        assert service.image == "redis:7"
        assert service.host == "docker.local"
        assert service.get_port(6379) == 32768

    def test_get_running_services_empty(self) -> None:
        """Test no running containers gives an empty list, not None."""
        cli = RecordingDockerCli(outputs={"ps": ""})
        services = DefaultDockerCompose(cli).get_running_services()  # type: ignore[arg-type]
        assert services == []

    def test_get_running_services_skips_exited(self) -> None:
        """Test exited containers are not reported."""
        output = "\n".join(
            [
                json.dumps(ps_entry()),
                json.dumps(ps_entry(name="app-init-1", service="init", state="exited")),
            ]
        )
        cli = RecordingDockerCli(outputs={"ps": output})

        services = DefaultDockerCompose(cli).get_running_services()  # type: ignore[arg-type]

        assert [service.service for service in services] == ["redis"]

    def test_running_services_are_a_snapshot(self, compose: DefaultDockerCompose) -> None:
        """Test each call returns a new list."""
        first = compose.get_running_services()
        first.clear()
        assert len(compose.get_running_services()) == 1

    def test_hostname_deduced_when_missing(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the hostname falls back to DOCKER_HOST or localhost."""
        monkeypatch.delenv("DOCKER_HOST", raising=False)
        compose = DefaultDockerCompose(RecordingDockerCli())  # type: ignore[arg-type]
        assert compose.hostname == "127.0.0.1"


class TestFactories:
    """Test the static factory methods."""

    def test_get(self, compose_file: DockerComposeFile) -> None:
        """Test get wires options from file and profiles."""
        compose = DockerCompose.get(compose_file, "myhost", {"dev"})

        assert isinstance(compose, DefaultDockerCompose)
        assert compose.hostname == "myhost"
        assert compose.cli.options == DockerComposeOptions.get(compose_file, {"dev"}, [])

    def test_get_with_single_profile_string(self, compose_file: DockerComposeFile) -> None:
        """Test a single profile name is not split into characters."""
        compose = DockerCompose.get(compose_file, None, "dev")

        assert isinstance(compose, DefaultDockerCompose)
        assert compose.cli.options.active_profiles == frozenset({"dev"})

    def test_from_options(self, compose_file: DockerComposeFile) -> None:
        """Test from_options uses the given options."""
        options = DockerComposeOptions.get(compose_file, {"dev"}, ["--dry-run"])

        compose = DockerCompose.from_options("myhost", options)

        assert isinstance(compose, DefaultDockerCompose)
        assert compose.cli.options is options

    def test_from_options_without_options(self) -> None:
        """Test missing options fall back to NONE."""
        compose = DockerCompose.from_options(None, None)

        assert isinstance(compose, DefaultDockerCompose)
        assert compose.cli.options is DockerComposeOptions.NONE

    @patch("compose_lifecycle.core.cli.subprocess.run")
    def test_get_builds_runnable_facade(
        self, mock_run: MagicMock, compose_path: Path, compose_file: DockerComposeFile
    ) -> None:
        """Test a factory-built facade runs docker compose with the compose file."""
        mock_run.return_value = MagicMock(returncode=0, stdout="", stderr="")
        compose = DockerCompose.get(compose_file, None, set())
        assert isinstance(compose, DefaultDockerCompose)
        compose.cli._compose_executable = ["docker", "compose"]

        compose.down(DockerCompose.FORCE_STOP)

        cmd = mock_run.call_args[0][0]
        assert cmd[:4] == ["docker", "compose", "--file", str(compose_path.resolve())]
        assert cmd[-3:] == ["down", "--timeout", "0"]

    def test_docker_compose_is_abstract(self) -> None:
        """Test the facade cannot be instantiated directly."""
        with pytest.raises(TypeError):
            DockerCompose()  # type: ignore[abstract]
