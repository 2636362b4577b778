"""Docker CLI wrapper running docker and docker compose as subprocesses."""

import subprocess
from pathlib import Path
from typing import TypeVar

from compose_lifecycle.core.commands import (
    CommandType,
    ComposeVersion,
    DockerCliCommand,
    DockerVersion,
)
from compose_lifecycle.core.log_level import LogLevel
from compose_lifecycle.core.options import DockerComposeOptions
from compose_lifecycle.utils.errors import (
    DockerError,
    DockerNotRunningError,
    DockerOutputParseError,
    DockerProcessStartError,
    ProcessExitError,
    ValidationError,
)
from compose_lifecycle.utils.logger import get_logger

logger = get_logger(__name__)

ResponseT = TypeVar("ResponseT")

DOCKER_NOT_RUNNING_MARKERS = (
    "cannot connect to the docker daemon",
    "is the docker daemon running",
    "docker daemon is not running",
    "error during connect",
)


def _is_docker_not_running(output: str) -> bool:
    lowered = output.lower()
    return any(marker in lowered for marker in DOCKER_NOT_RUNNING_MARKERS)


class DockerCli:
    """Runs docker CLI commands for a compose project."""

    def __init__(
        self,
        working_directory: str | Path | None = None,
        options: DockerComposeOptions | None = None,
    ) -> None:
        """Initialize the docker CLI wrapper.

        Args:
            working_directory: Directory commands run in (None = current directory)
            options: Compose options applied to every compose command

        """
        self.working_directory = Path(working_directory) if working_directory else None
        self.options = options if options is not None else DockerComposeOptions.NONE
        self._compose_executable: list[str] | None = None

        logger.debug(
            f"Initialized DockerCli with file={self.options.compose_file}, "
            f"profiles={sorted(self.options.active_profiles)}, "
            f"arguments={list(self.options.arguments)}"
        )

    def run(self, command: DockerCliCommand[ResponseT]) -> ResponseT:
        """Run a command and parse its output.

        Raises:
            DockerProcessStartError: If the executable cannot be started
            ProcessExitError: If the command exits with a non-zero status
            DockerOutputParseError: If the output cannot be parsed

        """
        cmd = self._build_command(command)
        result = self._execute(cmd)
        self._log_output(command.log_level, result)
        return command.parse(result.stdout)

    @property
    def compose_executable(self) -> list[str]:
        """Return the compose executable, detecting it on first use."""
        if self._compose_executable is None:
            self._compose_executable = self._detect_compose_executable()
        return self._compose_executable

    def _detect_compose_executable(self) -> list[str]:
        docker_version = DockerVersion()
        version = docker_version.parse(self._execute(["docker", *docker_version.args()]).stdout)
        logger.debug(f"Docker version: {version.client.version if version.client else 'unknown'}")

        compose_version = ComposeVersion()
        for candidate in (["docker", "compose"], ["docker-compose"]):
            try:
                result = self._execute([*candidate, *compose_version.args()])
            except DockerNotRunningError:
                raise
            except DockerError as e:
                logger.debug(f"'{' '.join(candidate)}' unavailable: {e}")
                continue
            response = compose_version.parse(result.stdout)
            logger.success(f"Using {' '.join(candidate)} {response.version}")
            return candidate

        raise DockerProcessStartError(
            "Unable to find docker compose. Please ensure Docker Compose is installed."
        )

    def _build_command(self, command: DockerCliCommand[ResponseT]) -> list[str]:
        args = self._sanitize_command_args(command.args())
        if command.command_type is CommandType.DOCKER:
            return ["docker", *args]

        cmd = list(self.compose_executable)
        if self.options.compose_file is not None:
            for file in self.options.compose_file.files:
                cmd.extend(["--file", str(file)])
        cmd.extend(["--ansi", "never"])
        for profile in self._sanitize_command_args(sorted(self.options.active_profiles)):
            cmd.extend(["--profile", profile])
        cmd.extend(self._sanitize_command_args(list(self.options.arguments)))
        cmd.extend(args)
        return cmd

    def _sanitize_command_args(self, args: list[str]) -> list[str]:
        """Reject arguments that cannot be passed safely to a process.

        Commands run without a shell, so shell metacharacters are literal.
        Only null bytes and line breaks are refused.

        Raises:
            ValidationError: If an argument contains a null byte or a newline

        """
        sanitized = []
        for arg in args:
            arg_str = str(arg)
            if "\x00" in arg_str:
                raise ValidationError(f"Argument contains null byte: {arg_str!r}")
            if "\n" in arg_str or "\r" in arg_str:
                raise ValidationError(f"Argument contains newline character: {arg_str!r}")
            sanitized.append(arg_str)
        return sanitized

    def _execute(self, cmd: list[str]) -> subprocess.CompletedProcess[str]:
        logger.debug(f"Executing docker command: {' '.join(cmd)}")

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                cwd=self.working_directory,
                check=True,
            )
        except FileNotFoundError as e:
            logger.error(f"{cmd[0]} command not found")
            raise DockerProcessStartError(
                f"Unable to start '{cmd[0]}'. Please ensure Docker is installed."
            ) from e
        except subprocess.CalledProcessError as e:
            stdout = e.stdout or ""
            stderr = e.stderr or ""
            logger.error(f"Command failed with exit code {e.returncode}: {stderr.strip()}")
            if _is_docker_not_running(stderr) or _is_docker_not_running(stdout):
                raise DockerNotRunningError(cmd, e.returncode, stdout, stderr) from e
            raise ProcessExitError(cmd, e.returncode, stdout, stderr) from e
        except UnicodeDecodeError as e:
            logger.error(f"Output of '{cmd[0]}' is not valid UTF-8")
            raise DockerOutputParseError(
                f"Output of '{' '.join(cmd)}' is not valid UTF-8: {e}"
            ) from e

        logger.debug(f"Command completed with exit code: {result.returncode}")
        return result

    def _log_output(
        self, log_level: LogLevel, result: subprocess.CompletedProcess[str]
    ) -> None:
        if log_level is LogLevel.OFF:
            return
        for stream in (result.stdout, result.stderr):
            for line in (stream or "").splitlines():
                if line.strip():
                    log_level.log(line)

    def __repr__(self) -> str:
        """Return string representation."""
        executable = " ".join(self._compose_executable) if self._compose_executable else "unknown"
        return (
            f"DockerCli(file={self.options.compose_file}, "
            f"profiles={sorted(self.options.active_profiles)}, "
            f"executable={executable})"
        )
