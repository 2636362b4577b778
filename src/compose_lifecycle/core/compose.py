"""High-level API to work with docker compose."""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from datetime import timedelta
from typing import ClassVar

from compose_lifecycle.core.cli import DockerCli
from compose_lifecycle.core.commands import (
    ComposeConfig,
    ComposeDown,
    ComposePs,
    ComposeStart,
    ComposeStop,
    ComposeUp,
)
from compose_lifecycle.core.compose_file import DockerComposeFile
from compose_lifecycle.core.docker_host import DockerHost
from compose_lifecycle.core.log_level import LogLevel
from compose_lifecycle.core.options import DockerComposeOptions
from compose_lifecycle.core.running_service import RunningService
from compose_lifecycle.utils.logger import get_logger

logger = get_logger(__name__)


class DockerCompose(ABC):
    """Start, stop and query the services of a docker compose project.

    Lifecycle calls block until docker compose returns. Failures from the
    CLI propagate to the caller unchanged; nothing is retried.
    """

    FORCE_STOP: ClassVar[timedelta] = timedelta(0)
    """Timeout requesting a stop without waiting for graceful shutdown."""

    @abstractmethod
    def up(self, log_level: LogLevel, arguments: Iterable[str] | None = None) -> None:
        """Run `docker compose up` to create and start services.

        Waits until all containers are started and healthy.

        Args:
            log_level: Log level used to report progress
            arguments: Extra arguments for the up command

        """

    @abstractmethod
    def down(self, timeout: timedelta, arguments: Iterable[str] | None = None) -> None:
        """Run `docker compose down` to stop and remove running services.

        Args:
            timeout: Time to wait, or FORCE_STOP to stop without waiting
            arguments: Extra arguments for the down command

        """

    @abstractmethod
    def start(self, log_level: LogLevel, arguments: Iterable[str] | None = None) -> None:
        """Run `docker compose start` to start services.

        Waits until all containers are started and healthy.

        Args:
            log_level: Log level used to report progress
            arguments: Extra arguments for the start command

        """

    @abstractmethod
    def stop(self, timeout: timedelta, arguments: Iterable[str] | None = None) -> None:
        """Run `docker compose stop` to stop running services.

        Args:
            timeout: Time to wait, or FORCE_STOP to stop without waiting
            arguments: Extra arguments for the stop command

        """

    @abstractmethod
    def has_defined_services(self) -> bool:
        """Return whether the compose file defines services for the active profiles."""

    @abstractmethod
    def get_running_services(self) -> list[RunningService]:
        """Return the running services for the active profiles (empty if none)."""

    @staticmethod
    def get(
        compose_file: DockerComposeFile | None,
        hostname: str | None,
        active_profiles: Iterable[str] | str | None,
    ) -> "DockerCompose":
        """Create a DockerCompose for a compose file and set of active profiles.

        Args:
            compose_file: The compose file (None uses the docker compose default)
            hostname: Hostname used for services, or None to deduce it
            active_profiles: Profiles to activate

        """
        options = DockerComposeOptions.get(compose_file, active_profiles, ())
        return DefaultDockerCompose(DockerCli(None, options), hostname)

    @staticmethod
    def from_options(
        hostname: str | None, options: DockerComposeOptions | None = None
    ) -> "DockerCompose":
        """Create a DockerCompose from pre-built options.

        Args:
            hostname: Hostname used for services, or None to deduce it
            options: Compose options, or None for DockerComposeOptions.NONE

        """
        return DefaultDockerCompose(DockerCli(None, options), hostname)


class DefaultDockerCompose(DockerCompose):
    """DockerCompose backed by a :class:`DockerCli`."""

    def __init__(self, cli: DockerCli, hostname: str | None = None) -> None:
        self.cli = cli
        self.hostname = DockerHost.get(hostname)

    def up(self, log_level: LogLevel, arguments: Iterable[str] | None = None) -> None:
        self.cli.run(ComposeUp(log_level, tuple(arguments or ())))

    def down(self, timeout: timedelta, arguments: Iterable[str] | None = None) -> None:
        self.cli.run(ComposeDown(timeout, tuple(arguments or ())))

    def start(self, log_level: LogLevel, arguments: Iterable[str] | None = None) -> None:
        self.cli.run(ComposeStart(log_level, tuple(arguments or ())))

    def stop(self, timeout: timedelta, arguments: Iterable[str] | None = None) -> None:
        self.cli.run(ComposeStop(timeout, tuple(arguments or ())))

    def has_defined_services(self) -> bool:
        return bool(self.cli.run(ComposeConfig()).services)

    def get_running_services(self) -> list[RunningService]:
        entries = [entry for entry in self.cli.run(ComposePs()) if entry.is_running]
        services = [RunningService.from_ps_response(entry, self.hostname) for entry in entries]
        logger.debug(f"Found {len(services)} running service(s)")
        return services

    def __repr__(self) -> str:
        """Return string representation."""
        return f"DefaultDockerCompose(cli={self.cli!r}, hostname={self.hostname})"
