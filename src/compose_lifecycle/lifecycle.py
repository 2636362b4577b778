"""Starts and stops docker compose services around an application run."""

from datetime import timedelta
from pathlib import Path
from types import TracebackType

from compose_lifecycle.config import (
    DockerComposeSettings,
    LifecycleManagement,
    StartCommand,
    StartSkip,
    StopCommand,
)
from compose_lifecycle.core.compose import DockerCompose
from compose_lifecycle.core.compose_file import DockerComposeFile
from compose_lifecycle.core.options import DockerComposeOptions
from compose_lifecycle.core.running_service import RunningService
from compose_lifecycle.utils.errors import ComposeFileError
from compose_lifecycle.utils.logger import get_logger

logger = get_logger(__name__)


class ComposeLifecycleManager:
    """Manages the docker compose lifecycle described by DockerComposeSettings.

    Usage:
        with ComposeLifecycleManager(DockerComposeSettings()) as services:
            ...

    Services are only stopped if this manager started them and the
    lifecycle management mode includes stopping.
    """

    def __init__(
        self,
        settings: DockerComposeSettings,
        working_directory: str | Path | None = None,
    ) -> None:
        self.settings = settings
        self.working_directory = Path(working_directory) if working_directory else None
        self._compose: DockerCompose | None = None
        self._started = False

    def start(self) -> list[RunningService]:
        """Start services if needed and return the running services.

        Raises:
            ComposeFileError: If no compose file can be found

        """
        if not self.settings.enabled:
            logger.info("Docker compose support is disabled")
            return []

        compose_file = self._resolve_compose_file()
        options = DockerComposeOptions.get(
            compose_file, self.settings.profiles, self.settings.arguments
        )
        compose = self._create_compose(options)
        self._compose = compose

        if not compose.has_defined_services():
            logger.warning(f"No services defined in compose file {compose_file}")
            return []

        if self.settings.lifecycle_management is LifecycleManagement.none:
            logger.info("Lifecycle management disabled, using existing services")
            return compose.get_running_services()

        if self.settings.start_skip is StartSkip.if_running and compose.get_running_services():
            logger.info("Services are already running, skipping start")
        else:
            logger.info(f"Starting services with '{self.settings.start_command.value}'")
            log_level = self.settings.start_log_level
            arguments = self.settings.start_arguments
            if self.settings.start_command is StartCommand.up:
                compose.up(log_level, arguments)
            else:
                compose.start(log_level, arguments)
            self._started = True

        try:
            return compose.get_running_services()
        except BaseException:
            # __exit__ never runs when __enter__ raises
            if self._started:
                logger.error("Listing services after start failed, stopping started services")
                self.stop()
            raise

    def stop(self) -> None:
        """Stop the services started by this manager, if configured to."""
        if self._compose is None or not self._started:
            return
        if self.settings.lifecycle_management is not LifecycleManagement.start_and_stop:
            return

        timeout = timedelta(seconds=self.settings.stop_timeout)
        arguments = self.settings.stop_arguments
        logger.info(f"Stopping services with '{self.settings.stop_command.value}'")
        if self.settings.stop_command is StopCommand.down:
            self._compose.down(timeout, arguments)
        else:
            self._compose.stop(timeout, arguments)
        self._started = False

    def _resolve_compose_file(self) -> DockerComposeFile:
        if self.settings.file is not None:
            file = self.settings.file
            if self.working_directory is not None and not file.is_absolute():
                file = self.working_directory / file
            return DockerComposeFile.of(file)

        compose_file = DockerComposeFile.find(self.working_directory)
        if compose_file is None:
            location = self.working_directory or Path.cwd()
            raise ComposeFileError(
                f"No compose file found in {location}. "
                f"Looked for: {', '.join(DockerComposeFile.SEARCH_ORDER)}"
            )
        return compose_file

    def _create_compose(self, options: DockerComposeOptions) -> DockerCompose:
        return DockerCompose.from_options(self.settings.host, options)

    def __enter__(self) -> list[RunningService]:
        return self.start()

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.stop()
