"""compose-lifecycle command line entry point."""

from datetime import timedelta
from pathlib import Path
from typing import NoReturn

import typer

from compose_lifecycle.config import LoggingConfig
from compose_lifecycle.core.compose import DockerCompose
from compose_lifecycle.core.compose_file import DockerComposeFile
from compose_lifecycle.core.log_level import LogLevel
from compose_lifecycle.core.options import DockerComposeOptions
from compose_lifecycle.utils.errors import ComposeLifecycleError
from compose_lifecycle.utils.logger import get_logger, setup_logger
from compose_lifecycle.version import __version__

logger = get_logger(__name__)

app = typer.Typer(
    name="compose-lifecycle",
    help="Start, stop and query docker compose services",
    add_completion=False,
)

FILE_OPTION = typer.Option(None, "--file", "-f", help="Compose file (repeatable)")
PROFILE_OPTION = typer.Option(None, "--profile", "-p", help="Profile to activate (repeatable)")
HOST_OPTION = typer.Option(None, "--host", help="Hostname services are reachable on")
ARG_OPTION = typer.Option(
    None, "--arg", help="Extra docker compose argument before the subcommand (repeatable)"
)
LOG_LEVEL_OPTION = typer.Option(LogLevel.INFO, "--log-level", help="Level for command output")
TIMEOUT_OPTION = typer.Option(10.0, "--timeout", "-t", min=0, help="Seconds to wait for stop")
FORCE_OPTION = typer.Option(False, "--force", help="Stop without waiting")
EXTRA_ARGS = typer.Argument(None, help="Extra arguments for the subcommand")


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"compose-lifecycle {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(  # noqa: ARG001
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Configure logging for every command."""
    setup_logger(LoggingConfig())


def _compose(
    files: list[Path] | None,
    profiles: list[str] | None,
    host: str | None,
    arguments: list[str] | None,
) -> DockerCompose:
    try:
        compose_file = DockerComposeFile.of(*files) if files else None
    except ComposeLifecycleError as e:
        _fail(e)
    options = DockerComposeOptions.get(compose_file, profiles, arguments)
    return DockerCompose.from_options(host, options)


def _timeout(seconds: float, force: bool) -> timedelta:
    return DockerCompose.FORCE_STOP if force else timedelta(seconds=seconds)


def _fail(error: Exception) -> NoReturn:
    logger.error(str(error))
    typer.echo(f"Error: {error}", err=True)
    raise typer.Exit(code=1)


@app.command()
def up(
    extra: list[str] | None = EXTRA_ARGS,
    files: list[Path] | None = FILE_OPTION,
    profiles: list[str] | None = PROFILE_OPTION,
    host: str | None = HOST_OPTION,
    arguments: list[str] | None = ARG_OPTION,
    log_level: LogLevel = LOG_LEVEL_OPTION,
) -> None:
    """Create and start services, waiting until they are healthy."""
    try:
        _compose(files, profiles, host, arguments).up(log_level, extra)
    except ComposeLifecycleError as e:
        _fail(e)


@app.command()
def down(
    extra: list[str] | None = EXTRA_ARGS,
    files: list[Path] | None = FILE_OPTION,
    profiles: list[str] | None = PROFILE_OPTION,
    host: str | None = HOST_OPTION,
    arguments: list[str] | None = ARG_OPTION,
    timeout: float = TIMEOUT_OPTION,
    force: bool = FORCE_OPTION,
) -> None:
    """Stop and remove services."""
    try:
        _compose(files, profiles, host, arguments).down(_timeout(timeout, force), extra)
    except ComposeLifecycleError as e:
        _fail(e)


@app.command()
def start(
    extra: list[str] | None = EXTRA_ARGS,
    files: list[Path] | None = FILE_OPTION,
    profiles: list[str] | None = PROFILE_OPTION,
    host: str | None = HOST_OPTION,
    arguments: list[str] | None = ARG_OPTION,
    log_level: LogLevel = LOG_LEVEL_OPTION,
) -> None:
    """Start existing services, waiting until they are healthy."""
    try:
        _compose(files, profiles, host, arguments).start(log_level, extra)
    except ComposeLifecycleError as e:
        _fail(e)


@app.command()
def stop(
    extra: list[str] | None = EXTRA_ARGS,
    files: list[Path] | None = FILE_OPTION,
    profiles: list[str] | None = PROFILE_OPTION,
    host: str | None = HOST_OPTION,
    arguments: list[str] | None = ARG_OPTION,
    timeout: float = TIMEOUT_OPTION,
    force: bool = FORCE_OPTION,
) -> None:
    """Stop services without removing them."""
    try:
        _compose(files, profiles, host, arguments).stop(_timeout(timeout, force), extra)
    except ComposeLifecycleError as e:
        _fail(e)


@app.command()
def ps(
    files: list[Path] | None = FILE_OPTION,
    profiles: list[str] | None = PROFILE_OPTION,
    host: str | None = HOST_OPTION,
    arguments: list[str] | None = ARG_OPTION,
) -> None:
    """List running services."""
    try:
        running = _compose(files, profiles, host, arguments).get_running_services()
    except ComposeLifecycleError as e:
        _fail(e)

    for service in running:
        ports = ", ".join(
            f"{service.host}:{published}->{target}"
            for target, published in sorted(service.ports.items())
        )
        typer.echo(f"{service.name}\t{service.service}\t{service.image}\t{service.state}\t{ports}")


@app.command()
def services(
    files: list[Path] | None = FILE_OPTION,
    profiles: list[str] | None = PROFILE_OPTION,
    host: str | None = HOST_OPTION,
    arguments: list[str] | None = ARG_OPTION,
) -> None:
    """Exit with status 0 if services are defined for the active profiles, 1 otherwise."""
    try:
        defined = _compose(files, profiles, host, arguments).has_defined_services()
    except ComposeLifecycleError as e:
        _fail(e)

    typer.echo("Services defined" if defined else "No services defined")
    if not defined:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
