"""Docker compose facade and the CLI collaborator it delegates to."""

from compose_lifecycle.core.cli import DockerCli
from compose_lifecycle.core.compose import DefaultDockerCompose, DockerCompose
from compose_lifecycle.core.compose_file import DockerComposeFile
from compose_lifecycle.core.docker_host import DockerHost
from compose_lifecycle.core.log_level import LogLevel
from compose_lifecycle.core.options import DockerComposeOptions
from compose_lifecycle.core.running_service import RunningService

__all__ = [
    "DefaultDockerCompose",
    "DockerCli",
    "DockerCompose",
    "DockerComposeFile",
    "DockerComposeOptions",
    "DockerHost",
    "LogLevel",
    "RunningService",
]
