"""Utility modules for compose-lifecycle."""

from compose_lifecycle.utils.errors import (
    ComposeFileError,
    ComposeLifecycleError,
    DockerError,
    DockerNotRunningError,
    DockerOutputParseError,
    DockerProcessStartError,
    ProcessExitError,
    ValidationError,
)

__all__ = [
    "ComposeFileError",
    "ComposeLifecycleError",
    "DockerError",
    "DockerNotRunningError",
    "DockerOutputParseError",
    "DockerProcessStartError",
    "ProcessExitError",
    "ValidationError",
]
