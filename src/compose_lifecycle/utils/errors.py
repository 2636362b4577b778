"""Custom exceptions for compose-lifecycle."""


class ComposeLifecycleError(Exception):
    """Base exception for all compose-lifecycle errors."""


class ValidationError(ComposeLifecycleError):
    """Raised when input validation fails."""


class ComposeFileError(ComposeLifecycleError):
    """Raised when a compose file cannot be located or is not usable."""


class DockerError(ComposeLifecycleError):
    """Base exception for failures reported by the docker CLI."""


class DockerProcessStartError(DockerError):
    """Raised when the docker or docker compose executable cannot be started."""


class ProcessExitError(DockerError):
    """Raised when a docker command exits with a non-zero status."""

    def __init__(self, command: list[str], exit_code: int, stdout: str, stderr: str) -> None:
        self.command = command
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(
            f"'{' '.join(command)}' failed with exit code {exit_code}: "
            f"{(stderr or stdout or 'no output').strip()}"
        )


class DockerNotRunningError(ProcessExitError):
    """Raised when the docker daemon cannot be reached."""


class DockerOutputParseError(DockerError):
    """Raised when docker command output cannot be parsed."""
