"""Reference to the compose file(s) describing a service topology."""

from pathlib import Path
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from compose_lifecycle.utils.errors import ComposeFileError
from compose_lifecycle.utils.logger import get_logger

logger = get_logger(__name__)


class DockerComposeFile(BaseModel):
    """One or more existing docker compose files.

    Instances are created through :meth:`find` or :meth:`of`, both of which
    verify the files exist before the reference is handed to the CLI.
    """

    model_config = ConfigDict(frozen=True)

    SEARCH_ORDER: ClassVar[tuple[str, ...]] = (
        "compose.yaml",
        "compose.yml",
        "docker-compose.yaml",
        "docker-compose.yml",
    )

    files: tuple[Path, ...] = Field(description="Absolute paths of the compose files")

    @classmethod
    def find(cls, working_directory: str | Path | None = None) -> "DockerComposeFile | None":
        """Find the compose file in a directory using the standard search order.

        Args:
            working_directory: Directory to search (defaults to the current directory)

        Returns:
            The compose file reference, or None if no candidate exists

        Raises:
            ComposeFileError: If the directory does not exist or is not a directory

        """
        base = Path(working_directory) if working_directory is not None else Path.cwd()
        if not base.exists():
            raise ComposeFileError(f"Working directory not found: {base}")
        if not base.is_dir():
            raise ComposeFileError(f"Working directory is not a directory: {base}")

        for candidate in cls.SEARCH_ORDER:
            path = base / candidate
            if path.is_file():
                logger.debug(f"Found compose file: {path}")
                return cls.of(path)

        logger.debug(f"No compose file found in {base}")
        return None

    @classmethod
    def of(cls, *files: str | Path) -> "DockerComposeFile":
        """Create a reference to one or more existing compose files.

        Raises:
            ComposeFileError: If no file is given, or a file is missing or not a regular file

        """
        if not files:
            raise ComposeFileError("At least one compose file is required")

        resolved = []
        for file in files:
            path = Path(file)
            if not path.exists():
                raise ComposeFileError(f"Compose file not found: {file}")
            if not path.is_file():
                raise ComposeFileError(f"Compose file path is not a file: {file}")
            resolved.append(path.resolve())

        return cls(files=tuple(resolved))

    def __str__(self) -> str:
        return ", ".join(str(file) for file in self.files)
