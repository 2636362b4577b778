"""Options applied to every docker compose command."""

from collections.abc import Iterable
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from compose_lifecycle.core.compose_file import DockerComposeFile


def _as_tuple(values: Iterable[str] | str | None) -> tuple[str, ...]:
    if values is None:
        return ()
    if isinstance(values, str):
        return (values,)
    return tuple(values)


class DockerComposeOptions(BaseModel):
    """Docker compose options that should be applied before any subcommand."""

    model_config = ConfigDict(frozen=True)

    NONE: ClassVar["DockerComposeOptions"]

    compose_file: DockerComposeFile | None = Field(
        default=None,
        description="Compose file to use (None lets docker compose find its default file)",
    )
    active_profiles: frozenset[str] = Field(
        default_factory=frozenset,
        description="Compose profiles to activate",
    )
    arguments: tuple[str, ...] = Field(
        default=(),
        description="Additional docker compose arguments, in order",
    )

    @field_validator("active_profiles", "arguments", mode="before")
    @classmethod
    def as_collection(cls, value: Any) -> Any:
        """Treat a missing collection as empty and a single string as one item."""
        if value is None or isinstance(value, str):
            return _as_tuple(value)
        return value

    @classmethod
    def get(
        cls,
        compose_file: DockerComposeFile | None,
        active_profiles: Iterable[str] | str | None,
        arguments: Iterable[str] | str | None,
    ) -> "DockerComposeOptions":
        """Create options from a compose file, active profiles and extra arguments."""
        return cls(
            compose_file=compose_file,
            active_profiles=frozenset(_as_tuple(active_profiles)),
            arguments=_as_tuple(arguments),
        )


DockerComposeOptions.NONE = DockerComposeOptions.get(None, frozenset(), ())
