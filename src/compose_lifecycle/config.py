"""Configuration management for compose-lifecycle."""

import json
from enum import Enum
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from compose_lifecycle.core.log_level import LogLevel


def _parse_list_setting(value: str | list[str] | None) -> list[str]:
    """Turn a list setting into a list of non-empty strings.

    Environment values are either a JSON array (``'["--volumes"]'``), which
    keeps commas inside items, or a comma-separated string (``"dev, debug"``).
    """
    if not value:
        return []
    if isinstance(value, str):
        text = value.strip()
        items: list[object] | None = None
        if text.startswith("["):
            try:
                parsed = json.loads(text)
            except json.JSONDecodeError:
                parsed = None
            if isinstance(parsed, list):
                items = parsed
        if items is None:
            items = list(text.split(","))
    else:
        items = list(value)
    return [str(item).strip() for item in items if str(item).strip()]


class LifecycleManagement(str, Enum):
    """How much of the compose lifecycle is managed."""

    none = "none"
    start_only = "start_only"
    start_and_stop = "start_and_stop"


class StartCommand(str, Enum):
    """Command used to start services."""

    up = "up"
    start = "start"


class StopCommand(str, Enum):
    """Command used to stop services."""

    down = "down"
    stop = "stop"


class StartSkip(str, Enum):
    """When starting services is skipped."""

    never = "never"
    if_running = "if_running"


class DockerComposeSettings(BaseSettings):
    """Docker compose lifecycle configuration."""

    model_config = SettingsConfigDict(
        env_prefix="DOCKER_COMPOSE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    enabled: bool = Field(
        default=True,
        description="Enable docker compose lifecycle management",
    )
    file: Path | None = Field(
        default=None,
        description="Compose file to use (searched for in the working directory if unset)",
    )
    host: str | None = Field(
        default=None,
        description="Hostname services are reachable on (deduced from DOCKER_HOST if unset)",
    )
    lifecycle_management: LifecycleManagement = Field(
        default=LifecycleManagement.start_and_stop,
        description="Lifecycle management mode",
    )

    # Note: Using str | list[str] type to prevent Pydantic Settings from trying JSON parsing
    # on plain strings. The validator handles conversion to list[str].
    profiles: str | list[str] = Field(
        default=[],
        description="Compose profiles to activate. Comma-separated via DOCKER_COMPOSE_PROFILES.",
    )
    arguments: str | list[str] = Field(
        default=[],
        description="Arguments passed to docker compose before every subcommand",
    )

    start_command: StartCommand = Field(
        default=StartCommand.up,
        description="Command used to start services",
    )
    start_log_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Log level for output of the start command",
    )
    start_skip: StartSkip = Field(
        default=StartSkip.if_running,
        description="Whether to skip starting when services are already running",
    )
    start_arguments: str | list[str] = Field(
        default=[],
        description="Extra arguments for the start command",
    )

    stop_command: StopCommand = Field(
        default=StopCommand.stop,
        description="Command used to stop services",
    )
    stop_timeout: float = Field(
        default=10,
        description="Seconds to wait for services to stop gracefully (0 = force stop)",
        ge=0,
    )
    stop_arguments: str | list[str] = Field(
        default=[],
        description="Extra arguments for the stop command",
    )

    @field_validator(
        "profiles",
        "arguments",
        "start_arguments",
        "stop_arguments",
        mode="before",
    )
    @classmethod
    def parse_list(cls, value: str | list[str] | None) -> list[str]:
        """Parse list from comma-separated string, JSON array or list."""
        return _parse_list_setting(value)

    @field_validator("start_log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: object) -> object:
        """Accept log levels in any case."""
        if isinstance(value, str):
            return value.upper()
        return value


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="COMPOSE_LIFECYCLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level (TRACE, DEBUG, INFO, SUCCESS, WARNING, ERROR, CRITICAL)",
    )
    log_format: str = Field(
        default=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        description="Log format string for loguru",
    )
    json_logging: bool = Field(
        default=False,
        description="Enable JSON structured logging",
    )
    log_file: Path | None = Field(
        default=None,
        description="Optional file that receives a rotated copy of the log",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, level: str) -> str:
        """Validate log level."""
        valid_levels = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}
        level_upper = level.upper()
        if level_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {level}. Must be one of {valid_levels}")
        return level_upper


class Config:
    """Main configuration container."""

    def __init__(self) -> None:
        """Initialize configuration from environment and .env file."""
        self.compose = DockerComposeSettings()
        self.logging = LoggingConfig()

    def __repr__(self) -> str:
        """Return string representation of config."""
        return f"Config(compose={self.compose!r}, logging={self.logging!r})"
