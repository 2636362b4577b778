"""Logging configuration using loguru."""

import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

from loguru import logger

if TYPE_CHECKING:
    from compose_lifecycle.config import LoggingConfig

LOG_FILE_ROTATION = "10 MB"
LOG_FILE_RETENTION = "7 days"


def _sink_options(config: "LoggingConfig") -> dict[str, Any]:
    if config.json_logging:
        # Tracebacks in JSON records never include local variable values
        return {"level": config.log_level, "serialize": True, "backtrace": True, "diagnose": False}
    return {
        "level": config.log_level,
        "format": config.log_format,
        "backtrace": True,
        "diagnose": True,
    }


def setup_logger(config: "LoggingConfig", log_file: Path | None = None) -> None:
    """Replace loguru's default handler with the configured sinks.

    Messages go to stderr, either colourised for a terminal or as JSON
    records. A log file, when given here or through ``config.log_file``, gets
    the same records with size-based rotation.

    Args:
        config: Logging configuration
        log_file: Log file path, overriding ``config.log_file``

    """
    logger.remove()

    options = _sink_options(config)
    logger.add(sys.stderr, colorize=not config.json_logging, **options)

    log_file = log_file or config.log_file
    if log_file:
        logger.add(
            log_file,
            rotation=LOG_FILE_ROTATION,
            retention=LOG_FILE_RETENTION,
            compression="zip",
            **options,
        )

    logger.debug(
        f"Logger initialized with level {config.log_level}"
        + (f", writing to {log_file}" if log_file else "")
    )


def get_logger(name: str | None = None) -> Any:  # noqa: ARG001
    """Return the shared loguru logger.

    Loguru has a single logger; the name is accepted so modules can call
    ``get_logger(__name__)`` the way they would with the logging module.
    """
    return logger
