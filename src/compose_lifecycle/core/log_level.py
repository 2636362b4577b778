"""Log levels used to report docker compose progress."""

from enum import Enum

from compose_lifecycle.utils.logger import get_logger

logger = get_logger(__name__)


class LogLevel(str, Enum):
    """Log level for command output, mapped onto loguru levels."""

    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"
    FATAL = "FATAL"
    OFF = "OFF"

    @property
    def loguru_level(self) -> str | None:
        """Return the loguru level name, or None when logging is off."""
        return _LOGURU_LEVELS[self]

    def log(self, message: str) -> None:
        """Log a message at this level."""
        level = self.loguru_level
        if level is not None:
            logger.opt(depth=1).log(level, message)


_LOGURU_LEVELS: dict[LogLevel, str | None] = {
    LogLevel.TRACE: "TRACE",
    LogLevel.DEBUG: "DEBUG",
    LogLevel.INFO: "INFO",
    LogLevel.WARN: "WARNING",
    LogLevel.ERROR: "ERROR",
    LogLevel.FATAL: "CRITICAL",
    LogLevel.OFF: None,
}
