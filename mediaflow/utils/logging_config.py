"""
Logging Configuration

Sets up the ``mediaflow`` log output for the CLI and for embedding
applications:
- Human-readable console output on stderr
- Optional rotating log file
- Debug dump of the resolved settings
"""

import logging
import logging.handlers
import sys
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional


class LogLevel(Enum):
    """Supported logging levels."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


LEVELS = {
    LogLevel.DEBUG.value: logging.DEBUG,
    LogLevel.INFO.value: logging.INFO,
    LogLevel.WARNING.value: logging.WARNING,
    LogLevel.ERROR.value: logging.ERROR,
}

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_MAX_BYTES = 10 * 1024 * 1024  # 10MB
DEFAULT_BACKUP_COUNT = 5


def resolve_level(level: str) -> int:
    """Map a level name to its logging constant; unknown names mean INFO."""
    return LEVELS.get(str(level).lower(), logging.INFO)


class LoggingConfig:
    """
    Owns the handlers mediaflow installs on the root logger.

    Reconfiguring removes the previous handlers first, so repeated CLI
    invocations in one process never duplicate output.
    """

    def __init__(self):
        self._configured = False
        self._console_handler: Optional[logging.Handler] = None
        self._log_file_handler: Optional[logging.Handler] = None

    def configure_logging(
        self,
        level: str = LogLevel.INFO.value,
        log_file: Optional[str] = None,
        include_timestamps: bool = True,
        max_log_file_size: int = DEFAULT_MAX_BYTES,
        backup_count: int = DEFAULT_BACKUP_COUNT,
        force: bool = False,
    ) -> None:
        """
        Configure logging for the application.

        Args:
            level: Logging level (debug, info, warning, error)
            log_file: Optional log file path, rotated at ``max_log_file_size``
            include_timestamps: Prefix console lines with the time
            max_log_file_size: Maximum log file size before rotation
            backup_count: Number of rotated files to keep
            force: Reconfigure even if logging was already configured
        """
        if self._configured and not force:
            return

        numeric_level = resolve_level(level)
        root_logger = logging.getLogger()
        self._remove_handlers(root_logger)
        root_logger.setLevel(numeric_level)

        debug_mode = numeric_level == logging.DEBUG
        self._console_handler = logging.StreamHandler(sys.stderr)
        self._console_handler.setLevel(numeric_level)
        self._console_handler.setFormatter(self._console_formatter(include_timestamps, debug_mode))
        root_logger.addHandler(self._console_handler)

        if log_file:
            self._log_file_handler = self._file_handler(log_file, numeric_level, max_log_file_size, backup_count)
            if self._log_file_handler is not None:
                root_logger.addHandler(self._log_file_handler)

        self._configured = True
        logging.getLogger(__name__).debug(f"Logging configured: level={level}, file={log_file}")

    def _remove_handlers(self, root_logger: logging.Logger) -> None:
        for handler in (self._console_handler, self._log_file_handler):
            if handler is not None:
                root_logger.removeHandler(handler)
                handler.close()
        self._console_handler = None
        self._log_file_handler = None

    @staticmethod
    def _console_formatter(include_timestamps: bool, debug_mode: bool) -> logging.Formatter:
        parts: List[str] = []
        if include_timestamps:
            parts.append("%(asctime)s")
        if debug_mode:
            parts.append("%(name)s")
        parts.extend(["%(levelname)s", "%(message)s"])
        return logging.Formatter(" - ".join(parts), datefmt="%Y-%m-%d %H:%M:%S" if debug_mode else "%H:%M:%S")

    @staticmethod
    def _file_handler(log_file: str, numeric_level: int, max_bytes: int, backup_count: int) -> Optional[logging.Handler]:
        try:
            Path(log_file).parent.mkdir(parents=True, exist_ok=True)
            handler = logging.handlers.RotatingFileHandler(
                log_file, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
            )
        except OSError as e:
            # Console output still works without the file
            logging.getLogger(__name__).warning(f"Failed to setup log file {log_file}: {e}")
            return None
        handler.setLevel(numeric_level)
        handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        return handler

    def log_configuration_details(self, settings: Dict[str, Any]) -> None:
        """Log resolved settings at debug level."""
        logger = logging.getLogger(__name__)
        if not logger.isEnabledFor(logging.DEBUG):
            return
        logger.debug("=== Configuration Details ===")
        for key, value in settings.items():
            logger.debug(f"  {key}: {value}")
        logger.debug("=== End Configuration ===")

    def is_debug_enabled(self) -> bool:
        return logging.getLogger().isEnabledFor(logging.DEBUG)


# Global logging configuration instance
logging_config = LoggingConfig()


def configure_logging(level: str = LogLevel.INFO.value, log_file: Optional[str] = None, force: bool = False) -> None:
    """Configure logging through the global LoggingConfig instance."""
    logging_config.configure_logging(level=level, log_file=log_file, force=force)
