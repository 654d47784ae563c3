"""Custom logging utilities for the GlossaryGate application."""

import logging
import sys
import time
from logging import FileHandler
from pathlib import Path

from . import paths


def _format_utc_time(formatter: logging.Formatter, record: logging.LogRecord, datefmt: str | None) -> str:
    """Format the record time in UTC with 6-digit microseconds and a 'Z' suffix."""
    ct = formatter.converter(record.created)
    s = time.strftime(datefmt, ct) if datefmt else time.strftime(formatter.default_time_format, ct)
    microseconds = int((record.created - int(record.created)) * 1_000_000)
    return f"{s}.{microseconds:06d}Z"


class ConsoleFormatter(logging.Formatter):
    """A compact formatter for console output."""

    def __init__(self, version: str) -> None:
        """
        Initialize the formatter with the application version.

        Args:
            version: The GlossaryGate application version.

        """
        super().__init__(
            fmt=f"%(asctime)s | GlossaryGate - {version} | %(levelname)s | %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
        self.converter = time.gmtime

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: N802
        """Format the time with 6-digit microseconds and a 'Z' for UTC."""
        return _format_utc_time(self, record, datefmt)


class FileFormatter(logging.Formatter):
    """A detailed formatter for debug log files, aimed at developers."""

    def __init__(self) -> None:
        """Initialize the detailed file formatter."""
        super().__init__(
            fmt="%(asctime)s | %(name)-24s | %(funcName)-20s:%(lineno)-4d | %(levelname)-8s | %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
        self.converter = time.gmtime

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: N802
        """Format the time with 6-digit microseconds and a 'Z' for UTC."""
        return _format_utc_time(self, record, datefmt)


def setup_logging(version: str, *, debug: bool = False, project_root: Path | None = None) -> None:
    """
    Configure the root logger for the GlossaryGate application.

    1.  Console: INFO by default, DEBUG if debug=True.
    2.  File: when debug=True, detailed logs go to '.glossarygate/logs/debug.log'
        below the project root.

    Args:
        version: The application version, included in console logs.
        debug: If True, enables detailed file logging and sets console level to DEBUG.
        project_root: Where to look for the project anchor. Defaults to CWD.

    """
    root_logger = logging.getLogger()
    if root_logger.hasHandlers():
        root_logger.handlers.clear()

    console_level = logging.DEBUG if debug else logging.INFO
    root_logger.setLevel(console_level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(ConsoleFormatter(version))
    root_logger.addHandler(console_handler)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.DEBUG if debug else logging.WARNING)

    if debug:
        try:
            log_dir = paths.get_log_dir(project_root)
            paths.ensure_dir_exists(log_dir)
            log_file_path = log_dir / "debug.log"

            file_handler = FileHandler(log_file_path, mode="w", encoding="utf-8")
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(FileFormatter())
            root_logger.addHandler(file_handler)

            logging.getLogger().info(
                "Debug mode enabled. Console level set to DEBUG. Detailed logs will be written to %s",
                log_file_path,
            )
        except Exception:
            # Console logging keeps working without the file.
            logging.getLogger().exception("Failed to create debug log file. Continuing with console logging only.")
