"""
Logging configuration for cfgpanel.

Provides structured logging with configurable levels and formatting.
"""

import logging
import sys
from types import TracebackType
from typing import Optional


# ANSI color codes for terminal output
class Colors:
    """ANSI color codes for colored terminal output."""
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    CYAN = "\033[36m"
    WHITE = "\033[37m"

    BG_RED = "\033[41m"


class ColoredFormatter(logging.Formatter):
    """Formatter that colors the level name per log level."""

    LEVEL_COLORS = {
        logging.DEBUG: Colors.DIM + Colors.CYAN,
        logging.INFO: Colors.GREEN,
        logging.WARNING: Colors.YELLOW,
        logging.ERROR: Colors.RED,
        logging.CRITICAL: Colors.BOLD + Colors.BG_RED + Colors.WHITE,
    }

    def __init__(self, fmt: Optional[str] = None, datefmt: Optional[str] = None, use_colors: bool = True):
        """
        Initialize colored formatter.

        Args:
            fmt: Log message format
            datefmt: Date format
            use_colors: Whether to use ANSI colors (disable for file output)
        """
        super().__init__(fmt, datefmt)
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        if self.use_colors and record.levelno in self.LEVEL_COLORS:
            level_color = self.LEVEL_COLORS[record.levelno]
            record.levelname = f"{level_color}{record.levelname}{Colors.RESET}"

        return super().format(record)


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """
    Configure logging for the settings panel.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for log output

    Example:
        >>> setup_logging(level="DEBUG")
        >>> logger = get_logger(__name__)
        >>> logger.info("Settings dialog opened")
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger("cfgpanel")
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)

    # Format: [LEVEL] message (timestamp for DEBUG)
    if numeric_level <= logging.DEBUG:
        console_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
        console_formatter = ColoredFormatter(console_format, datefmt="%H:%M:%S")
    else:
        console_format = "[%(levelname)s] %(message)s"
        console_formatter = ColoredFormatter(console_format)

    console_handler.setFormatter(console_formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(numeric_level)

        file_format = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d - %(message)s"
        file_handler.setFormatter(ColoredFormatter(file_format, use_colors=False))
        root_logger.addHandler(file_handler)

    # bs4 warns loudly about markup that looks like a filename or URL
    logging.getLogger("bs4").setLevel(logging.ERROR)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger placed under the ``cfgpanel`` namespace
    """
    if not name.startswith("cfgpanel"):
        name = f"cfgpanel.{name}"

    return logging.getLogger(name)


def format_exception_summary(
    error: BaseException,
    *,
    max_length: int = 180,
) -> str:
    """
    Build a concise one-line exception summary for status messages.

    Args:
        error: Exception instance.
        max_length: Maximum output length.

    Returns:
        Single-line summary (trimmed when needed).
    """
    exception_name = error.__class__.__name__
    detail = str(error or "").strip()
    summary = exception_name if not detail else f"{exception_name}: {detail}"
    if max_length > 3 and len(summary) > max_length:
        return summary[: max_length - 3].rstrip() + "..."
    return summary


def exception_exc_info(
    error: BaseException,
) -> tuple[type[BaseException], BaseException, TracebackType | None]:
    """Build an ``exc_info`` tuple suitable for logger calls."""
    return (type(error), error, error.__traceback__)

