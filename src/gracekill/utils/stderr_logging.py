"""Prefixed diagnostics on stderr."""

import logging
import sys
from typing import Optional, TextIO

PROGRAM_PREFIX = "[gracekill]"
ROOT_LOGGER_NAME = "gracekill"


class PrefixFormatter(logging.Formatter):
    """Formats records as ``[gracekill] message``.

    Warnings and errors carry their level name so they stand out when
    several targets are handled in one run.
    """

    LEVEL_COLORS = {
        "DEBUG": "\033[36m",      # Cyan
        "WARNING": "\033[33m",    # Yellow
        "ERROR": "\033[31m",      # Red
        "CRITICAL": "\033[35m",   # Magenta
    }
    RESET = "\033[0m"

    def __init__(self, use_colors: bool = False):
        super().__init__()
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.levelno >= logging.WARNING:
            level = record.levelname
            if self.use_colors:
                level = f"{self.LEVEL_COLORS.get(level, '')}{level}{self.RESET}"
            message = f"{level}: {message}"

        line = f"{PROGRAM_PREFIX} {message}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def setup_logging(
    level: str = "INFO",
    use_colors: bool = False,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Configure the ``gracekill`` logger hierarchy.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        use_colors: Colour level names with ANSI codes
        stream: Destination, stderr when omitted

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper()))

    # Close existing handlers before clearing (prevents file descriptor leak)
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(PrefixFormatter(use_colors=use_colors))
    logger.addHandler(handler)
    logger.propagate = False

    return logger
