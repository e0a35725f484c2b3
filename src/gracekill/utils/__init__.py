"""Shared utility functions for gracekill."""

from .stderr_logging import PROGRAM_PREFIX, PrefixFormatter, setup_logging

__all__ = [
    "PROGRAM_PREFIX",
    "PrefixFormatter",
    "setup_logging",
]
