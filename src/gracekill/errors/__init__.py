"""Errors raised by gracekill and their user-facing translation."""

from .exceptions import (
    ConfigError,
    GracekillError,
    InvalidIdentifierError,
    InvalidTransitionError,
)
from .translator import ErrorTranslator, UserFriendlyError

__all__ = [
    "ConfigError",
    "GracekillError",
    "InvalidIdentifierError",
    "InvalidTransitionError",
    "ErrorTranslator",
    "UserFriendlyError",
]
