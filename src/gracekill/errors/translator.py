"""Translate technical errors to user-friendly messages."""

import re
from dataclasses import dataclass
from typing import List, Optional

from rich.markup import escape

from ..probe.base import DeliveryResult


@dataclass
class UserFriendlyError:
    """User-friendly error representation."""
    original_error: Exception
    title: str
    explanation: str
    actions: List[str]
    show_technical: bool = False


class ErrorTranslator:
    """Translate technical errors to user-friendly messages."""

    ERROR_PATTERNS = {
        r"ConfigError|YAMLError|ValidationError": {
            "title": "Configuration file is invalid",
            "explanation": "gracekill could not load its configuration file.",
            "actions": [
                "Check the YAML syntax of the file passed with --config",
                "grace_seconds must be a finite number >= 0",
                "Remove the file to fall back to defaults",
            ],
        },
    }

    DELIVERY_HINTS = {
        DeliveryResult.NOT_FOUND: "no such process",
        DeliveryResult.PERMISSION_DENIED: "permission denied; run as the process owner or root",
        DeliveryResult.FAILED: "signal delivery failed; see log for the OS error",
    }

    def translate(self, error: Exception) -> UserFriendlyError:
        """Convert exception to user-friendly format."""
        error_str = str(error)
        error_type = type(error).__name__
        full_error = f"{error_type}: {error_str}"

        for pattern, translation in self.ERROR_PATTERNS.items():
            if re.search(pattern, full_error, re.IGNORECASE):
                return UserFriendlyError(
                    original_error=error,
                    title=translation["title"],
                    explanation=translation["explanation"],
                    actions=translation["actions"],
                    show_technical=True,
                )

        # Fallback for unknown errors
        return UserFriendlyError(
            original_error=error,
            title="Unexpected error",
            explanation=error_str or error_type,
            actions=[
                "Re-run with --verbose for details",
            ],
            show_technical=True,
        )

    def describe_delivery(self, result: Optional[DeliveryResult]) -> str:
        """Short hint for a failed signal delivery, empty when there is none."""
        if result is None:
            return ""
        return self.DELIVERY_HINTS.get(result, "")

    def format_for_cli(self, friendly_error: UserFriendlyError) -> str:
        """Format error for CLI display."""
        output = f"[bold red]{friendly_error.title}[/]\n\n"
        output += f"{escape(friendly_error.explanation)}\n\n"

        output += "[bold]How to fix:[/]\n"
        for i, action in enumerate(friendly_error.actions, 1):
            output += f"  {i}. {action}\n"

        if friendly_error.show_technical:
            output += f"\n[dim]Technical details:[/]\n[dim]{escape(str(friendly_error.original_error))}[/]"

        return output
