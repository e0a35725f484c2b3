"""Escalation core: data model, state machine and configuration."""

from .config import GracekillConfig, load_config
from .escalator import POLL_INTERVAL_SECONDS, Escalator
from .models import (
    EscalationOutcome,
    EscalationReport,
    ExitCode,
    TargetProcess,
    TargetStatus,
    TerminatedBy,
)

__all__ = [
    "GracekillConfig",
    "load_config",
    "POLL_INTERVAL_SECONDS",
    "Escalator",
    "EscalationOutcome",
    "EscalationReport",
    "ExitCode",
    "TargetProcess",
    "TargetStatus",
    "TerminatedBy",
]
