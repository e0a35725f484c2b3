"""Process probe interface: signal delivery and liveness checks."""

import signal
from abc import ABC, abstractmethod
from enum import Enum


class SignalKind(str, Enum):
    """The two signals of the escalation."""
    POLITE = "polite"
    FORCEFUL = "forceful"

    @property
    def signum(self) -> int:
        if self is SignalKind.POLITE:
            return signal.SIGTERM
        return signal.SIGKILL

    @property
    def display_name(self) -> str:
        return "SIGTERM" if self is SignalKind.POLITE else "SIGKILL"


class DeliveryResult(str, Enum):
    """Outcome of one signal delivery attempt."""
    DELIVERED = "delivered"
    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"
    FAILED = "failed"  # Any other OS error (EINVAL, ...)

    @property
    def ok(self) -> bool:
        return self is DeliveryResult.DELIVERED


class ProcessProbe(ABC):
    """
    Capability the escalator uses to reach processes.

    Implementations must be safe to call concurrently for different PIDs.
    """

    @abstractmethod
    def signal(self, pid: int, kind: SignalKind) -> DeliveryResult:
        """Deliver ``kind`` to ``pid`` without blocking."""

    @abstractmethod
    def is_alive(self, pid: int) -> bool:
        """Return True if ``pid`` is still addressable.

        Must not alter the process and must not raise for a missing process.
        """
