"""Exception taxonomy for gracekill."""


class GracekillError(Exception):
    """Base class for errors raised by gracekill."""


class InvalidIdentifierError(GracekillError, ValueError):
    """A process identifier was malformed, out of range, or missing.

    Raised before any signal is sent, so the run never starts.
    """

    def __init__(self, message: str, token: str = ""):
        self.token = token
        super().__init__(message)


class InvalidTransitionError(GracekillError):
    """A target was moved to a status its current status cannot reach."""

    def __init__(self, pid: int, current: str, requested: str):
        self.pid = pid
        self.current = current
        self.requested = requested
        super().__init__(
            f"PID {pid}: cannot transition from '{current}' to '{requested}'"
        )


class ConfigError(GracekillError):
    """Configuration file could not be read or failed validation."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid configuration in {path}: {reason}")
