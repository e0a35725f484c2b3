"""Process probes used by the escalator."""

from .base import DeliveryResult, ProcessProbe, SignalKind
from .os_probe import OsProcessProbe

__all__ = ["DeliveryResult", "ProcessProbe", "SignalKind", "OsProcessProbe"]
