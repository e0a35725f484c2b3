"""Process probe backed by os.kill."""

import logging
import os

from .base import DeliveryResult, ProcessProbe, SignalKind

logger = logging.getLogger(__name__)


class OsProcessProbe(ProcessProbe):
    """Signals processes with ``os.kill`` and probes them with signal 0."""

    def signal(self, pid: int, kind: SignalKind) -> DeliveryResult:
        try:
            os.kill(pid, kind.signum)
        except ProcessLookupError:
            return DeliveryResult.NOT_FOUND
        except PermissionError:
            return DeliveryResult.PERMISSION_DENIED
        except (OSError, OverflowError) as e:
            logger.debug(f"{kind.display_name} to PID {pid} failed: {e}")
            return DeliveryResult.FAILED
        return DeliveryResult.DELIVERED

    def is_alive(self, pid: int) -> bool:
        try:
            os.kill(pid, 0)  # Signal 0 = check existence
        except ProcessLookupError:
            return False
        except PermissionError:
            # Exists, but owned by someone else; still a SIGKILL candidate
            return True
        except (OSError, OverflowError):
            return False
        return True
