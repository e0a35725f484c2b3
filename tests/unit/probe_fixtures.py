"""In-memory process probe and clock for escalator tests."""

import threading
from typing import Dict, Iterable, List, Optional, Tuple

from gracekill.probe.base import DeliveryResult, ProcessProbe, SignalKind


class FakeClock:
    """Monotonic clock that only moves when ``sleep`` is called."""

    def __init__(self, start: float = 1000.0):
        self.now = start
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class FakeProbe(ProcessProbe):
    """
    Scripted process table.

    Args:
        alive: PIDs that exist and ignore SIGTERM forever
        missing: PIDs that do not exist
        denied: PIDs owned by another user (SIGTERM refused)
        exits_after: PID -> number of liveness checks it survives after SIGTERM
        kill_results: PID -> result returned for SIGKILL (default: delivered)
    """

    def __init__(
        self,
        alive: Iterable[int] = (),
        missing: Iterable[int] = (),
        denied: Iterable[int] = (),
        exits_after: Optional[Dict[int, int]] = None,
        kill_results: Optional[Dict[int, DeliveryResult]] = None,
    ):
        self.alive = set(alive)
        self.missing = set(missing)
        self.denied = set(denied)
        self.exits_after = dict(exits_after or {})
        self.kill_results = dict(kill_results or {})
        self.signals: List[Tuple[int, SignalKind]] = []
        self.checks: List[int] = []
        self.signal_threads = set()
        self._terminated = set()
        self._lock = threading.Lock()

    def signal(self, pid: int, kind: SignalKind) -> DeliveryResult:
        with self._lock:
            self.signals.append((pid, kind))
            self.signal_threads.add(threading.current_thread().name)
        if pid in self.missing or pid in self._terminated:
            return DeliveryResult.NOT_FOUND
        if pid in self.denied:
            return DeliveryResult.PERMISSION_DENIED
        if kind == SignalKind.FORCEFUL:
            result = self.kill_results.get(pid, DeliveryResult.DELIVERED)
            if result == DeliveryResult.DELIVERED:
                self._terminated.add(pid)
            return result
        return DeliveryResult.DELIVERED

    def is_alive(self, pid: int) -> bool:
        self.checks.append(pid)
        if pid in self.missing or pid in self._terminated:
            return False
        if pid in self.exits_after:
            if self.exits_after[pid] <= 0:
                self._terminated.add(pid)
                return False
            self.exits_after[pid] -= 1
            return True
        return pid in self.alive or pid in self.denied

    def signals_for(self, pid: int) -> List[SignalKind]:
        return [kind for p, kind in self.signals if p == pid]
