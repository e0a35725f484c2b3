"""Two-phase SIGTERM -> SIGKILL escalation over a set of processes."""

import logging
import math
import time
from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta
from typing import Callable, Dict, Iterable, List, Union

from ..errors.exceptions import InvalidIdentifierError
from ..probe.base import DeliveryResult, ProcessProbe, SignalKind
from .models import (
    EscalationOutcome,
    EscalationReport,
    TargetProcess,
    TargetStatus,
    TerminatedBy,
)

logger = logging.getLogger(__name__)

POLL_INTERVAL_SECONDS = 0.1


class Escalator:
    """
    Drives every target through polite signal, grace period and forceful signal.

    Phases are strict barriers:
    1. SIGTERM to all targets; failures are terminal (unreachable)
    2. Poll liveness every ``poll_interval`` until the grace period ends
       or the active set is empty
    3. SIGKILL to whatever is still active

    Per-target failures are recorded, never raised, so one bad PID cannot
    stop the others from being handled.
    """

    def __init__(
        self,
        probe: ProcessProbe,
        *,
        poll_interval: float = POLL_INTERVAL_SECONDS,
        max_workers: int = 1,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if poll_interval <= 0:
            raise ValueError(f"poll_interval must be > 0, got {poll_interval}")
        if max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers}")
        self.probe = probe
        self.poll_interval = poll_interval
        self.max_workers = max_workers
        self._clock = clock
        self._sleep = sleep

    def run(
        self,
        targets: Iterable[int],
        grace_period: Union[float, timedelta],
    ) -> EscalationReport:
        """Terminate ``targets``, escalating after ``grace_period`` seconds."""
        grace = _to_seconds(grace_period)
        pids = _distinct_pids(targets)

        processes = {pid: TargetProcess(pid) for pid in pids}
        outcomes: Dict[int, EscalationOutcome] = {}

        logger.info(
            f"Starting graceful kill for {len(pids)} process(es) "
            f"with {grace:g}s grace period"
        )
        start = self._clock()

        active = self._polite_phase(processes, outcomes)
        if not active:
            logger.info("No processes to wait for")
        else:
            active = self._poll_phase(processes, outcomes, active, start, grace)
            if active:
                self._forceful_phase(processes, outcomes, active)
            else:
                logger.info("All processes exited gracefully")

        return EscalationReport.from_outcomes(
            [outcomes[pid] for pid in pids],
            elapsed_seconds=max(0.0, self._clock() - start),
        )

    def _polite_phase(
        self,
        processes: Dict[int, TargetProcess],
        outcomes: Dict[int, EscalationOutcome],
    ) -> List[int]:
        results = self._deliver(list(processes), SignalKind.POLITE)
        active = []

        for pid, result in results.items():
            target = processes[pid]
            if result.ok:
                target.transition(TargetStatus.SIGNALED)
                active.append(pid)
                logger.info(f"Sent SIGTERM to PID {pid}")
                continue

            terminated_by = (
                TerminatedBy.ALREADY_GONE
                if result == DeliveryResult.NOT_FOUND
                else TerminatedBy.SIGNAL_FAILED
            )
            outcomes[pid] = target.finalize(TargetStatus.UNREACHABLE, terminated_by, error=result)
            logger.warning(f"Failed to send SIGTERM to PID {pid}: {_describe(result)}")

        return active

    def _poll_phase(
        self,
        processes: Dict[int, TargetProcess],
        outcomes: Dict[int, EscalationOutcome],
        active: List[int],
        start: float,
        grace: float,
    ) -> List[int]:
        remaining = list(active)

        while remaining and self._clock() - start < grace:
            self._sleep(self.poll_interval)
            still_running = []
            for pid in remaining:
                if self.probe.is_alive(pid):
                    still_running.append(pid)
                    continue
                outcomes[pid] = processes[pid].finalize(
                    TargetStatus.EXITED, TerminatedBy.POLITE_SIGNAL
                )
                logger.info(f"Process {pid} exited gracefully")
            remaining = still_running

        return remaining

    def _forceful_phase(
        self,
        processes: Dict[int, TargetProcess],
        outcomes: Dict[int, EscalationOutcome],
        remaining: List[int],
    ) -> None:
        logger.warning(
            f"{len(remaining)} process(es) still running after grace period, sending SIGKILL"
        )
        results = self._deliver(remaining, SignalKind.FORCEFUL)

        for pid, result in results.items():
            target = processes[pid]
            if result.ok:
                outcomes[pid] = target.finalize(
                    TargetStatus.KILLED_FORCEFULLY, TerminatedBy.FORCEFUL_SIGNAL
                )
                logger.info(f"Sent SIGKILL to PID {pid}")
            elif result == DeliveryResult.NOT_FOUND:
                # Exited between the last poll and the kill
                outcomes[pid] = target.finalize(
                    TargetStatus.EXITED, TerminatedBy.POLITE_SIGNAL
                )
                logger.info(f"Process {pid} exited before SIGKILL")
            else:
                outcomes[pid] = target.finalize(
                    TargetStatus.KILLED_FORCEFULLY, TerminatedBy.SIGNAL_FAILED, error=result
                )
                logger.error(f"Failed to send SIGKILL to PID {pid}: {_describe(result)}")

    def _deliver(self, pids: List[int], kind: SignalKind) -> Dict[int, DeliveryResult]:
        """Signal every PID once; results keyed by PID in input order."""
        if self.max_workers == 1 or len(pids) < 2:
            return {pid: self.probe.signal(pid, kind) for pid in pids}

        workers = min(self.max_workers, len(pids))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="gracekill") as pool:
            futures = {pid: pool.submit(self.probe.signal, pid, kind) for pid in pids}
            return {pid: future.result() for pid, future in futures.items()}


def _distinct_pids(targets: Iterable[int]) -> List[int]:
    pids: List[int] = []
    seen = set()
    for pid in targets:
        if isinstance(pid, bool) or not isinstance(pid, int) or pid <= 0:
            # 0 and negative PIDs address whole process groups
            raise InvalidIdentifierError(f"Invalid PID: '{pid}'", token=str(pid))
        if pid not in seen:
            seen.add(pid)
            pids.append(pid)
    if not pids:
        raise InvalidIdentifierError("No PIDs provided")
    return pids


def _to_seconds(grace_period: Union[float, timedelta]) -> float:
    if isinstance(grace_period, timedelta):
        seconds = grace_period.total_seconds()
    else:
        seconds = float(grace_period)
    if not math.isfinite(seconds) or seconds < 0:
        raise ValueError(f"grace_period must be a finite number >= 0, got {seconds}")
    return seconds


def _describe(result: DeliveryResult) -> str:
    return {
        DeliveryResult.NOT_FOUND: "Process not found",
        DeliveryResult.PERMISSION_DENIED: "Permission denied",
    }.get(result, "Failed to send signal")
