"""Per-target state, outcomes and the aggregate escalation report."""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Dict, FrozenSet, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..errors.exceptions import InvalidTransitionError
from ..probe.base import DeliveryResult


class TargetStatus(str, Enum):
    """Lifecycle of one target process."""
    PENDING = "pending"
    SIGNALED = "signaled"  # SIGTERM delivered, in the active set
    EXITED = "exited"
    KILLED_FORCEFULLY = "killed_forcefully"
    UNREACHABLE = "unreachable"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES


TERMINAL_STATUSES: FrozenSet[TargetStatus] = frozenset({
    TargetStatus.EXITED,
    TargetStatus.KILLED_FORCEFULLY,
    TargetStatus.UNREACHABLE,
})

ALLOWED_TRANSITIONS: Dict[TargetStatus, FrozenSet[TargetStatus]] = {
    TargetStatus.PENDING: frozenset({TargetStatus.SIGNALED, TargetStatus.UNREACHABLE}),
    TargetStatus.SIGNALED: frozenset({TargetStatus.EXITED, TargetStatus.KILLED_FORCEFULLY}),
    TargetStatus.EXITED: frozenset(),
    TargetStatus.KILLED_FORCEFULLY: frozenset(),
    TargetStatus.UNREACHABLE: frozenset(),
}


class TerminatedBy(str, Enum):
    """What ended a target's lifecycle."""
    POLITE_SIGNAL = "polite_signal"
    FORCEFUL_SIGNAL = "forceful_signal"
    ALREADY_GONE = "already_gone"
    SIGNAL_FAILED = "signal_failed"


class ExitCode(IntEnum):
    """Process exit codes of the gracekill command."""
    SUCCESS = 0
    FAILURE = 1
    USAGE = 2
    ALL_UNREACHABLE = 3
    FORCE_KILLED = 4


@dataclass
class TargetProcess:
    """One process to signal. Status only moves forward."""
    pid: int
    status: TargetStatus = TargetStatus.PENDING
    history: List[TargetStatus] = field(default_factory=list, repr=False)

    def transition(self, new_status: TargetStatus) -> None:
        if new_status not in ALLOWED_TRANSITIONS[self.status]:
            raise InvalidTransitionError(self.pid, self.status.value, new_status.value)
        self.history.append(self.status)
        self.status = new_status

    def finalize(
        self,
        status: TargetStatus,
        terminated_by: TerminatedBy,
        error: Optional[DeliveryResult] = None,
    ) -> "EscalationOutcome":
        """Move to a terminal status and freeze the outcome."""
        self.transition(status)
        return EscalationOutcome(
            pid=self.pid,
            status=status,
            terminated_by=terminated_by,
            error=error,
        )


class EscalationOutcome(BaseModel):
    """Immutable result for one target once it leaves the active set."""
    model_config = ConfigDict(frozen=True)

    pid: int
    status: TargetStatus
    terminated_by: TerminatedBy
    error: Optional[DeliveryResult] = None  # Set when a delivery attempt failed

    @model_validator(mode="after")
    def check_terminal(self) -> "EscalationOutcome":
        if not self.status.is_terminal:
            raise ValueError(f"outcome status must be terminal, got '{self.status.value}'")
        return self


class EscalationReport(BaseModel):
    """Aggregate over every requested target."""
    model_config = ConfigDict(frozen=True)

    outcomes: List[EscalationOutcome] = Field(default_factory=list)
    total: int = 0
    gracefully_exited: int = 0
    forcefully_killed: int = 0
    unreachable: int = 0
    kill_failed: int = 0  # Subset of forcefully_killed whose SIGKILL was refused
    elapsed_seconds: float = 0.0

    @model_validator(mode="after")
    def check_counts(self) -> "EscalationReport":
        if self.total != self.gracefully_exited + self.forcefully_killed + self.unreachable:
            raise ValueError(
                f"counts do not add up: total={self.total}, "
                f"exited={self.gracefully_exited}, killed={self.forcefully_killed}, "
                f"unreachable={self.unreachable}"
            )
        return self

    @classmethod
    def from_outcomes(
        cls, outcomes: List[EscalationOutcome], elapsed_seconds: float = 0.0
    ) -> "EscalationReport":
        exited = killed = unreachable = kill_failed = 0
        for outcome in outcomes:
            if outcome.status == TargetStatus.EXITED:
                exited += 1
            elif outcome.status == TargetStatus.KILLED_FORCEFULLY:
                killed += 1
                if outcome.terminated_by == TerminatedBy.SIGNAL_FAILED:
                    kill_failed += 1
            else:
                unreachable += 1

        return cls(
            outcomes=list(outcomes),
            total=len(outcomes),
            gracefully_exited=exited,
            forcefully_killed=killed,
            unreachable=unreachable,
            kill_failed=kill_failed,
            elapsed_seconds=elapsed_seconds,
        )

    @property
    def all_unreachable(self) -> bool:
        return self.total > 0 and self.unreachable == self.total

    def outcome_for(self, pid: int) -> Optional[EscalationOutcome]:
        for outcome in self.outcomes:
            if outcome.pid == pid:
                return outcome
        return None

    def exit_code(self, exit_on_kill: bool = False) -> ExitCode:
        """Map the report to the command's exit status."""
        if self.all_unreachable:
            return ExitCode.ALL_UNREACHABLE
        if exit_on_kill and self.forcefully_killed > 0:
            return ExitCode.FORCE_KILLED
        return ExitCode.SUCCESS
