"""PID argument parsing for the command line."""

from typing import Iterable, List

from ..errors.exceptions import InvalidIdentifierError

# Largest value a pid_t can hold
MAX_PID = 2**31 - 1


def parse_pid(token: str) -> int:
    """Parse one PID token, rejecting anything but a positive decimal integer."""
    text = token.strip()
    if not (text.isascii() and text.isdigit()):
        raise InvalidIdentifierError(f"Invalid PID: '{token}'", token=token)
    pid = int(text)
    if pid < 1 or pid > MAX_PID:
        raise InvalidIdentifierError(f"Invalid PID: '{token}' (out of range)", token=token)
    return pid


def parse_pid_args(args: Iterable[str]) -> List[int]:
    """
    Expand command-line PID arguments into a de-duplicated list.

    Each argument is a single PID or a comma-separated list of PIDs, so
    ``["1234", "5678,9012"]`` yields ``[1234, 5678, 9012]``. First
    occurrence order is kept.

    Raises:
        InvalidIdentifierError: On the first malformed token, or when no PID is given
    """
    pids: List[int] = []
    seen = set()
    for arg in args:
        for token in arg.split(","):
            pid = parse_pid(token)
            if pid not in seen:
                seen.add(pid)
                pids.append(pid)

    if not pids:
        raise InvalidIdentifierError("No PIDs provided")
    return pids
