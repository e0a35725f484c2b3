"""Rich rendering of an escalation report."""

from rich.console import Console
from rich.table import Table

from ..core.models import EscalationReport, TargetStatus
from ..errors.translator import ErrorTranslator

STATUS_STYLES = {
    TargetStatus.EXITED: "green",
    TargetStatus.KILLED_FORCEFULLY: "yellow",
    TargetStatus.UNREACHABLE: "red",
}


def build_summary_table(report: EscalationReport) -> Table:
    """One row per target plus a caption with the aggregate counts."""
    translator = ErrorTranslator()
    table = Table(title="gracekill summary", show_lines=False)
    table.add_column("PID", justify="right", style="cyan")
    table.add_column("Status")
    table.add_column("Terminated by")
    table.add_column("Note", style="dim")

    for outcome in report.outcomes:
        style = STATUS_STYLES.get(outcome.status, "")
        table.add_row(
            str(outcome.pid),
            f"[{style}]{outcome.status.value}[/]" if style else outcome.status.value,
            outcome.terminated_by.value,
            translator.describe_delivery(outcome.error),
        )

    table.caption = (
        f"{report.total} total: {report.gracefully_exited} exited, "
        f"{report.forcefully_killed} killed, {report.unreachable} unreachable "
        f"in {report.elapsed_seconds:.1f}s"
    )
    return table


def print_summary(report: EscalationReport, console: Console) -> None:
    console.print(build_summary_table(report))
