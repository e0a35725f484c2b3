"""Main CLI for gracekill."""

import logging
import math
from pathlib import Path

import click
from rich.console import Console

from ..core.config import DEFAULT_CONFIG_PATH, load_config
from ..core.escalator import Escalator
from ..core.models import ExitCode
from ..errors.exceptions import ConfigError, InvalidIdentifierError
from ..errors.translator import ErrorTranslator
from ..probe.os_probe import OsProcessProbe
from ..utils.stderr_logging import setup_logging
from .pid_args import parse_pid_args
from .summary import print_summary

console = Console(stderr=True)
logger = logging.getLogger(__name__)

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}

EXAMPLES = """\b
Examples:
  gracekill 1234 5678
  gracekill -g 10 1234 5678
  gracekill --grace-seconds 30 1234,5678,9012
  gracekill --grace-seconds=5 --exit-code-on-kill 1234

\b
Exit codes:
  0  all targets handled
  2  invalid arguments
  3  no target could be signaled
  4  SIGKILL was needed (only with --exit-code-on-kill)
"""


def _validate_pids(ctx, param, value):
    try:
        return parse_pid_args(value)
    except InvalidIdentifierError as e:
        raise click.BadParameter(str(e), ctx=ctx, param=param) from e


def _validate_grace(ctx, param, value):
    if value is not None and not math.isfinite(value):
        raise click.BadParameter(f"{value} is not a finite number of seconds", ctx=ctx, param=param)
    return value


def _fail(error: Exception) -> None:
    translator = ErrorTranslator()
    console.print(translator.format_for_cli(translator.translate(error)))


@click.command(context_settings=CONTEXT_SETTINGS, epilog=EXAMPLES)
@click.argument("pids", nargs=-1, required=True, metavar="PID[,PID...]...", callback=_validate_pids)
@click.option(
    "--grace-seconds", "-g",
    type=click.FloatRange(min=0),
    callback=_validate_grace,
    default=None,
    help="Grace period in seconds before SIGKILL (default: 30, or from config)",
)
@click.option(
    "--exit-code-on-kill", "-k",
    is_flag=True,
    help="Exit with status 4 if any process needed SIGKILL",
)
@click.option(
    "--config", "-c", "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_CONFIG_PATH,
    show_default=True,
    help="YAML configuration file",
)
@click.option("--quiet", "-q", is_flag=True, help="Only report warnings and errors")
@click.option("--verbose", "-v", is_flag=True, help="Debug output")
@click.option("--summary", is_flag=True, help="Print a per-process summary table")
@click.pass_context
def cli(ctx, pids, grace_seconds, exit_code_on_kill, config_path, quiet, verbose, summary):
    """Terminate processes with SIGTERM, escalating to SIGKILL after a grace period.

    PIDs may be separated by spaces or commas.
    """
    try:
        config = load_config(config_path)
    except ConfigError as e:
        _fail(e)
        ctx.exit(ExitCode.FAILURE)

    level = config.logging.level
    if verbose:
        level = "DEBUG"
    elif quiet:
        level = "WARNING"
    setup_logging(level=level, use_colors=config.logging.use_colors)

    grace = grace_seconds if grace_seconds is not None else config.escalation.grace_seconds
    escalator = Escalator(OsProcessProbe(), max_workers=config.escalation.max_workers)

    report = escalator.run(pids, grace)

    if summary:
        print_summary(report, console)

    exit_code = report.exit_code(exit_on_kill=exit_code_on_kill)
    if exit_code == ExitCode.ALL_UNREACHABLE:
        logger.error("No process could be signaled")
    ctx.exit(int(exit_code))


def main():
    """Entry point for the gracekill console script."""
    cli(prog_name="gracekill")


if __name__ == "__main__":
    main()
