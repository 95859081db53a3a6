"""CLI application entry point and command routing for perun.

This module is the **sole error boundary** for the entire application.
It catches :class:`~perun.exceptions.PerunError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, rendering user-friendly messages via Rich
and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — parsing, validation and routing are
  delegated to :mod:`perun.cli.parser` and the core layer.
* Parse and validation failures are raised before any mode runs.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence

from perun.cli import exit_codes
from perun.cli.console import ConsoleLogger, console
from perun.cli.parser import parse_arguments
from perun.core.dispatcher import dispatch
from perun.core.models import CommandDescriptor
from perun.core.protocols import Collaborators
from perun.core.validator import validate_descriptor
from perun.exceptions import PerunError
from perun.infra.collaborators import UnwiredCollaborators


class CliCollaborators(UnwiredCollaborators):
    """Collaborators for the shipped CLI: ``configure`` runs the wizard."""

    def __init__(self, logger: ConsoleLogger) -> None:
        self._logger = logger

    def configure(self, descriptor: CommandDescriptor) -> int:
        from perun.cli.configure import run_configure

        return run_configure(self._logger)


def _build_collaborators(logger: ConsoleLogger) -> Collaborators:
    return CliCollaborators(logger)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: Sequence[str] | None = None) -> int:
    """Run the perun CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code reported by the dispatched operation.

    Raises
    ------
    ArgumentParseError
        When *argv* does not match the grammar.
    ValidationError
        When a range or enumeration rule fails.
    """
    descriptor = validate_descriptor(
        parse_arguments(sys.argv[1:] if argv is None else argv),
    )
    logger = ConsoleLogger(descriptor.verbosity, quiet=descriptor.quiet)
    logger.debug(f"Mode: {descriptor.mode.value}")

    if descriptor.disable_stack_termination and descriptor.enable_stack_termination:
        logger.warning(
            "Both --disable-stack-termination and --enable-stack-termination "
            "are set; the termination protection operation decides which wins.",
        )

    return dispatch(descriptor, _build_collaborators(logger))


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except PerunError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {exc.hint}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
