"""Argument parser built from the declarative command grammar.

:func:`parse_arguments` is a pure function: it builds a fresh argparse
parser from :mod:`perun.core.grammar`, parses *argv*, and returns a new
:class:`~perun.core.models.CommandDescriptor`.  Grammar errors are
raised as :class:`~perun.exceptions.ArgumentParseError` instead of
exiting the process; ``--help`` and ``--version`` still short-circuit
with ``SystemExit(0)``.
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from typing import Any, NoReturn

from perun.core.grammar import MODE_SPECS, SHARED_ARGUMENTS, ArgumentKind, ArgumentSpec
from perun.core.models import Capability, CommandDescriptor, Mode
from perun.exceptions import ArgumentParseError
from perun.version import __version__

PROG = "perun"
DESCRIPTION = (
    "Swiss army knife for AWS CloudFormation templates - validation, "
    "conversion, generators and other various stuff."
)


class _RaisingArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of printing usage and exiting."""

    def error(self, message: str) -> NoReturn:
        raise ArgumentParseError(
            message,
            hint=f"Run '{self.prog} --help' for usage.",
        )


def parameter_pair(text: str) -> tuple[str, str]:
    """Split a ``key=value`` token on its first ``=``."""
    key, sep, value = text.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(
            f"expected KEY=VALUE, got {text!r}",
        )
    return key, value


# ---------------------------------------------------------------------------
# Parser construction
# ---------------------------------------------------------------------------

def _add_argument(
    parser: argparse.ArgumentParser,
    argument: ArgumentSpec,
    *,
    suppress_default: bool = False,
) -> None:
    """Translate one :class:`ArgumentSpec` into an argparse argument."""
    options: dict[str, Any] = {"help": argument.help}

    if argument.positional:
        options["metavar"] = argument.metavar
        if not argument.required:
            options["nargs"] = "?"
            options["default"] = ""
        parser.add_argument(argument.field, **options)
        return

    options["dest"] = argument.field
    if argument.metavar is not None:
        options["metavar"] = argument.metavar

    if argument.kind is ArgumentKind.SWITCH:
        options["action"] = "store_true"
        options["default"] = False
    elif argument.kind is ArgumentKind.INTEGER:
        options["type"] = int
        options["default"] = None
    elif argument.kind is ArgumentKind.CAPABILITIES:
        options["action"] = "append"
        options["choices"] = [cap.value for cap in Capability]
        options["default"] = None
    elif argument.kind is ArgumentKind.PARAMETERS:
        options["action"] = "append"
        options["type"] = parameter_pair
        options["default"] = None
    else:
        options["default"] = ""

    if suppress_default:
        # Leave the value parsed before the mode token in place.
        options["default"] = argparse.SUPPRESS

    parser.add_argument(*argument.flags, **options)


def _add_common(parser: argparse.ArgumentParser, *, suppress_default: bool) -> None:
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"{PROG} {__version__}",
    )
    for argument in SHARED_ARGUMENTS:
        _add_argument(parser, argument, suppress_default=suppress_default)


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level parser with one subparser per mode.

    Shared flags are registered on the top-level parser and on every
    mode, so they may appear before or after the mode token.
    """
    parser = _RaisingArgumentParser(
        prog=PROG,
        description=DESCRIPTION,
        allow_abbrev=False,
    )
    _add_common(parser, suppress_default=False)

    modes = parser.add_subparsers(dest="mode", required=True, metavar="MODE")
    for spec in MODE_SPECS.values():
        # Flags must be spelled in full; no prefix matching.
        sub = modes.add_parser(
            spec.mode.value,
            help=spec.help,
            description=spec.help,
            allow_abbrev=False,
        )
        for argument in spec.arguments:
            _add_argument(sub, argument)
        _add_common(sub, suppress_default=True)
    return parser


# ---------------------------------------------------------------------------
# Namespace → descriptor
# ---------------------------------------------------------------------------

def _convert(kind: ArgumentKind, raw: Any) -> Any:
    if kind is ArgumentKind.CAPABILITIES:
        return tuple(Capability(value) for value in raw)
    if kind is ArgumentKind.PARAMETERS:
        # Later occurrences of a key replace earlier ones.
        return dict(raw)
    return raw


def descriptor_from_namespace(namespace: argparse.Namespace) -> CommandDescriptor:
    """Build a descriptor holding only the fields the parsed mode declares."""
    mode = Mode(namespace.mode)
    values: dict[str, Any] = {}
    for argument in MODE_SPECS[mode].arguments + SHARED_ARGUMENTS:
        raw = getattr(namespace, argument.field, None)
        if raw is None:
            continue
        values[argument.field] = _convert(argument.kind, raw)
    return CommandDescriptor(mode=mode, **values)


def parse_arguments(argv: Sequence[str]) -> CommandDescriptor:
    """Parse *argv* (without the program name) into a descriptor.

    Raises
    ------
    ArgumentParseError
        On an unknown or missing mode, a missing required positional,
        an unknown flag, or a malformed flag value.
    SystemExit
        After printing ``--help`` or ``--version`` output.
    """
    namespace = build_parser().parse_args(list(argv))
    return descriptor_from_namespace(namespace)
