"""Declarative command grammar.

The grammar lists every mode, the positional arguments it binds (in
order) and the flags scoped to it, plus the flags shared by all modes.
It is pure data: :mod:`perun.cli.parser` turns it into an argparse
parser and uses :func:`mode_fields` to decide which descriptor fields a
parsed mode may populate.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from perun.core.models import Mode


class ArgumentKind(str, Enum):
    """How a raw argument value is interpreted."""

    TEXT = "text"
    SWITCH = "switch"
    INTEGER = "integer"
    CAPABILITIES = "capabilities"
    PARAMETERS = "parameters"


@dataclass(frozen=True, slots=True)
class ArgumentSpec:
    """One positional argument or flag.

    ``field`` names the :class:`~perun.core.models.CommandDescriptor`
    attribute the value is bound to.  An empty ``flags`` tuple marks a
    positional argument.
    """

    field: str
    help: str
    kind: ArgumentKind = ArgumentKind.TEXT
    flags: tuple[str, ...] = ()
    required: bool = False
    metavar: str | None = None

    @property
    def positional(self) -> bool:
        return not self.flags


@dataclass(frozen=True, slots=True)
class ModeSpec:
    """Grammar of a single mode."""

    mode: Mode
    help: str
    arguments: tuple[ArgumentSpec, ...] = ()


# ---------------------------------------------------------------------------
# Shared flags
# ---------------------------------------------------------------------------

SHARED_ARGUMENTS: tuple[ArgumentSpec, ...] = (
    ArgumentSpec("quiet", "No console output, just return code.",
                 ArgumentKind.SWITCH, ("-q", "--quiet")),
    ArgumentSpec("yes", "Always say yes.", ArgumentKind.SWITCH, ("-y", "--yes")),
    ArgumentSpec("verbosity", "Logger verbosity: TRACE | DEBUG | INFO | ERROR.",
                 flags=("-v", "--verbosity"), metavar="LEVEL"),
    ArgumentSpec("mfa", "Enable AWS MFA.", ArgumentKind.SWITCH, ("--mfa",)),
    ArgumentSpec("mfa_duration",
                 "Duration for AWS MFA token (seconds value from range [1, 129600]).",
                 ArgumentKind.INTEGER, ("-d", "--duration"), metavar="SECONDS"),
    ArgumentSpec("profile", "An AWS profile name.", flags=("-p", "--profile")),
    ArgumentSpec("region", "An AWS region to use.", flags=("-r", "--region")),
    ArgumentSpec("sandbox", "Do not use configuration files hierarchy.",
                 ArgumentKind.SWITCH, ("--sandbox",)),
    ArgumentSpec("config_path", "A path to the configuration file.",
                 flags=("-c", "--config"), metavar="PATH"),
    ArgumentSpec("progress",
                 "Show progress of stack creation. "
                 "Option available only after setting up a remote sink.",
                 ArgumentKind.SWITCH, ("--progress",)),
)


# ---------------------------------------------------------------------------
# Reusable per-mode arguments
# ---------------------------------------------------------------------------

def _template(required: bool = False) -> ArgumentSpec:
    return ArgumentSpec("template_path", "A path to the template file.",
                        required=required, metavar="template")


def _stack(required: bool = False) -> ArgumentSpec:
    return ArgumentSpec("stack", "An AWS stack name.",
                        required=required, metavar="stack")


def _output(help_text: str) -> ArgumentSpec:
    return ArgumentSpec("output_path", help_text, metavar="output")


_CAPABILITIES = ArgumentSpec(
    "capabilities", "Capabilities: CAPABILITY_IAM | CAPABILITY_NAMED_IAM",
    ArgumentKind.CAPABILITIES, ("--capabilities",),
)
_PARAMETER = ArgumentSpec(
    "parameters", "A template parameter as key=value (repeatable).",
    ArgumentKind.PARAMETERS, ("--parameter",), metavar="KEY=VALUE",
)
_PRETTY_PRINT = ArgumentSpec(
    "pretty_print", "Pretty printing JSON", ArgumentKind.SWITCH, ("--pretty-print",),
)


# ---------------------------------------------------------------------------
# Modes
# ---------------------------------------------------------------------------

MODE_SPECS: dict[Mode, ModeSpec] = {
    spec.mode: spec
    for spec in (
        ModeSpec(Mode.VALIDATE, "Online template Validation", (_template(),)),
        ModeSpec(Mode.VALIDATE_OFFLINE, "Offline Template Validation", (_template(),)),
        ModeSpec(
            Mode.CONVERT,
            "Conversion between JSON and YAML of template files",
            (
                _template(),
                _output("A path where converted file will be saved."),
                _PRETTY_PRINT,
            ),
        ),
        ModeSpec(Mode.CONFIGURE, "Create your own configuration mode"),
        ModeSpec(
            Mode.CREATE_STACK,
            "Creates a stack on aws",
            (
                _stack(required=True),
                _template(required=True),
                _CAPABILITIES,
                _PARAMETER,
                ArgumentSpec("parameters_file", "filename with parameters",
                             flags=("--parameters-file",), metavar="PATH"),
            ),
        ),
        ModeSpec(Mode.DELETE_STACK, "Deletes a stack on aws", (_stack(),)),
        ModeSpec(
            Mode.UPDATE_STACK,
            "Updates a stack on aws",
            (_stack(), _template(), _CAPABILITIES),
        ),
        ModeSpec(Mode.MFA, "Create temporary secure credentials with MFA."),
        ModeSpec(
            Mode.SETUP_REMOTE_SINK,
            "Sets up resources required for progress report on stack events "
            "(SNS Topic, SQS Queue and SQS Queue Policy)",
        ),
        ModeSpec(
            Mode.DESTROY_REMOTE_SINK,
            "Destroys resources created with setup-remote-sink",
        ),
        ModeSpec(
            Mode.CREATE_PARAMETERS,
            "Creates a JSON parameters configuration suitable for given "
            "CloudFormation file",
            (
                _template(),
                _output("A path to file where parameters will be saved."),
                _PARAMETER,
                _PRETTY_PRINT,
            ),
        ),
        ModeSpec(
            Mode.SET_STACK_POLICY,
            "Set stack policy using JSON file.",
            (
                _stack(),
                _template(),
                ArgumentSpec("block", "Blocking all actions.",
                             ArgumentKind.SWITCH, ("--block",)),
                ArgumentSpec("unblock", "Unblocking all actions.",
                             ArgumentKind.SWITCH, ("--unblock",)),
                ArgumentSpec("disable_stack_termination", "Allow to delete a stack.",
                             ArgumentKind.SWITCH, ("--disable-stack-termination",)),
                ArgumentSpec("enable_stack_termination",
                             "Protecting a stack from being deleted.",
                             ArgumentKind.SWITCH, ("--enable-stack-termination",)),
            ),
        ),
    )
}


def mode_fields(mode: Mode) -> frozenset[str]:
    """Return the descriptor fields *mode* is allowed to populate."""
    spec = MODE_SPECS[mode]
    return frozenset(
        argument.field for argument in spec.arguments + SHARED_ARGUMENTS
    )
