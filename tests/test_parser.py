"""Tests for the argument parser (cli/parser.py).

Every mode is parsed with its minimum arguments; shared flags, repeated
flags, and grammar failures are covered separately.  No collaborator is
invoked — the parser only produces descriptors.
"""

from __future__ import annotations

import dataclasses

import pytest

from perun.cli.parser import build_parser, parameter_pair, parse_arguments
from perun.core.grammar import mode_fields
from perun.core.models import Capability, CommandDescriptor, Mode
from perun.exceptions import ArgumentParseError

MINIMAL_ARGV: dict[Mode, list[str]] = {
    Mode.VALIDATE: ["validate"],
    Mode.VALIDATE_OFFLINE: ["validate_offline"],
    Mode.CONVERT: ["convert"],
    Mode.CONFIGURE: ["configure"],
    Mode.CREATE_STACK: ["create-stack", "mystack", "template.json"],
    Mode.DELETE_STACK: ["delete-stack"],
    Mode.UPDATE_STACK: ["update-stack"],
    Mode.MFA: ["mfa"],
    Mode.SETUP_REMOTE_SINK: ["setup-remote-sink"],
    Mode.DESTROY_REMOTE_SINK: ["destroy-remote-sink"],
    Mode.CREATE_PARAMETERS: ["create-parameters"],
    Mode.SET_STACK_POLICY: ["set-stack-policy"],
}


# ---------------------------------------------------------------------------
# Mode selection
# ---------------------------------------------------------------------------

class TestModeSelection:
    def test_every_mode_has_minimal_argv(self) -> None:
        assert set(MINIMAL_ARGV) == set(Mode)

    @pytest.mark.parametrize("mode", list(Mode))
    def test_minimal_arguments_select_mode(self, mode: Mode) -> None:
        descriptor = parse_arguments(MINIMAL_ARGV[mode])
        assert descriptor.mode is mode

    @pytest.mark.parametrize("mode", list(Mode))
    def test_no_cross_mode_leakage(self, mode: Mode) -> None:
        """Fields a mode does not declare keep their defaults."""
        argv = MINIMAL_ARGV[mode] + [
            "--quiet", "--region", "eu-west-1", "--duration", "900",
        ]
        descriptor = parse_arguments(argv)
        default = CommandDescriptor(mode=mode)
        allowed = mode_fields(mode)
        for field in dataclasses.fields(CommandDescriptor):
            if field.name == "mode" or field.name in allowed:
                continue
            assert getattr(descriptor, field.name) == getattr(default, field.name), (
                field.name
            )

    def test_unknown_mode_fails(self) -> None:
        with pytest.raises(ArgumentParseError, match="invalid choice"):
            parse_arguments(["deploy"])

    def test_missing_mode_fails(self) -> None:
        with pytest.raises(ArgumentParseError):
            parse_arguments([])

    def test_flags_only_without_mode_fails(self) -> None:
        with pytest.raises(ArgumentParseError):
            parse_arguments(["--quiet"])

    def test_error_carries_usage_hint(self) -> None:
        with pytest.raises(ArgumentParseError) as exc_info:
            parse_arguments(["deploy"])
        assert exc_info.value.hint is not None
        assert "--help" in exc_info.value.hint


# ---------------------------------------------------------------------------
# Positional arguments
# ---------------------------------------------------------------------------

class TestPositionals:
    def test_create_stack_end_to_end(self) -> None:
        descriptor = parse_arguments(
            ["create-stack", "mystack", "template.json",
             "--capabilities", "CAPABILITY_IAM"],
        )
        assert descriptor.mode is Mode.CREATE_STACK
        assert descriptor.stack == "mystack"
        assert descriptor.template_path == "template.json"
        assert list(descriptor.capabilities) == ["CAPABILITY_IAM"]
        assert descriptor.capabilities == (Capability.CAPABILITY_IAM,)

    def test_create_stack_requires_template(self) -> None:
        with pytest.raises(ArgumentParseError, match="template"):
            parse_arguments(["create-stack", "mystack"])

    def test_create_stack_requires_stack(self) -> None:
        with pytest.raises(ArgumentParseError):
            parse_arguments(["create-stack"])

    def test_update_stack_positionals_optional(self) -> None:
        descriptor = parse_arguments(["update-stack", "mystack"])
        assert descriptor.stack == "mystack"
        assert descriptor.template_path == ""

    def test_update_stack_binds_in_order(self) -> None:
        descriptor = parse_arguments(["update-stack", "mystack", "t.yaml"])
        assert descriptor.stack == "mystack"
        assert descriptor.template_path == "t.yaml"

    def test_delete_stack(self) -> None:
        assert parse_arguments(["delete-stack", "old"]).stack == "old"

    def test_convert_binds_template_then_output(self) -> None:
        descriptor = parse_arguments(["convert", "in.yaml", "out.json", "--pretty-print"])
        assert descriptor.template_path == "in.yaml"
        assert descriptor.output_path == "out.json"
        assert descriptor.pretty_print is True

    def test_validate_binds_template(self) -> None:
        assert parse_arguments(["validate", "t.json"]).template_path == "t.json"

    def test_too_many_positionals_fails(self) -> None:
        with pytest.raises(ArgumentParseError, match="unrecognized"):
            parse_arguments(["validate", "a.json", "b.json"])


# ---------------------------------------------------------------------------
# Shared flags
# ---------------------------------------------------------------------------

class TestSharedFlags:
    def test_defaults(self) -> None:
        descriptor = parse_arguments(["mfa"])
        assert descriptor.quiet is False
        assert descriptor.yes is False
        assert descriptor.verbosity == ""
        assert descriptor.mfa is False
        assert descriptor.mfa_duration is None
        assert descriptor.profile == ""
        assert descriptor.region == ""
        assert descriptor.sandbox is False
        assert descriptor.config_path == ""
        assert descriptor.progress is False

    def test_all_long_flags_after_mode(self) -> None:
        descriptor = parse_arguments([
            "mfa", "--quiet", "--yes", "--verbosity", "DEBUG", "--mfa",
            "--duration", "7200", "--profile", "dev", "--region", "eu-west-1",
            "--sandbox", "--config", "/tmp/perun.yaml", "--progress",
        ])
        assert descriptor.quiet is True
        assert descriptor.yes is True
        assert descriptor.verbosity == "DEBUG"
        assert descriptor.mfa is True
        assert descriptor.mfa_duration == 7200
        assert descriptor.profile == "dev"
        assert descriptor.region == "eu-west-1"
        assert descriptor.sandbox is True
        assert descriptor.config_path == "/tmp/perun.yaml"
        assert descriptor.progress is True

    def test_short_flags_before_mode(self) -> None:
        descriptor = parse_arguments([
            "-q", "-y", "-v", "INFO", "-d", "60", "-p", "ops", "-r", "us-west-2",
            "-c", "cfg.yaml", "validate", "t.json",
        ])
        assert descriptor.mode is Mode.VALIDATE
        assert descriptor.quiet is True
        assert descriptor.yes is True
        assert descriptor.verbosity == "INFO"
        assert descriptor.mfa_duration == 60
        assert descriptor.profile == "ops"
        assert descriptor.region == "us-west-2"
        assert descriptor.config_path == "cfg.yaml"

    def test_flag_before_mode_survives_subcommand(self) -> None:
        descriptor = parse_arguments(["--profile", "dev", "delete-stack", "s"])
        assert descriptor.profile == "dev"

    def test_flag_after_mode_overrides_earlier_value(self) -> None:
        descriptor = parse_arguments(["-p", "dev", "mfa", "-p", "prod"])
        assert descriptor.profile == "prod"

    def test_non_integer_duration_fails(self) -> None:
        with pytest.raises(ArgumentParseError, match="invalid int value"):
            parse_arguments(["mfa", "--duration", "soon"])

    def test_zero_duration_is_parsed(self) -> None:
        """Range checks belong to the validator, not the grammar."""
        assert parse_arguments(["mfa", "-d", "0"]).mfa_duration == 0

    def test_lowercase_verbosity_is_parsed_verbatim(self) -> None:
        assert parse_arguments(["mfa", "-v", "debug"]).verbosity == "debug"


# ---------------------------------------------------------------------------
# Mode-specific flags
# ---------------------------------------------------------------------------

class TestModeFlags:
    def test_repeated_parameters_accumulate(self) -> None:
        descriptor = parse_arguments([
            "create-stack", "s", "t.json",
            "--parameter", "k1=v1", "--parameter", "k2=v2",
        ])
        assert dict(descriptor.parameters) == {"k1": "v1", "k2": "v2"}

    def test_repeated_parameter_key_last_value_wins(self) -> None:
        descriptor = parse_arguments([
            "create-parameters", "--parameter", "k=first", "--parameter", "k=second",
        ])
        assert dict(descriptor.parameters) == {"k": "second"}

    def test_parameter_value_may_contain_equals(self) -> None:
        descriptor = parse_arguments([
            "create-parameters", "--parameter", "Query=a=b",
        ])
        assert descriptor.parameters["Query"] == "a=b"

    @pytest.mark.parametrize("token", ["novalue", "=value"])
    def test_malformed_parameter_fails(self, token: str) -> None:
        with pytest.raises(ArgumentParseError, match="KEY=VALUE"):
            parse_arguments(["create-stack", "s", "t", "--parameter", token])

    @pytest.mark.parametrize("argv", [
        ["create-stack", "s", "t", "--cap", "CAPABILITY_IAM"],
        ["mfa", "--dur", "5"],
        ["--dur", "5", "mfa"],
        ["convert", "in.yaml", "out.json", "--pretty"],
    ])
    def test_abbreviated_flags_rejected(self, argv: list[str]) -> None:
        with pytest.raises(ArgumentParseError, match="unrecognized"):
            parse_arguments(argv)

    def test_parameters_are_read_only(self) -> None:
        descriptor = parse_arguments(["create-parameters", "--parameter", "a=1"])
        with pytest.raises(TypeError):
            descriptor.parameters["b"] = "2"  # type: ignore[index]

    def test_parameters_file(self) -> None:
        descriptor = parse_arguments([
            "create-stack", "s", "t", "--parameters-file", "params.json",
        ])
        assert descriptor.parameters_file == "params.json"

    def test_repeated_capabilities(self) -> None:
        descriptor = parse_arguments([
            "update-stack", "s", "t",
            "--capabilities", "CAPABILITY_IAM",
            "--capabilities", "CAPABILITY_NAMED_IAM",
        ])
        assert descriptor.capabilities == (
            Capability.CAPABILITY_IAM,
            Capability.CAPABILITY_NAMED_IAM,
        )

    def test_unknown_capability_fails(self) -> None:
        with pytest.raises(ArgumentParseError, match="invalid choice"):
            parse_arguments(["create-stack", "s", "t", "--capabilities", "CAPABILITY_X"])

    def test_create_parameters_flags(self) -> None:
        descriptor = parse_arguments([
            "create-parameters", "t.json", "params.json", "--pretty-print",
        ])
        assert descriptor.template_path == "t.json"
        assert descriptor.output_path == "params.json"
        assert descriptor.pretty_print is True

    def test_set_stack_policy_flags(self) -> None:
        descriptor = parse_arguments([
            "set-stack-policy", "s", "policy.json",
            "--block", "--unblock",
            "--disable-stack-termination", "--enable-stack-termination",
        ])
        assert descriptor.stack == "s"
        assert descriptor.template_path == "policy.json"
        assert descriptor.block is True
        assert descriptor.unblock is True
        assert descriptor.disable_stack_termination is True
        assert descriptor.enable_stack_termination is True

    @pytest.mark.parametrize(
        "argv",
        [
            ["validate", "t.json", "--pretty-print"],
            ["delete-stack", "s", "--capabilities", "CAPABILITY_IAM"],
            ["convert", "--parameter", "a=b"],
            ["create-stack", "s", "t", "--block"],
        ],
    )
    def test_flag_outside_its_mode_fails(self, argv: list[str]) -> None:
        with pytest.raises(ArgumentParseError, match="unrecognized"):
            parse_arguments(argv)


# ---------------------------------------------------------------------------
# Help / version short-circuit
# ---------------------------------------------------------------------------

class TestShortCircuit:
    @pytest.mark.parametrize(
        "argv",
        [
            ["--help"],
            ["-h"],
            ["create-stack", "--help"],
            ["--version"],
            ["-V"],
            ["set-stack-policy", "--version"],
        ],
    )
    def test_exits_cleanly(self, argv: list[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            parse_arguments(argv)
        assert exc_info.value.code == 0

    def test_version_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        from perun.version import __version__

        with pytest.raises(SystemExit):
            parse_arguments(["--version"])
        assert __version__ in capsys.readouterr().out


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

class TestParameterPair:
    def test_splits_on_first_equals(self) -> None:
        assert parameter_pair("a=b=c") == ("a", "b=c")

    def test_empty_value_allowed(self) -> None:
        assert parameter_pair("a=") == ("a", "")


class TestBuildParser:
    def test_parser_is_fresh_each_time(self) -> None:
        assert build_parser() is not build_parser()

    def test_parsing_does_not_share_state(self) -> None:
        first = parse_arguments(["-p", "dev", "mfa"])
        second = parse_arguments(["mfa"])
        assert first.profile == "dev"
        assert second.profile == ""
