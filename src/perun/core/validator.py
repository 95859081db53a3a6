"""Cross-field validation applied after parsing, before dispatch.

The grammar alone cannot express numeric ranges or the verbosity
enumeration, so these rules run once over the parsed
:class:`~perun.core.models.CommandDescriptor`.  Every rule raises its
own :class:`~perun.exceptions.ValidationError` subclass with a distinct
message.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable

from perun.core.models import (
    MFA_DURATION_MAX,
    MFA_DURATION_MIN,
    Capability,
    CommandDescriptor,
    Verbosity,
)
from perun.exceptions import (
    InvalidCapabilityError,
    InvalidVerbosityError,
    MfaDurationTooLongError,
    MfaDurationTooShortError,
)

_VERBOSITY_VALUES: frozenset[str] = frozenset(level.value for level in Verbosity)
_CAPABILITY_VALUES: frozenset[str] = frozenset(cap.value for cap in Capability)


def check_mfa_duration(duration: int | None) -> None:
    """Reject MFA durations outside ``[1, 129600]`` seconds.

    ``None`` means the flag was not supplied and is always accepted.
    """
    if duration is None:
        return
    if duration < MFA_DURATION_MIN:
        raise MfaDurationTooShortError(
            "You should specify value for duration of MFA token greater than zero",
            hint=f"Use --duration with a value of at least {MFA_DURATION_MIN} second.",
        )
    if duration > MFA_DURATION_MAX:
        raise MfaDurationTooLongError(
            f"You should specify value for duration of MFA token not greater "
            f"than {MFA_DURATION_MAX} (36 hours)",
            hint=f"Use --duration with a value of at most {MFA_DURATION_MAX} seconds.",
        )


def check_verbosity(verbosity: str) -> None:
    """Reject a non-empty verbosity that is not an exact level name."""
    if verbosity and verbosity not in _VERBOSITY_VALUES:
        raise InvalidVerbosityError(
            "You specified invalid value for --verbosity flag",
            hint="Choose one of: " + " | ".join(level.value for level in Verbosity),
        )


def check_capabilities(capabilities: Iterable[str]) -> tuple[Capability, ...]:
    """Return *capabilities* as :class:`Capability` members.

    Free-text values are accepted when they spell a known capability.
    """
    normalised: list[Capability] = []
    for value in capabilities:
        raw = value.value if isinstance(value, Capability) else value
        if raw not in _CAPABILITY_VALUES:
            raise InvalidCapabilityError(
                f"Unknown capability: {raw!r}",
                hint="Choose one of: "
                + " | ".join(cap.value for cap in Capability),
            )
        normalised.append(Capability(raw))
    return tuple(normalised)


def validate_descriptor(descriptor: CommandDescriptor) -> CommandDescriptor:
    """Run every cross-field rule over *descriptor*.

    Returns
    -------
    CommandDescriptor
        The descriptor itself, or a copy with capabilities normalised.

    Raises
    ------
    ValidationError
        On the first rule that fails.
    """
    check_mfa_duration(descriptor.mfa_duration)
    check_verbosity(descriptor.verbosity)
    capabilities = check_capabilities(descriptor.capabilities)
    if any(type(cap) is not Capability for cap in descriptor.capabilities):
        return dataclasses.replace(descriptor, capabilities=capabilities)
    return descriptor
