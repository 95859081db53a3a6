"""Domain models for perun.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access and (de)serialisation to plain dicts.  They
carry zero I/O and no dependencies on external packages.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class Mode(str, Enum):
    """The single operation performed by one invocation."""

    VALIDATE = "validate"
    VALIDATE_OFFLINE = "validate_offline"
    CONVERT = "convert"
    CONFIGURE = "configure"
    CREATE_STACK = "create-stack"
    DELETE_STACK = "delete-stack"
    UPDATE_STACK = "update-stack"
    MFA = "mfa"
    SETUP_REMOTE_SINK = "setup-remote-sink"
    DESTROY_REMOTE_SINK = "destroy-remote-sink"
    CREATE_PARAMETERS = "create-parameters"
    SET_STACK_POLICY = "set-stack-policy"


class Capability(str, Enum):
    """IAM acknowledgement tokens accepted by stack operations."""

    CAPABILITY_IAM = "CAPABILITY_IAM"
    CAPABILITY_NAMED_IAM = "CAPABILITY_NAMED_IAM"


class Verbosity(str, Enum):
    """Logger verbosity levels, least to most severe."""

    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    ERROR = "ERROR"

    @property
    def rank(self) -> int:
        """Position in declaration order; a message is shown when its
        level's rank is at least the logger's rank."""
        return list(Verbosity).index(self)

MFA_DURATION_MIN: int = 1
MFA_DURATION_MAX: int = 129_600
"""36 hours, the longest session AWS STS will issue."""

DEFAULT_MFA_DURATION: int = 3600


# ---------------------------------------------------------------------------
# Command descriptor
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class CommandDescriptor:
    """Fully parsed command line for one invocation.

    Only the fields relevant to :attr:`mode` are populated; every other
    field keeps its default.  Instances are read-only for the rest of
    the process lifetime.
    """

    mode: Mode

    # Mode-specific fields
    template_path: str = ""
    output_path: str = ""
    stack: str = ""
    capabilities: tuple[Capability, ...] = ()
    parameters: Mapping[str, str] = field(default_factory=dict, hash=False)
    parameters_file: str = ""
    pretty_print: bool = False
    block: bool = False
    unblock: bool = False
    disable_stack_termination: bool = False
    enable_stack_termination: bool = False

    # Shared fields
    quiet: bool = False
    yes: bool = False
    verbosity: str = ""
    """Raw ``--verbosity`` value; empty means the caller's default."""

    mfa: bool = False
    mfa_duration: int | None = None
    """Requested MFA token lifetime in seconds, ``None`` when not given."""

    profile: str = ""
    region: str = ""
    sandbox: bool = False
    config_path: str = ""
    progress: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "parameters", MappingProxyType(dict(self.parameters)),
        )
        object.__setattr__(self, "capabilities", tuple(self.capabilities))


# ---------------------------------------------------------------------------
# Configuration record
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ConfigurationRecord:
    """Defaults written by ``perun configure``."""

    default_profile: str
    default_region: str
    specification_urls: Mapping[str, str] = field(default_factory=dict, hash=False)
    default_decision_for_mfa: bool = False
    default_duration_for_mfa: int = DEFAULT_MFA_DURATION
    default_verbosity: str = Verbosity.INFO.value

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "specification_urls",
            MappingProxyType(dict(self.specification_urls)),
        )

    def as_document(self) -> dict[str, Any]:
        """Return the plain-dict layout stored in the configuration file."""
        return {
            "DefaultProfile": self.default_profile,
            "DefaultRegion": self.default_region,
            "SpecificationURL": dict(self.specification_urls),
            "DefaultDecisionForMFA": self.default_decision_for_mfa,
            "DefaultDurationForMFA": self.default_duration_for_mfa,
            "DefaultVerbosity": self.default_verbosity,
        }

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> ConfigurationRecord:
        """Build a record from a loaded configuration file.

        Missing optional keys fall back to the wizard defaults.
        """
        return cls(
            default_profile=str(document.get("DefaultProfile", "")),
            default_region=str(document.get("DefaultRegion", "")),
            specification_urls=dict(document.get("SpecificationURL") or {}),
            default_decision_for_mfa=bool(document.get("DefaultDecisionForMFA", False)),
            default_duration_for_mfa=int(
                document.get("DefaultDurationForMFA", DEFAULT_MFA_DURATION),
            ),
            default_verbosity=str(
                document.get("DefaultVerbosity", Verbosity.INFO.value),
            ),
        )
