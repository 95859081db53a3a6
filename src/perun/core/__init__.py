"""Core layer — command model, grammar, validation, dispatch, and wizard.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O.
* No imports from ``cli`` or ``infra``.
* All functions must be fully typed and deterministic.
"""

from perun.core.catalog import DEFAULT_CATALOG, RegionCatalog, RegionEntry
from perun.core.dispatcher import Operation, dispatch, route
from perun.core.models import (
    Capability,
    CommandDescriptor,
    ConfigurationRecord,
    Mode,
    Verbosity,
)
from perun.core.protocols import Collaborators, ConfigurationStore, InputSource, Reporter
from perun.core.validator import validate_descriptor
from perun.core.wizard import ConfigurationWizard

__all__: list[str] = [
    "DEFAULT_CATALOG",
    "Capability",
    "Collaborators",
    "CommandDescriptor",
    "ConfigurationRecord",
    "ConfigurationStore",
    "ConfigurationWizard",
    "InputSource",
    "Mode",
    "Operation",
    "RegionCatalog",
    "RegionEntry",
    "Reporter",
    "Verbosity",
    "dispatch",
    "route",
    "validate_descriptor",
]
