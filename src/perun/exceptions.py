"""Custom exception hierarchy for perun.

All exceptions that cross layer boundaries must inherit from
:class:`PerunError`.  The CLI error boundary renders them as a message
plus optional hint and turns them into a non-zero exit code.

Hierarchy
---------
PerunError
├── ArgumentParseError
├── ValidationError
│   ├── MfaDurationTooShortError
│   ├── MfaDurationTooLongError
│   ├── InvalidVerbosityError
│   └── InvalidCapabilityError
├── CatalogError
├── ConfigurationAbortedError
├── SelectionExhaustedError
├── ConfigurationStoreError
├── CollaboratorUnavailableError
├── DispatchError
└── EnvironmentError
"""

from __future__ import annotations


class PerunError(Exception):
    """Base exception for all perun errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Command line grammar --------------------------------------------------

class ArgumentParseError(PerunError):
    """Raised when the command line does not match the grammar."""


# --- Cross-field validation ------------------------------------------------

class ValidationError(PerunError):
    """Raised when a parsed command violates a range or enumeration rule."""


class MfaDurationTooShortError(ValidationError):
    """Raised when the MFA token duration is below one second."""


class MfaDurationTooLongError(ValidationError):
    """Raised when the MFA token duration exceeds 36 hours."""


class InvalidVerbosityError(ValidationError):
    """Raised when ``--verbosity`` is not a known level."""


class InvalidCapabilityError(ValidationError):
    """Raised when a capability is outside the supported enumeration."""


# --- Region catalog --------------------------------------------------------

class CatalogError(PerunError):
    """Raised when the region catalog is inconsistent."""


# --- Configure wizard ------------------------------------------------------

class ConfigurationAbortedError(PerunError):
    """Raised when the user cancels an interactive prompt."""


class SelectionExhaustedError(PerunError):
    """Raised when a bounded selection loop runs out of attempts."""


class ConfigurationStoreError(PerunError):
    """Raised when the configuration file cannot be read or written."""


# --- Dispatch --------------------------------------------------------------

class CollaboratorUnavailableError(PerunError):
    """Raised when a mode's backing operation is not wired into this build."""


class DispatchError(PerunError):
    """Raised when a command cannot be routed to any operation."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(PerunError):
    """Raised when a required runtime dependency is not available."""
