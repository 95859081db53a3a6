"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters and the CLI
must satisfy.  Core code depends ONLY on these protocols — never on
concrete implementations.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from perun.core.models import CommandDescriptor, ConfigurationRecord


class Collaborators(Protocol):
    """Downstream operations, one per dispatch route.

    Each method receives the validated descriptor (read-only) and
    returns the process exit code.
    """

    def validate_online(self, descriptor: CommandDescriptor) -> int: ...
    def validate_offline(self, descriptor: CommandDescriptor) -> int: ...
    def convert(self, descriptor: CommandDescriptor) -> int: ...
    def configure(self, descriptor: CommandDescriptor) -> int: ...
    def create_stack(self, descriptor: CommandDescriptor) -> int: ...
    def delete_stack(self, descriptor: CommandDescriptor) -> int: ...
    def update_stack(self, descriptor: CommandDescriptor) -> int: ...
    def update_session_token(self, descriptor: CommandDescriptor) -> int: ...
    def setup_remote_sink(self, descriptor: CommandDescriptor) -> int: ...
    def destroy_remote_sink(self, descriptor: CommandDescriptor) -> int: ...
    def create_parameters(self, descriptor: CommandDescriptor) -> int: ...
    def apply_stack_policy(self, descriptor: CommandDescriptor) -> int: ...
    def set_termination_protection(self, descriptor: CommandDescriptor) -> int: ...


class InputSource(Protocol):
    """Reads one line of operator input.

    Returns ``None`` when the operator cancels the prompt.
    """

    def __call__(self, message: str) -> str | None: ...  # pragma: no cover


class Reporter(Protocol):
    """Receives user-facing progress and error messages."""

    def always(self, message: str) -> None: ...  # pragma: no cover
    def error(self, message: str) -> None: ...  # pragma: no cover


class ConfigurationStore(Protocol):
    """Persistence of :class:`ConfigurationRecord` values."""

    def exists(self, path: Path) -> bool:
        """Return ``True`` when something is already present at *path*."""
        ...  # pragma: no cover

    def save(self, record: ConfigurationRecord, path: Path) -> None:
        """Serialise *record* to *path*.

        Raises
        ------
        ConfigurationStoreError
            When the file cannot be written.
        """
        ...  # pragma: no cover
