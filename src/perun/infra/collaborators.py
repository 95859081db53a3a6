"""Infrastructure: placeholder stack, template and credential operations.

Template validation, conversion, stack lifecycle, MFA session exchange
and remote-sink provisioning live outside this distribution.  Until a
backend is plugged in, :class:`UnwiredCollaborators` satisfies the
:class:`~perun.core.protocols.Collaborators` protocol by raising
:class:`~perun.exceptions.CollaboratorUnavailableError` for each of
them.
"""

from __future__ import annotations

from perun.core.models import CommandDescriptor
from perun.exceptions import CollaboratorUnavailableError


class UnwiredCollaborators:
    """Collaborators with no backend attached."""

    def _unavailable(self, operation: str, descriptor: CommandDescriptor) -> int:
        raise CollaboratorUnavailableError(
            f"'{descriptor.mode.value}' ({operation}) is not available in this build.",
            hint="Install a perun backend that provides this operation.",
        )

    def validate_online(self, descriptor: CommandDescriptor) -> int:
        return self._unavailable("validate_online", descriptor)

    def validate_offline(self, descriptor: CommandDescriptor) -> int:
        return self._unavailable("validate_offline", descriptor)

    def convert(self, descriptor: CommandDescriptor) -> int:
        return self._unavailable("convert", descriptor)

    def configure(self, descriptor: CommandDescriptor) -> int:
        return self._unavailable("configure", descriptor)

    def create_stack(self, descriptor: CommandDescriptor) -> int:
        return self._unavailable("create_stack", descriptor)

    def delete_stack(self, descriptor: CommandDescriptor) -> int:
        return self._unavailable("delete_stack", descriptor)

    def update_stack(self, descriptor: CommandDescriptor) -> int:
        return self._unavailable("update_stack", descriptor)

    def update_session_token(self, descriptor: CommandDescriptor) -> int:
        return self._unavailable("update_session_token", descriptor)

    def setup_remote_sink(self, descriptor: CommandDescriptor) -> int:
        return self._unavailable("setup_remote_sink", descriptor)

    def destroy_remote_sink(self, descriptor: CommandDescriptor) -> int:
        return self._unavailable("destroy_remote_sink", descriptor)

    def create_parameters(self, descriptor: CommandDescriptor) -> int:
        return self._unavailable("create_parameters", descriptor)

    def apply_stack_policy(self, descriptor: CommandDescriptor) -> int:
        return self._unavailable("apply_stack_policy", descriptor)

    def set_termination_protection(self, descriptor: CommandDescriptor) -> int:
        return self._unavailable("set_termination_protection", descriptor)
