"""Mode dispatcher — routes a validated command to one operation.

No mode does its own work here.  :func:`route` is a table lookup from
:class:`~perun.core.models.Mode` to :class:`Operation`, and
:func:`dispatch` invokes the matching method on a
:class:`~perun.core.protocols.Collaborators` implementation exactly
once.
"""

from __future__ import annotations

from enum import Enum

from perun.core.models import CommandDescriptor, Mode
from perun.core.protocols import Collaborators
from perun.exceptions import DispatchError


class Operation(str, Enum):
    """Downstream operations; values are :class:`Collaborators` method names."""

    VALIDATE_ONLINE = "validate_online"
    VALIDATE_OFFLINE = "validate_offline"
    CONVERT = "convert"
    CONFIGURE = "configure"
    CREATE_STACK = "create_stack"
    DELETE_STACK = "delete_stack"
    UPDATE_STACK = "update_stack"
    UPDATE_SESSION_TOKEN = "update_session_token"
    SETUP_REMOTE_SINK = "setup_remote_sink"
    DESTROY_REMOTE_SINK = "destroy_remote_sink"
    CREATE_PARAMETERS = "create_parameters"
    APPLY_STACK_POLICY = "apply_stack_policy"
    SET_TERMINATION_PROTECTION = "set_termination_protection"


_ROUTES: dict[Mode, Operation] = {
    Mode.VALIDATE: Operation.VALIDATE_ONLINE,
    Mode.VALIDATE_OFFLINE: Operation.VALIDATE_OFFLINE,
    Mode.CONVERT: Operation.CONVERT,
    Mode.CONFIGURE: Operation.CONFIGURE,
    Mode.CREATE_STACK: Operation.CREATE_STACK,
    Mode.DELETE_STACK: Operation.DELETE_STACK,
    Mode.UPDATE_STACK: Operation.UPDATE_STACK,
    Mode.MFA: Operation.UPDATE_SESSION_TOKEN,
    Mode.SETUP_REMOTE_SINK: Operation.SETUP_REMOTE_SINK,
    Mode.DESTROY_REMOTE_SINK: Operation.DESTROY_REMOTE_SINK,
    Mode.CREATE_PARAMETERS: Operation.CREATE_PARAMETERS,
    Mode.SET_STACK_POLICY: Operation.APPLY_STACK_POLICY,
}

_unrouted = set(Mode) - set(_ROUTES)
if _unrouted:  # pragma: no cover
    raise DispatchError(
        "No route for mode(s): " + ", ".join(sorted(m.value for m in _unrouted)),
    )


def route(descriptor: CommandDescriptor) -> Operation:
    """Return the operation that handles *descriptor*.

    ``set-stack-policy`` switches to termination protection when either
    termination flag is set.
    """
    try:
        operation = _ROUTES[descriptor.mode]
    except KeyError:
        raise DispatchError(
            f"Internal error: no operation for mode {descriptor.mode!r}.",
        ) from None

    if operation is Operation.APPLY_STACK_POLICY and (
        descriptor.disable_stack_termination or descriptor.enable_stack_termination
    ):
        return Operation.SET_TERMINATION_PROTECTION
    return operation


def dispatch(descriptor: CommandDescriptor, collaborators: Collaborators) -> int:
    """Invoke the single collaborator operation for *descriptor*.

    Returns
    -------
    int
        The exit code reported by the collaborator.
    """
    handler = getattr(collaborators, route(descriptor).value)
    return handler(descriptor)
