"""Infrastructure layer — external system integration.

This layer wraps filesystem persistence and the stack / credential
backends.  Every raw third-party exception must be caught here and
re-raised as a :class:`~perun.exceptions.PerunError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from perun.infra.collaborators import UnwiredCollaborators
from perun.infra.config_store import YamlConfigurationStore, default_locations

__all__: list[str] = [
    "UnwiredCollaborators",
    "YamlConfigurationStore",
    "default_locations",
]
