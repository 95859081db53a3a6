"""Infrastructure: YAML persistence of the configuration record.

Rules
-----
* Never overwrite an existing configuration file.
* Every ``OSError`` / ``yaml.YAMLError`` is re-raised as
  :class:`~perun.exceptions.ConfigurationStoreError`.
* No ``print()`` — callers handle user-facing output.
"""

from __future__ import annotations

from pathlib import Path

import yaml

from perun.core.models import ConfigurationRecord
from perun.exceptions import ConfigurationStoreError

SYSTEM_CONFIG_DIR: Path = Path("/etc/perun")


def user_config_dir() -> Path:
    """Return ``~/.config/perun`` for the current user."""
    return Path.home() / ".config" / "perun"


def default_locations() -> tuple[Path, ...]:
    """Directories searched for a configuration file, most specific first."""
    return (user_config_dir(), SYSTEM_CONFIG_DIR)


class YamlConfigurationStore:
    """Read and write :class:`ConfigurationRecord` values as YAML files."""

    def exists(self, path: Path) -> bool:
        return Path(path).exists()

    def save(self, record: ConfigurationRecord, path: Path) -> None:
        """Write *record* to *path*, creating parent directories.

        Raises
        ------
        ConfigurationStoreError
            If *path* already exists or cannot be written.
        """
        path = Path(path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ConfigurationStoreError(
                f"Could not write configuration file {path}: {exc}",
                hint="Check that the directory is writable.",
            ) from exc

        try:
            with path.open("x", encoding="utf-8") as handle:
                yaml.safe_dump(
                    record.as_document(),
                    handle,
                    default_flow_style=False,
                    sort_keys=False,
                )
        except FileExistsError as exc:
            raise ConfigurationStoreError(
                f"Configuration file already exists: {path}",
            ) from exc
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigurationStoreError(
                f"Could not write configuration file {path}: {exc}",
                hint="Check that the directory is writable.",
            ) from exc

    def load(self, path: Path) -> ConfigurationRecord:
        """Read a record previously written by :meth:`save`.

        Raises
        ------
        ConfigurationStoreError
            If the file is missing, unreadable, or not a YAML mapping.
        """
        path = Path(path)
        try:
            with path.open(encoding="utf-8") as handle:
                document = yaml.safe_load(handle)
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigurationStoreError(
                f"Could not read configuration file {path}: {exc}",
            ) from exc
        if not isinstance(document, dict):
            raise ConfigurationStoreError(
                f"Configuration file {path} does not contain a mapping.",
            )
        return ConfigurationRecord.from_document(document)
