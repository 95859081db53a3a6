"""``perun configure`` — interactive first-run configuration.

This module is responsible for:

* Asking where the configuration file should be written.
* Rendering the region catalog as a Rich table.
* Reading answers through questionary text prompts.
* Running :class:`~perun.core.wizard.ConfigurationWizard` against the
  YAML store.

The retry logic itself lives in :mod:`perun.core.wizard`.
"""

from __future__ import annotations

from typing import Any

from perun.cli import exit_codes
from perun.cli.console import ConsoleLogger, console
from perun.core.protocols import ConfigurationStore, InputSource
from perun.core.wizard import ConfigurationWizard, parse_filename, run_selection
from perun.exceptions import ConfigurationAbortedError, EnvironmentError
from perun.infra.config_store import (
    YamlConfigurationStore,
    default_locations,
    user_config_dir,
)


def _import_questionary() -> Any:
    """Import questionary lazily for interactive prompts."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


def _import_rich_table() -> type[Any]:
    """Import rich table lazily for region rendering."""
    try:
        from rich.table import Table
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Table


def questionary_input(message: str) -> str | None:
    """Read one free-text answer; ``None`` on Ctrl+C / Esc."""
    questionary = _import_questionary()
    return questionary.text(f"{message}:").ask()


class ConsoleConfigurationWizard(ConfigurationWizard):
    """Wizard that lists regions in a Rich table."""

    def show_regions(self) -> None:
        if getattr(self._reporter, "quiet", False):
            return
        table_class = _import_rich_table()
        table = table_class(
            title="Regions",
            show_header=True,
            header_style="bold magenta",
            border_style="dim",
        )
        table.add_column("Number", justify="right", style="dim", width=6)
        table.add_column("Region", justify="left", min_width=14)

        for index, entry in enumerate(self._catalog):
            table.add_row(str(index), entry.code)

        console.print()
        console.print(table)
        console.print()


def run_configure(
    logger: ConsoleLogger,
    *,
    read: InputSource | None = None,
    store: ConfigurationStore | None = None,
) -> int:
    """Ask for a target file and run the configuration wizard.

    Parameters
    ----------
    logger:
        Console logger built from the command's shared flags.
    read:
        Answer source; defaults to questionary prompts.
    store:
        Persistence backend; defaults to :class:`YamlConfigurationStore`.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS`, also when the file already exists.

    Raises
    ------
    ConfigurationAbortedError
        If the operator cancels a prompt.
    """
    read = read or questionary_input
    store = store or YamlConfigurationStore()

    logger.always(
        "Configure file could be in \n  "
        + "\n  ".join(str(location) for location in default_locations()),
    )
    directory = read("Your path")
    if directory is None:
        raise ConfigurationAbortedError("Configuration cancelled.")
    filename = run_selection(
        read,
        "Filename",
        parse_filename,
        on_retry=lambda raw: logger.error(
            f"Filename must be a plain file name, got {raw!r}",
        ),
    )

    wizard = ConsoleConfigurationWizard(read, store, logger)
    target = wizard.target_path(directory.strip() or user_config_dir(), filename)
    record = wizard.run(target)
    if record is not None:
        logger.info(f"Configuration saved to {target}")
    return exit_codes.SUCCESS
