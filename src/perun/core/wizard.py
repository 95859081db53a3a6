"""First-run configuration wizard.

The wizard is modelled as two selection loops driven by an explicit
:class:`PromptState` machine.  Input arrives through an injectable
:class:`~perun.core.protocols.InputSource`, so tests can feed a bounded
sequence of answers instead of a terminal.

Flow
----
1. Refuse to run when the target configuration file already exists.
2. List the region catalog and loop until a valid 0-based index is read.
3. Loop until a non-empty profile name is read.
4. Build a :class:`~perun.core.models.ConfigurationRecord` and hand it
   to the :class:`~perun.core.protocols.ConfigurationStore`.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from enum import Enum
from pathlib import Path
from typing import TypeVar

from perun.core.catalog import DEFAULT_CATALOG, RegionCatalog
from perun.core.models import DEFAULT_MFA_DURATION, ConfigurationRecord, Verbosity
from perun.core.protocols import ConfigurationStore, InputSource, Reporter
from perun.exceptions import ConfigurationAbortedError, SelectionExhaustedError

T = TypeVar("T")


class PromptState(str, Enum):
    """States of a single selection loop."""

    PROMPT = "prompt"
    VALIDATE = "validate"
    ACCEPT = "accept"
    RETRY = "retry"


def run_selection(
    read: InputSource,
    message: str,
    validate: Callable[[str], T | None],
    *,
    on_retry: Callable[[str], None] | None = None,
    max_attempts: int | None = None,
) -> T:
    """Prompt until *validate* accepts an answer.

    Parameters
    ----------
    read:
        Input source; returning ``None`` cancels the loop.
    message:
        Prompt text passed to *read*.
    validate:
        Maps raw text to a value, or ``None`` to reject it.
    on_retry:
        Called with the rejected text before prompting again.
    max_attempts:
        ``None`` prompts indefinitely.

    Raises
    ------
    ConfigurationAbortedError
        If *read* returns ``None``.
    SelectionExhaustedError
        If *max_attempts* answers were all rejected.
    """
    state = PromptState.PROMPT
    raw = ""
    value: T | None = None
    attempts = 0

    while True:
        if state is PromptState.PROMPT:
            answer = read(message)
            if answer is None:
                raise ConfigurationAbortedError("Configuration cancelled.")
            raw = answer
            attempts += 1
            state = PromptState.VALIDATE
        elif state is PromptState.VALIDATE:
            value = validate(raw)
            state = PromptState.RETRY if value is None else PromptState.ACCEPT
        elif state is PromptState.ACCEPT:
            return value  # type: ignore[return-value]
        else:
            if max_attempts is not None and attempts >= max_attempts:
                raise SelectionExhaustedError(
                    f"No valid answer after {attempts} attempt(s).",
                )
            if on_retry is not None:
                on_retry(raw)
            state = PromptState.PROMPT


# ---------------------------------------------------------------------------
# Answer validators (pure)
# ---------------------------------------------------------------------------

def parse_region_choice(raw: str, catalog: RegionCatalog = DEFAULT_CATALOG) -> str | None:
    """Map a 0-based index typed by the operator to a region code."""
    try:
        index = int(raw.strip())
    except ValueError:
        return None
    if 0 <= index < len(catalog):
        return catalog[index].code
    return None


def parse_profile_name(raw: str) -> str | None:
    """Accept any non-blank profile name."""
    name = raw.strip()
    return name or None


def parse_filename(raw: str) -> str | None:
    """Accept a bare file name that stays inside the chosen directory.

    Blank names, ``.``/``..`` and anything holding a path separator
    (absolute paths included) are rejected.
    """
    name = raw.strip()
    if not name or name in (".", ".."):
        return None
    separators = {"/", os.sep}
    if os.altsep:
        separators.add(os.altsep)
    if any(sep in name for sep in separators):
        return None
    return name


def build_configuration_record(
    region: str,
    profile: str,
    catalog: RegionCatalog = DEFAULT_CATALOG,
) -> ConfigurationRecord:
    """Build the record written by ``perun configure``."""
    return ConfigurationRecord(
        default_profile=profile,
        default_region=region,
        specification_urls=catalog.specification_urls(),
        default_decision_for_mfa=False,
        default_duration_for_mfa=DEFAULT_MFA_DURATION,
        default_verbosity=Verbosity.INFO.value,
    )


# ---------------------------------------------------------------------------
# Wizard
# ---------------------------------------------------------------------------

class ConfigurationWizard:
    """Interactive builder of a :class:`ConfigurationRecord`.

    Parameters
    ----------
    read:
        Input source for every answer.
    store:
        Persistence backend for the finished record.
    reporter:
        Receives progress and error messages.
    catalog:
        Regions offered to the operator.
    max_attempts:
        Per-question attempt bound; ``None`` retries indefinitely.
    """

    def __init__(
        self,
        read: InputSource,
        store: ConfigurationStore,
        reporter: Reporter,
        catalog: RegionCatalog = DEFAULT_CATALOG,
        *,
        max_attempts: int | None = None,
    ) -> None:
        self._read = read
        self._store = store
        self._reporter = reporter
        self._catalog = catalog
        self._max_attempts = max_attempts

    @staticmethod
    def target_path(directory: str | Path, filename: str) -> Path:
        """Join the operator's directory and filename answers."""
        return Path(directory).expanduser() / filename

    def show_regions(self) -> None:
        self._reporter.always("Regions:")
        for index, entry in enumerate(self._catalog):
            self._reporter.always(f"Number {index} region {entry.code}")

    def choose_region(self) -> str:
        region = run_selection(
            self._read,
            "Choose region",
            lambda raw: parse_region_choice(raw, self._catalog),
            on_retry=self._reject("Invalid region", "Try again, invalid region"),
            max_attempts=self._max_attempts,
        )
        self._reporter.always(f"Your region is: {region}")
        return region

    def choose_profile(self) -> str:
        profile = run_selection(
            self._read,
            "Input name of profile",
            parse_profile_name,
            on_retry=self._reject("Invalid profile", "Try again, invalid profile"),
            max_attempts=self._max_attempts,
        )
        self._reporter.always(f"Your profile is: {profile}")
        return profile

    def run(self, target: Path) -> ConfigurationRecord | None:
        """Run the wizard against *target*.

        Returns
        -------
        ConfigurationRecord | None
            The saved record, or ``None`` when *target* already exists
            and nothing was written.
        """
        self._reporter.always(f"File will be created in {target}")
        if self._store.exists(target):
            self._reporter.always("File already exists in this path")
            return None

        self.show_regions()
        region = self.choose_region()
        profile = self.choose_profile()
        record = build_configuration_record(region, profile, self._catalog)
        self._store.save(record, target)
        return record

    def _reject(self, error: str, retry: str) -> Callable[[str], None]:
        def _on_retry(_raw: str) -> None:
            self._reporter.error(error)
            self._reporter.always(retry)

        return _on_retry
