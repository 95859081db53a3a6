"""Shared pytest fixtures and configuration for the perun test suite.

Guidelines
----------
* No network access and no real terminal interaction in any test.
* Interactive answers are fed through injectable input sources.
* Core tests must be pure — no side effects.
* Filesystem tests use ``tmp_path`` only.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from perun.core.models import ConfigurationRecord


class InputsExhausted(Exception):
    """Raised by :func:`scripted_answers` when no answers remain."""


def scripted_answers(*answers: str | None) -> Callable[[str], str | None]:
    """Return an input source that replays *answers* then fails."""
    remaining = iter(answers)

    def read(message: str) -> str | None:
        try:
            return next(remaining)
        except StopIteration:
            raise InputsExhausted(message) from None

    return read


class RecordingReporter:
    """Reporter that keeps every message for later assertions."""

    def __init__(self) -> None:
        self.messages: list[str] = []
        self.errors: list[str] = []

    def always(self, message: str) -> None:
        self.messages.append(message)

    def error(self, message: str) -> None:
        self.errors.append(message)


class MemoryStore:
    """In-memory configuration store."""

    def __init__(self, existing: set[Path] | None = None) -> None:
        self.existing: set[Path] = set(existing or ())
        self.saved: dict[Path, ConfigurationRecord] = {}

    def exists(self, path: Path) -> bool:
        return path in self.existing or path in self.saved

    def save(self, record: ConfigurationRecord, path: Path) -> None:
        self.saved[path] = record


@pytest.fixture()
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture()
def memory_store() -> MemoryStore:
    return MemoryStore()
