"""
Pytest configuration and shared fixtures for textstats tests.

This file provides:
- Custom markers
- A factory fixture that writes small text corpora into tmp directories
- A recording sink that captures every report event in order
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest


def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "slow: Slow running tests")


# =============================================================================
# Settings Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def isolate_settings() -> Iterator[None]:
    """Each test sees settings built from its own environment."""
    from core.settings import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# =============================================================================
# Corpus Fixtures
# =============================================================================


@pytest.fixture
def make_corpus(tmp_path: Path) -> Callable[[dict[str, str]], Path]:
    """Factory fixture: write ``{file name: content}`` into a fresh directory and return it."""
    counter = {"n": 0}

    def _create(files: dict[str, str]) -> Path:
        counter["n"] += 1
        directory = tmp_path / f"corpus{counter['n']}"
        directory.mkdir()
        for name, content in files.items():
            (directory / name).write_text(content, encoding="utf-8")
        return directory

    return _create


@pytest.fixture
def sample_lines() -> list[str]:
    """The three-line example: 'Hello world', 'Hello again world', ''."""
    return ["Hello world", "Hello again world", ""]


def numbered_lines(count: int, words_per_line: int = 3) -> list[str]:
    return [" ".join(f"w{(i + j) % 7}" for j in range(words_per_line)) for i in range(count)]


@pytest.fixture
def make_lines() -> Callable[..., list[str]]:
    """Factory fixture producing ``count`` deterministic lines over a 7-word vocabulary."""
    return numbered_lines


# =============================================================================
# Sink Fixtures
# =============================================================================


class RecordingSink:
    """StatsSink that keeps every event as (event name, payload) in call order."""

    def __init__(self) -> None:
        self.events: list[tuple[str, Any]] = []

    def names(self) -> list[str]:
        return [name for name, _ in self.events]

    def payloads(self, name: str) -> list[Any]:
        return [payload for event, payload in self.events if event == name]

    def run_started(self, *, total_files: int, batch_count: int) -> None:
        self.events.append(("run_started", (total_files, batch_count)))

    def batch_started(self, batch_number: int, *, start: int, end: int, total: int) -> None:
        self.events.append(("batch_started", (batch_number, start, end, total)))

    def worker_assignments(self, batch_number: int, assignments: list[tuple[str, str | None]]) -> None:
        self.events.append(("worker_assignments", (batch_number, list(assignments))))

    def file_summary(self, result: Any) -> None:
        self.events.append(("file_summary", result))

    def file_failed(self, path: Path, worker: str | None, error: Any) -> None:
        self.events.append(("file_failed", (path, worker, error)))

    def batch_summary(self, batch_number: int, stats: Any) -> None:
        self.events.append(("batch_summary", (batch_number, stats)))

    def final_summary(self, stats: Any) -> None:
        self.events.append(("final_summary", stats))


@pytest.fixture
def recording_sink() -> RecordingSink:
    return RecordingSink()
