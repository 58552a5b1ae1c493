"""
Reporting sinks.

The coordinator hands finished accumulators to a ``StatsSink``; nothing is
reported while a batch is still running. Two sinks are provided: the
human-readable console layout and a JSON-lines stream of pydantic models.
"""

from __future__ import annotations

import sys
from pathlib import Path
from threading import Lock
from typing import TYPE_CHECKING, Protocol, TextIO

from pydantic import BaseModel

from textstats.schemas.summary import (
    BatchStarted,
    FileFailure,
    RunStarted,
    StatsSummary,
    WorkerAssignment,
    WorkerAssignments,
)

if TYPE_CHECKING:
    from core.exceptions import TextStatsError
    from textstats.stats import FileResult, TextStats

BANNER = "=" * 37
RULE = "-" * 37


class StatsSink(Protocol):
    def run_started(self, *, total_files: int, batch_count: int) -> None: ...

    def batch_started(self, batch_number: int, *, start: int, end: int, total: int) -> None: ...

    def worker_assignments(self, batch_number: int, assignments: list[tuple[str, str | None]]) -> None: ...

    def file_summary(self, result: FileResult) -> None: ...

    def file_failed(self, path: Path, worker: str | None, error: TextStatsError) -> None: ...

    def batch_summary(self, batch_number: int, stats: TextStats) -> None: ...

    def final_summary(self, stats: TextStats) -> None: ...


def format_summary(stats: TextStats, label: str, top_k: int = 5) -> str:
    """Render one summary block: the four counts, then the top ``top_k`` words."""
    lines = [
        "",
        f"=== {label} ===",
        f"Line Count: {stats.line_count}",
        f"Character Count: {stats.char_count}",
        f"Word Count: {stats.word_count}",
        f"Unique Word Count: {stats.unique_word_count}",
        "",
        f"Top {top_k} Most Frequent Words:",
    ]
    lines.extend(f"{word:<10} : {count}" for word, count in stats.top_words(top_k))
    lines.extend(["", "-" * 39])
    return "\n".join(lines)


class ConsoleReporter:
    """Human-readable report; each event is written whole under a lock."""

    def __init__(self, stream: TextIO | None = None, *, top_k: int = 5) -> None:
        self.stream = stream if stream is not None else sys.stdout
        self.top_k = top_k
        self._lock = Lock()

    def _write(self, *lines: str) -> None:
        with self._lock:
            self.stream.write("\n".join(lines) + "\n")
            self.stream.flush()

    def run_started(self, *, total_files: int, batch_count: int) -> None:
        self._write(
            "",
            BANNER,
            f"Total files: {total_files}",
            f"Processing in {batch_count} batch(es) in order...",
            BANNER,
        )

    def batch_started(self, batch_number: int, *, start: int, end: int, total: int) -> None:
        self._write(
            "",
            RULE,
            f"BATCH {batch_number} STARTING...",
            f"Processing files {start} to {end} of {total}",
            RULE,
        )

    def worker_assignments(self, batch_number: int, assignments: list[tuple[str, str | None]]) -> None:
        self._write(
            "",
            f"WORKER ASSIGNMENTS (Batch {batch_number}):",
            *(f"Worker {worker or 'n/a':<20} -> File: {name}" for name, worker in assignments),
        )

    def file_summary(self, result: FileResult) -> None:
        self._write(format_summary(result.stats, f"FILE SUMMARY: {result.stats.name}", self.top_k))

    def file_failed(self, path: Path, worker: str | None, error: TextStatsError) -> None:
        self._write(
            "",
            f"=== FILE FAILED: {path.name} ===",
            f"Worker: {worker or 'n/a'}",
            f"Error: [{error.error_code}] {error.message}",
        )

    def batch_summary(self, batch_number: int, stats: TextStats) -> None:
        self._write("", BANNER + format_summary(stats, f"BATCH {batch_number} SUMMARY", self.top_k))

    def final_summary(self, stats: TextStats) -> None:
        self._write("", BANNER + format_summary(stats, "FINAL RESULTS (ALL FILES)", self.top_k))


class JsonLinesReporter:
    """One JSON object per event, for machine consumption."""

    def __init__(self, stream: TextIO | None = None, *, top_k: int = 5) -> None:
        self.stream = stream if stream is not None else sys.stdout
        self.top_k = top_k
        self._lock = Lock()
        self._batch = 0

    def _emit(self, model: BaseModel) -> None:
        with self._lock:
            self.stream.write(model.model_dump_json() + "\n")
            self.stream.flush()

    def run_started(self, *, total_files: int, batch_count: int) -> None:
        self._emit(RunStarted(total_files=total_files, batch_count=batch_count))

    def batch_started(self, batch_number: int, *, start: int, end: int, total: int) -> None:
        self._batch = batch_number
        self._emit(BatchStarted(batch=batch_number, start=start, end=end, total=total))

    def worker_assignments(self, batch_number: int, assignments: list[tuple[str, str | None]]) -> None:
        self._emit(
            WorkerAssignments(
                batch=batch_number,
                assignments=[WorkerAssignment(file=name, worker=worker) for name, worker in assignments],
            )
        )

    def file_summary(self, result: FileResult) -> None:
        self._emit(
            StatsSummary.from_stats(
                result.stats, kind="file", top_k=self.top_k, batch=self._batch, worker=result.worker
            )
        )

    def file_failed(self, path: Path, worker: str | None, error: TextStatsError) -> None:
        self._emit(FileFailure(file=path.name, worker=worker, error=error.to_dict()))

    def batch_summary(self, batch_number: int, stats: TextStats) -> None:
        self._emit(StatsSummary.from_stats(stats, kind="batch", top_k=self.top_k, batch=batch_number))

    def final_summary(self, stats: TextStats) -> None:
        self._emit(StatsSummary.from_stats(stats, kind="total", top_k=self.top_k))
