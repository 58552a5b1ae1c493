"""Unit tests for textstats.batch_coordinator module."""

from __future__ import annotations

import threading
import time
from collections.abc import Iterator
from pathlib import Path

import pytest

from textstats.batch_coordinator import BatchCoordinator, plan_batches
from textstats.chunk_analyzer import analyze_chunk
from textstats.exceptions import FileReadError, TaskExecutionError
from textstats.file_processor import FileProcessor
from textstats.pools import WorkerPools
from textstats.stats import TextStats
from utils.file_helper import list_text_files


@pytest.fixture
def pools() -> Iterator[WorkerPools]:
    with WorkerPools(file_workers=5, chunk_workers=3) as worker_pools:
        yield worker_pools


@pytest.fixture
def seven_files(make_corpus, make_lines) -> list[Path]:
    directory = make_corpus({f"f{i}.txt": "\n".join(make_lines(40 * (i + 1), i + 1)) + "\n" for i in range(7)})
    return list_text_files(directory)


class StubProcessor:
    """Stands in for FileProcessor: fixed stats per file, optional failures and a hook."""

    def __init__(self, failures: dict[str, Exception] | None = None, hook=None) -> None:
        self.failures = failures or {}
        self.hook = hook

    def process(self, path: Path) -> TextStats:
        if self.hook is not None:
            self.hook(path)
        if path.name in self.failures:
            raise self.failures[path.name]
        return analyze_chunk([path.stem], path.name)


def _paths(count: int) -> list[Path]:
    return [Path(f"file{i:02d}.txt") for i in range(count)]


@pytest.mark.unit
class TestPlanBatches:
    def test_seven_files_in_batches_of_five(self) -> None:
        files = _paths(7)

        assert plan_batches(files, 5) == [files[:5], files[5:]]

    def test_exact_multiple(self) -> None:
        assert [len(b) for b in plan_batches(_paths(10), 5)] == [5, 5]

    def test_no_files(self) -> None:
        assert plan_batches([], 5) == []


@pytest.mark.unit
class TestBatchCoordinator:
    def test_event_order_for_two_batches(self, pools, seven_files, recording_sink) -> None:
        coordinator = BatchCoordinator(
            pools.files, FileProcessor(pools.chunks, chunk_size=25), recording_sink, batch_size=5
        )

        coordinator.run(seven_files)

        assert recording_sink.names() == [
            "run_started",
            "batch_started",
            "worker_assignments",
            *["file_summary"] * 5,
            "batch_summary",
            "batch_started",
            "worker_assignments",
            *["file_summary"] * 2,
            "batch_summary",
            "final_summary",
        ]
        assert recording_sink.payloads("run_started") == [(7, 2)]
        assert recording_sink.payloads("batch_started") == [(1, 1, 5, 7), (2, 6, 7, 7)]

    def test_batch_and_total_accumulators(self, pools, seven_files, recording_sink) -> None:
        coordinator = BatchCoordinator(
            pools.files, FileProcessor(pools.chunks, chunk_size=25), recording_sink, batch_size=5
        )

        total = coordinator.run(seven_files)

        per_file = {p.name: analyze_chunk(p.read_text(encoding="utf-8").splitlines()) for p in seven_files}
        (_, batch1), (_, batch2) = recording_sink.payloads("batch_summary")
        expected1 = TextStats(name="expected")
        for path in seven_files[:5]:
            expected1.merge(per_file[path.name])
        expected2 = TextStats(name="expected")
        for path in seven_files[5:]:
            expected2.merge(per_file[path.name])

        assert batch1 == expected1
        assert batch2 == expected2
        assert batch2.name == "Batch 2"
        assert total == TextStats(name="sum").merge(batch1).merge(batch2)
        assert recording_sink.payloads("final_summary") == [total]
        assert total.name == "All Files"

    def test_file_summaries_follow_submission_order(self, pools, seven_files, recording_sink) -> None:
        coordinator = BatchCoordinator(pools.files, FileProcessor(pools.chunks), recording_sink, batch_size=5)

        coordinator.run(seven_files)

        results = recording_sink.payloads("file_summary")
        assert [r.path for r in results] == seven_files
        assert all(r.stats.name == r.path.name for r in results)

    def test_worker_assignments_name_pool_workers(self, pools, seven_files, recording_sink) -> None:
        coordinator = BatchCoordinator(pools.files, FileProcessor(pools.chunks), recording_sink, batch_size=5)

        coordinator.run(seven_files)

        (n1, first), (n2, second) = recording_sink.payloads("worker_assignments")
        assert (n1, n2) == (1, 2)
        assert [name for name, _ in first] == [p.name for p in seven_files[:5]]
        assert [name for name, _ in second] == [p.name for p in seven_files[5:]]
        assert all(worker.startswith("file-worker-") for _, worker in first + second)
        workers_by_file = {r.path.name: r.worker for r in recording_sink.payloads("file_summary")}
        assert dict(first + second) == workers_by_file

    def test_batches_do_not_overlap(self, pools, recording_sink) -> None:
        timeline: list[tuple[str, str]] = []
        lock = threading.Lock()

        def record(path: Path) -> None:
            with lock:
                timeline.append(("start", path.name))
            time.sleep(0.01)
            with lock:
                timeline.append(("end", path.name))

        files = _paths(12)
        coordinator = BatchCoordinator(pools.files, StubProcessor(hook=record), recording_sink, batch_size=5)

        coordinator.run(files)

        for earlier, later in [(files[:5], files[5:10]), (files[5:10], files[10:])]:
            last_end = max(timeline.index(("end", p.name)) for p in earlier)
            first_start = min(timeline.index(("start", p.name)) for p in later)
            assert last_end < first_start

    def test_all_files_of_a_batch_are_submitted_before_any_is_awaited(self, pools, recording_sink) -> None:
        # Every task blocks until all five are running at once.
        barrier = threading.Barrier(5, timeout=5)
        coordinator = BatchCoordinator(
            pools.files, StubProcessor(hook=lambda path: barrier.wait()), recording_sink, batch_size=5
        )

        total = coordinator.run(_paths(5))

        assert total.line_count == 5

    def test_abort_raises_and_stops_reporting(self, pools, recording_sink) -> None:
        files = _paths(7)
        failure = FileReadError(message="Failed to read file02.txt")
        coordinator = BatchCoordinator(
            pools.files,
            StubProcessor(failures={"file02.txt": failure}),
            recording_sink,
            batch_size=5,
            on_file_error="abort",
        )

        with pytest.raises(FileReadError) as exc_info:
            coordinator.run(files)

        assert exc_info.value is failure
        assert recording_sink.names() == ["run_started", "batch_started"]

    def test_abort_raises_first_failure_in_submission_order(self, pools, recording_sink) -> None:
        second = FileReadError(message="second")
        first = FileReadError(message="first")

        def slow_first(path: Path) -> None:
            if path.name == "file01.txt":
                time.sleep(0.05)

        coordinator = BatchCoordinator(
            pools.files,
            StubProcessor(failures={"file03.txt": second, "file01.txt": first}, hook=slow_first),
            recording_sink,
            batch_size=5,
            on_file_error="abort",
        )

        with pytest.raises(FileReadError) as exc_info:
            coordinator.run(_paths(5))

        assert exc_info.value is first

    def test_unexpected_exception_is_wrapped(self, pools, recording_sink) -> None:
        coordinator = BatchCoordinator(
            pools.files,
            StubProcessor(failures={"file00.txt": RuntimeError("boom")}),
            recording_sink,
            on_file_error="abort",
        )

        with pytest.raises(TaskExecutionError) as exc_info:
            coordinator.run(_paths(2))

        error = exc_info.value
        assert isinstance(error.original_exception, RuntimeError)
        assert error.context == {"path": "file00.txt", "batch": 1}

    def test_skip_reports_failure_and_excludes_file(self, pools, recording_sink) -> None:
        files = _paths(7)
        failure = FileReadError(message="Failed to read file06.txt")
        coordinator = BatchCoordinator(
            pools.files,
            StubProcessor(failures={"file06.txt": failure}),
            recording_sink,
            batch_size=5,
            on_file_error="skip",
        )

        total = coordinator.run(files)

        assert total.line_count == 6
        assert "file06" not in total.frequency
        [(path, worker, error)] = recording_sink.payloads("file_failed")
        assert path == files[6]
        assert worker is not None and worker.startswith("file-worker-")
        assert error is failure
        assert [r.path for r in recording_sink.payloads("file_summary")] == files[:6]
        (_, batch2) = recording_sink.payloads("batch_summary")[1]
        assert batch2.line_count == 1
        assert recording_sink.names()[-1] == "final_summary"

    def test_policy_defaults_from_settings(self, pools, recording_sink, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STATS_ON_FILE_ERROR", "skip")
        monkeypatch.setenv("STATS_BATCH_SIZE", "3")

        coordinator = BatchCoordinator(pools.files, StubProcessor(), recording_sink)

        assert coordinator.on_file_error == "skip"
        assert coordinator.batch_size == 3

    def test_rejects_non_positive_batch_size(self, pools, recording_sink) -> None:
        with pytest.raises(ValueError):
            BatchCoordinator(pools.files, StubProcessor(), recording_sink, batch_size=0)
