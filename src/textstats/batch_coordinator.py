"""
Batch coordination: the outer tier of the pipeline.

Files are cut into fixed-size batches. Inside a batch every file is
submitted to the file pool before any is awaited; the coordinator then
collects results as they complete and folds them into the batch
accumulator. Batches run strictly one after another: batch N is fully
collected, merged into the grand total and reported before batch N + 1 is
submitted.
"""

from __future__ import annotations

from collections.abc import Sequence
from concurrent.futures import Executor, Future, as_completed
from pathlib import Path
from typing import Literal

from core.exceptions import TextStatsError
from core.logging import logger
from core.settings import get_settings
from textstats.exceptions import TaskExecutionError
from textstats.file_processor import FileProcessor
from textstats.pools import current_worker_id
from textstats.report import StatsSink
from textstats.stats import FileResult, TextStats
from utils.iter_helper import batch_bounds
from utils.queue_manager import TaskRegistry

FileErrorPolicy = Literal["abort", "skip"]


def plan_batches(files: Sequence[Path], batch_size: int) -> list[Sequence[Path]]:
    """Contiguous, non-overlapping slices of ``files`` in submission order."""
    return [files[start:end] for start, end in batch_bounds(len(files), batch_size)]


class BatchCoordinator:
    def __init__(
        self,
        file_executor: Executor,
        file_processor: FileProcessor,
        sink: StatsSink,
        *,
        batch_size: int | None = None,
        on_file_error: FileErrorPolicy | None = None,
    ) -> None:
        settings = get_settings()
        self.file_executor = file_executor
        self.file_processor = file_processor
        self.sink = sink
        self.batch_size = batch_size if batch_size is not None else settings.STATS_BATCH_SIZE
        if self.batch_size <= 0:
            raise ValueError(f"batch_size must be positive, got {self.batch_size}")
        self.on_file_error: FileErrorPolicy = on_file_error or settings.STATS_ON_FILE_ERROR

    def run(self, files: Sequence[Path]) -> TextStats:
        """
        Process ``files`` batch by batch and return the grand total.

        Every batch summary, and the final summary, is handed to the sink.

        Raises:
            FileReadError | TaskExecutionError: a file failed and the policy is "abort"
        """
        batches = plan_batches(files, self.batch_size)
        total = TextStats(name="All Files")

        self.sink.run_started(total_files=len(files), batch_count=len(batches))
        logger.info(
            "Run started",
            extra={"files": len(files), "batches": len(batches), "batch_size": self.batch_size},
        )

        start = 0
        for batch_number, batch in enumerate(batches, start=1):
            batch_stats = self.process_batch(batch_number, batch, start=start, total_files=len(files))
            total.merge(batch_stats)
            self.sink.batch_summary(batch_number, batch_stats)
            start += len(batch)

        self.sink.final_summary(total)
        logger.info("Run finished", extra={"files": len(files), "words": total.word_count})
        return total

    def process_batch(self, batch_number: int, batch: Sequence[Path], *, start: int, total_files: int) -> TextStats:
        """Run one batch to completion and return its accumulator (file summaries are reported here)."""
        self.sink.batch_started(batch_number, start=start + 1, end=start + len(batch), total=total_files)

        registry = TaskRegistry()
        task_ids = {path: registry.submit(path.name) for path in batch}
        futures: dict[Future[FileResult], Path] = {
            self.file_executor.submit(self._file_task, path, task_ids[path], registry): path for path in batch
        }

        batch_stats = TextStats(name=f"Batch {batch_number}")
        results: dict[Path, FileResult] = {}
        errors: dict[Path, TextStatsError] = {}
        for future in as_completed(futures):
            path = futures[future]
            try:
                result = future.result()
            except TextStatsError as e:
                errors[path] = e
            except Exception as e:
                errors[path] = TaskExecutionError(
                    message=f"Processing failed for {path.name}",
                    details=str(e),
                    context={"path": str(path), "batch": batch_number},
                    original_exception=e,
                )
            else:
                results[path] = result
                batch_stats.merge(result.stats)

        if errors and self.on_file_error == "abort":
            first = next(errors[path] for path in batch if path in errors)
            logger.error(
                "Aborting run after file failure",
                extra={"batch": batch_number, "failed_files": len(errors), "error_code": first.error_code},
            )
            raise first

        self.sink.worker_assignments(batch_number, registry.assignments())
        for path in batch:
            if path in results:
                self.sink.file_summary(results[path])
            else:
                status = registry.get_status(task_id=task_ids[path]) or {}
                logger.warning(
                    "Skipping failed file",
                    extra={"file": path.name, "batch": batch_number, "error_code": errors[path].error_code},
                )
                self.sink.file_failed(path, status.get("worker"), errors[path])

        logger.info(
            "Batch finished",
            extra={"batch": batch_number, "files": len(results), "failed": len(errors)},
        )
        return batch_stats

    def _file_task(self, path: Path, task_id: str, registry: TaskRegistry) -> FileResult:
        worker = current_worker_id()
        registry.mark_processing(task_id=task_id, worker=worker)
        logger.debug("File task started", extra={"file": path.name, "worker": worker})
        try:
            stats = self.file_processor.process(path)
        except Exception as e:
            registry.fail(task_id=task_id, error=str(e))
            raise
        registry.complete(task_id=task_id)
        return FileResult(path=path, worker=worker, stats=stats)

