"""
Per-file processing: split a file into chunks, analyze them on the chunk
pool, fold the chunk results into one file-level accumulator.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from concurrent.futures import Executor, Future, as_completed
from functools import partial
from pathlib import Path

from core.logging import logger
from core.settings import get_settings
from textstats.chunk_analyzer import analyze_chunk
from textstats.exceptions import FileReadError, TaskExecutionError
from textstats.stats import TextStats
from utils.file_helper import read_lines
from utils.iter_helper import chunked

LineReader = Callable[[Path], Iterable[str]]


class FileProcessor:
    """
    Processes one file at a time (many concurrently, one per file task).

    Lines are read lazily and each full chunk is submitted as soon as it is
    read, so analysis overlaps with reading. The file accumulator is owned by
    the thread calling :meth:`process`; chunk workers only return fresh
    results and never touch it.
    """

    def __init__(
        self,
        chunk_executor: Executor,
        *,
        chunk_size: int | None = None,
        reader: LineReader | None = None,
    ) -> None:
        settings = get_settings()
        self.chunk_executor = chunk_executor
        self.chunk_size = chunk_size if chunk_size is not None else settings.STATS_CHUNK_SIZE
        if self.chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {self.chunk_size}")
        self.reader: LineReader = reader or partial(read_lines, encoding=settings.STATS_ENCODING)

    def process(self, path: Path) -> TextStats:
        """
        Return the statistics of the file at ``path``.

        Waits for every chunk before returning. If reading fails or any chunk
        fails, pending chunks are cancelled, finished ones are discarded and
        the error is raised.

        Raises:
            FileReadError: the line reader failed (I/O or decoding)
            TaskExecutionError: a chunk task failed
        """
        futures: list[Future[TextStats]] = []
        try:
            for index, lines in enumerate(chunked(self.reader(path), self.chunk_size)):
                futures.append(self.chunk_executor.submit(analyze_chunk, lines, f"{path.name}#{index}"))
        except (OSError, UnicodeDecodeError) as e:
            self._cancel(futures)
            raise FileReadError(
                message=f"Failed to read {path.name}",
                details=str(e),
                context={"path": str(path), "chunks_submitted": len(futures)},
                original_exception=e,
            ) from e

        logger.debug("Chunks submitted", extra={"file": path.name, "chunks": len(futures)})

        file_stats = TextStats(name=path.name)
        for future in as_completed(futures):
            try:
                chunk_stats = future.result()
            except Exception as e:
                self._cancel(futures)
                raise TaskExecutionError(
                    message=f"Chunk analysis failed for {path.name}",
                    details=str(e),
                    context={"path": str(path)},
                    original_exception=e,
                ) from e
            file_stats.merge(chunk_stats)

        return file_stats

    @staticmethod
    def _cancel(futures: list[Future[TextStats]]) -> None:
        for future in futures:
            future.cancel()
