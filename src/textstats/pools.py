"""
The two worker pools and explicit worker identity.

File tasks and chunk tasks run on separate executors of the same size, so a
file task blocked on its chunks never holds a slot that chunk work needs.
Every pool thread gets a stable id (``file-worker-2``) from the pool
initializer; tasks return it with their results instead of relying on
thread names.
"""

from __future__ import annotations

import itertools
import threading
from concurrent.futures import ThreadPoolExecutor
from types import TracebackType

from core.logging import logger

_local = threading.local()


def current_worker_id() -> str:
    """Id of the pool worker running the caller, or ``"main"`` outside the pools."""
    return getattr(_local, "worker_id", "main")


def _make_initializer(kind: str):
    counter = itertools.count(1)
    lock = threading.Lock()

    def _assign_worker_id() -> None:
        with lock:
            _local.worker_id = f"{kind}-worker-{next(counter)}"

    return _assign_worker_id


def make_executor(kind: str, max_workers: int) -> ThreadPoolExecutor:
    return ThreadPoolExecutor(
        max_workers=max_workers,
        thread_name_prefix=f"{kind}-pool",
        initializer=_make_initializer(kind),
    )


class WorkerPools:
    """
    Owns the file-level and chunk-level executors.

    Use as a context manager; leaving the block shuts both pools down and
    waits for running tasks.
    """

    def __init__(self, *, file_workers: int, chunk_workers: int) -> None:
        if file_workers <= 0 or chunk_workers <= 0:
            raise ValueError("worker counts must be positive")
        self.file_workers = file_workers
        self.chunk_workers = chunk_workers
        self.files = make_executor("file", file_workers)
        self.chunks = make_executor("chunk", chunk_workers)
        logger.debug(
            "Worker pools started",
            extra={"file_workers": file_workers, "chunk_workers": chunk_workers},
        )

    def shutdown(self) -> None:
        self.files.shutdown(wait=True)
        self.chunks.shutdown(wait=True)
        logger.debug("Worker pools stopped")

    def __enter__(self) -> WorkerPools:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.shutdown()
