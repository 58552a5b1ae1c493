"""
queue_manager.py: Minimal thread-safe task registry.

This is *not* a worker pool. It gives the coordinator a small in-memory
status registry so it can:
  - assign IDs to file tasks as they are submitted,
  - mark them processing (with the worker that picked them up) / done / failed,
  - list which worker handled which file once a batch has finished,
  - and report how many are still pending.
"""

from __future__ import annotations

import time
import uuid
from enum import Enum
from threading import Lock
from typing import Any


class TaskStatus(str, Enum):
    QUEUED = "queued"
    PROCESSING = "processing"
    DONE = "done"
    FAILED = "failed"


class TaskRegistry:
    def __init__(self) -> None:
        # dicts keep insertion order, which is submission order here
        self.results: dict[str, dict[str, Any]] = {}
        self.lock = Lock()

    def submit(self, label: str) -> str:
        """Create a new task ID and mark it as queued."""
        task_id = str(uuid.uuid4())
        now = time.time()
        with self.lock:
            self.results[task_id] = {
                "label": label,
                "status": TaskStatus.QUEUED,
                "worker": None,
                "error": None,
                "created_at": now,
                "updated_at": now,
            }
        return task_id

    def mark_processing(self, *, task_id: str, worker: str) -> None:
        with self.lock:
            if task_id in self.results:
                self.results[task_id]["status"] = TaskStatus.PROCESSING
                self.results[task_id]["worker"] = worker
                self.results[task_id]["updated_at"] = time.time()

    def complete(self, *, task_id: str) -> None:
        with self.lock:
            if task_id in self.results:
                self.results[task_id]["status"] = TaskStatus.DONE
                self.results[task_id]["updated_at"] = time.time()

    def fail(self, *, task_id: str, error: str) -> None:
        with self.lock:
            if task_id in self.results:
                self.results[task_id]["status"] = TaskStatus.FAILED
                self.results[task_id]["error"] = error
                self.results[task_id]["updated_at"] = time.time()

    def get_status(self, *, task_id: str) -> dict[str, Any] | None:
        with self.lock:
            entry = self.results.get(task_id)
            return dict(entry) if entry is not None else None

    def pending(self) -> int:
        """Tasks not yet done or failed."""
        with self.lock:
            return sum(
                1 for entry in self.results.values() if entry["status"] in (TaskStatus.QUEUED, TaskStatus.PROCESSING)
            )

    def assignments(self) -> list[tuple[str, str | None]]:
        """(label, worker) pairs in submission order."""
        with self.lock:
            return [(entry["label"], entry["worker"]) for entry in self.results.values()]
