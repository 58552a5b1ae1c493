from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

from textstats.stats import TextStats


class WordFrequency(BaseModel):
    word: str = Field(..., description="Normalized token (lower-cased).")
    count: int = Field(..., ge=1, description="Occurrences of the token.")


class StatsSummary(BaseModel):
    """
    Serializable view of one accumulator at report time.

    ``top_words`` is the read-only projection: descending count, ties broken
    by the word in ascending order.
    """

    event: Literal["summary"] = "summary"
    kind: Literal["file", "batch", "total"] = Field(..., description="Scope the accumulator covers.")
    label: str = Field(..., description="File name, 'Batch N' or 'All Files'.")
    batch: int | None = Field(default=None, description="Batch number, for file and batch summaries.")
    worker: str | None = Field(default=None, description="Worker that processed the file (file summaries only).")
    line_count: int = Field(..., ge=0)
    char_count: int = Field(..., ge=0)
    word_count: int = Field(..., ge=0)
    unique_word_count: int = Field(..., ge=0)
    top_words: list[WordFrequency] = Field(default_factory=list)

    @classmethod
    def from_stats(
        cls,
        stats: TextStats,
        *,
        kind: Literal["file", "batch", "total"],
        top_k: int,
        batch: int | None = None,
        worker: str | None = None,
    ) -> StatsSummary:
        return cls(
            kind=kind,
            label=stats.name,
            batch=batch,
            worker=worker,
            line_count=stats.line_count,
            char_count=stats.char_count,
            word_count=stats.word_count,
            unique_word_count=stats.unique_word_count,
            top_words=[WordFrequency(word=w, count=c) for w, c in stats.top_words(top_k)],
        )


class RunStarted(BaseModel):
    event: Literal["run_started"] = "run_started"
    total_files: int = Field(..., ge=0)
    batch_count: int = Field(..., ge=0)


class BatchStarted(BaseModel):
    event: Literal["batch_started"] = "batch_started"
    batch: int = Field(..., ge=1)
    start: int = Field(..., ge=1, description="1-based index of the first file in the batch.")
    end: int = Field(..., ge=1, description="1-based index of the last file in the batch.")
    total: int = Field(..., ge=1)


class WorkerAssignment(BaseModel):
    file: str
    worker: str | None = None


class WorkerAssignments(BaseModel):
    event: Literal["worker_assignments"] = "worker_assignments"
    batch: int = Field(..., ge=1)
    assignments: list[WorkerAssignment] = Field(default_factory=list)


class FileFailure(BaseModel):
    event: Literal["file_failed"] = "file_failed"
    file: str
    worker: str | None = None
    error: dict[str, Any] = Field(default_factory=dict, description="TextStatsError.to_dict() of the failure.")
