"""
The statistics accumulator and its merge algebra.

One ``TextStats`` exists per chunk result, per file, per batch and for the
grand total. ``merge`` is the only mutation: it sums the scalar counters and
adds frequency counts key by key, so merging is associative and commutative
and partial results can be combined in any completion order.
"""

from __future__ import annotations

import heapq
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from threading import Lock
from typing import Any


@dataclass(eq=False)
class TextStats:
    """
    Line/character/word counts plus a word-frequency table.

    ``name`` is a descriptive label (file name, "Batch 2", "All Files"); it
    plays no part in merging or equality.
    """

    name: str
    line_count: int = 0
    char_count: int = 0
    word_count: int = 0
    frequency: Counter[str] = field(default_factory=Counter)
    _lock: Lock = field(default_factory=Lock, init=False, repr=False)

    def merge(self, other: TextStats) -> TextStats:
        """
        Fold ``other`` into this accumulator and return self.

        Serialized per destination, so several workers may merge into the
        same accumulator. ``other`` must not be mutated concurrently.
        """
        if other is self:
            raise ValueError(f"cannot merge {self.name!r} into itself")
        with self._lock:
            self.line_count += other.line_count
            self.char_count += other.char_count
            self.word_count += other.word_count
            self.frequency.update(other.frequency)
        return self

    @property
    def unique_word_count(self) -> int:
        return len(self.frequency)

    def top_words(self, k: int) -> list[tuple[str, int]]:
        """
        The ``k`` most frequent words, highest count first.

        Equal counts are ordered by the word itself, ascending, so the listing
        is the same on every run.
        """
        if k <= 0:
            return []
        return heapq.nsmallest(k, self.frequency.items(), key=lambda item: (-item[1], item[0]))

    def counts(self) -> tuple[int, int, int, dict[str, int]]:
        """The merge-relevant state, for comparisons."""
        return (self.line_count, self.char_count, self.word_count, dict(self.frequency))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TextStats):
            return NotImplemented
        return self.counts() == other.counts()

    def to_dict(self, top_k: int | None = None) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "line_count": self.line_count,
            "char_count": self.char_count,
            "word_count": self.word_count,
            "unique_word_count": self.unique_word_count,
        }
        if top_k is not None:
            data["top_words"] = self.top_words(top_k)
        return data


@dataclass(frozen=True)
class FileResult:
    """A finished file task: its statistics and the worker that produced them."""

    path: Path
    worker: str
    stats: TextStats
