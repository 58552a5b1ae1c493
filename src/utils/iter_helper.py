"""
Partition helpers shared by the batch and chunk levels.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from itertools import islice
from typing import TypeVar

T = TypeVar("T")


def chunked(items: Iterable[T], size: int) -> Iterator[list[T]]:
    """
    Lazily group ``items`` into consecutive lists of at most ``size`` elements.

    Order is preserved and only the last group may be shorter. Empty input
    yields no groups.
    """
    if size <= 0:
        raise ValueError(f"size must be positive, got {size}")
    it = iter(items)
    while group := list(islice(it, size)):
        yield group


def batch_bounds(total: int, size: int) -> list[tuple[int, int]]:
    """Half-open (start, end) index ranges covering ``total`` items in groups of ``size``."""
    if size <= 0:
        raise ValueError(f"size must be positive, got {size}")
    return [(start, min(start + size, total)) for start in range(0, total, size)]
