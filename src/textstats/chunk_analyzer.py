"""
Chunk analysis: the unit of work run on the chunk pool.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

from textstats.stats import TextStats
from textstats.tokenizer import tokenize


def analyze_chunk(lines: Iterable[str], name: str = "chunk") -> TextStats:
    """
    Count lines, characters and words of ``lines`` into a fresh accumulator.

    Characters are code points per line, terminators excluded. Nothing shared
    is touched; the caller merges the returned result.
    """
    frequency: Counter[str] = Counter()
    line_count = 0
    char_count = 0
    for line in lines:
        line_count += 1
        char_count += len(line)
        frequency.update(tokenize(line))

    return TextStats(
        name=name,
        line_count=line_count,
        char_count=char_count,
        word_count=sum(frequency.values()),
        frequency=frequency,
    )
