"""
Word tokenization.

A token is a maximal run of Unicode letters, Unicode digits or apostrophes,
taken from the lower-cased line. ``[^\\W_]`` is "word character except
underscore", i.e. exactly the alphanumeric code points.
"""

from __future__ import annotations

import re
from collections.abc import Iterator

WORD_RE = re.compile(r"(?:[^\W_]|')+")


def tokenize(line: str) -> Iterator[str]:
    """Lazily yield the normalized tokens of ``line``. Pure; empty input yields nothing."""
    return (match.group() for match in WORD_RE.finditer(line.lower()))
