"""Unit tests for textstats.tokenizer module."""

from __future__ import annotations

import pytest

from textstats.tokenizer import tokenize


@pytest.mark.unit
class TestTokenize:
    def test_lowercases_and_splits_on_punctuation(self) -> None:
        assert list(tokenize("Hello, World! Hello again.")) == ["hello", "world", "hello", "again"]

    def test_apostrophes_stay_inside_tokens(self) -> None:
        assert list(tokenize("Don't stop the rock'n'roll")) == ["don't", "stop", "the", "rock'n'roll"]

    def test_digits_are_tokens(self) -> None:
        assert list(tokenize("Room 101, floor 3b")) == ["room", "101", "floor", "3b"]

    def test_unicode_letters_and_digits(self) -> None:
        line = "Cr\u00e8me br\u00fbl\u00e9e f\u00fcr \u00c4rzte \u0663"

        assert list(tokenize(line)) == ["cr\u00e8me", "br\u00fbl\u00e9e", "f\u00fcr", "\u00e4rzte", "\u0663"]

    def test_underscore_and_hyphen_separate_tokens(self) -> None:
        assert list(tokenize("snake_case well-known")) == ["snake", "case", "well", "known"]

    @pytest.mark.parametrize("line", ["", "   ", "--- ... !!!"])
    def test_no_tokens(self, line: str) -> None:
        assert list(tokenize(line)) == []

    def test_is_lazy_and_reinvocable(self) -> None:
        line = "one two three"

        first = tokenize(line)
        assert next(first) == "one"

        assert list(tokenize(line)) == ["one", "two", "three"]
        assert list(tokenize(line)) == list(tokenize(line))
