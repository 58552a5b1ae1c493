"""
Core exception classes for the text statistics engine.

This module defines the base exception hierarchy that all engine-specific
exceptions inherit from. These exceptions carry enough context (paths,
worker ids, the wrapped exception) to be logged and reported meaningfully.
"""

from __future__ import annotations

import re
from typing import Any


class TextStatsError(Exception):
    """
    Base exception class for all engine errors.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code for categorization
        details: Additional error details (e.g., original exception message)
        context: Dictionary containing processing context (path, batch, worker)
        original_exception: The original exception that was wrapped, if any
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: str | None = None,
        context: dict[str, Any] | None = None,
        original_exception: Exception | None = None,
    ) -> None:
        """
        Initialize a TextStatsError.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code (defaults to class name in UPPER_SNAKE_CASE)
            details: Additional error details
            context: Processing context dictionary
            original_exception: The original exception that was wrapped
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self._default_error_code()
        self.details = details
        self.context = context or {}
        self.original_exception = original_exception

    def _default_error_code(self) -> str:
        """Generate default error code from class name."""
        # "FileReadError" -> "FILE_READ_ERROR"
        return re.sub(r"(?<!^)(?=[A-Z])", "_", self.__class__.__name__).upper()

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to a dictionary for JSON serialization.

        Returns:
            Dictionary representation of the error
        """
        error_dict: dict[str, Any] = {
            "error_code": self.error_code,
            "message": self.message,
        }

        if self.details:
            error_dict["details"] = self.details

        if self.context:
            error_dict["context"] = self.context

        if self.original_exception:
            error_dict["original_exception"] = {
                "type": type(self.original_exception).__name__,
                "module": type(self.original_exception).__module__,
                "message": str(self.original_exception),
            }

        return error_dict


class ValidationError(TextStatsError):
    """
    Exception raised when user input is invalid.

    Reported before any processing starts.
    """


class NotFoundError(TextStatsError):
    """
    Exception raised when the input to process does not exist or is empty.
    """


class ProcessingError(TextStatsError):
    """
    Exception raised when processing fails unexpectedly.

    Examples: unreadable files, failures inside worker tasks.
    """
