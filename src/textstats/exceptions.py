"""
Engine-specific exception classes.

Validation errors (usage, directory, empty directory) stop a run before any
processing. File and task errors are raised from worker threads and surface
at the coordinator awaiting them. All exceptions inherit from the core
TextStatsError hierarchy.
"""

from __future__ import annotations

from typing import Any

from core.exceptions import NotFoundError, ProcessingError, ValidationError


class UsageError(ValidationError):
    """
    Exception raised when the command line is missing or malformed.

    Reported together with the usage text; nothing is processed.
    """

    def __init__(
        self,
        message: str = "Missing directory argument",
        details: str | None = None,
        context: dict[str, Any] | None = None,
        original_exception: Exception | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="USAGE_ERROR",
            details=details,
            context=context,
            original_exception=original_exception,
        )


class DirectoryError(NotFoundError):
    """
    Exception raised when the input path is missing or is not a directory.
    """

    def __init__(
        self,
        message: str = "Directory does not exist",
        details: str | None = None,
        context: dict[str, Any] | None = None,
        original_exception: Exception | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="DIRECTORY_ERROR",
            details=details,
            context=context,
            original_exception=original_exception,
        )


class EmptyDirectoryError(NotFoundError):
    """
    Exception raised when the directory holds no regular files.

    Not a crash: the CLI prints "no files found" and exits cleanly.
    """

    def __init__(
        self,
        message: str = "No files found",
        details: str | None = None,
        context: dict[str, Any] | None = None,
        original_exception: Exception | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="EMPTY_DIRECTORY",
            details=details,
            context=context,
            original_exception=original_exception,
        )


class FileReadError(ProcessingError):
    """
    Exception raised when a file's lines cannot be read.

    This typically indicates:
    - The file disappeared or became unreadable after listing
    - Bytes that do not decode with the configured encoding
    - An I/O failure in the middle of the file

    The whole file's contribution is discarded.
    """

    def __init__(
        self,
        message: str = "Failed to read file",
        details: str | None = None,
        context: dict[str, Any] | None = None,
        original_exception: Exception | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="FILE_READ_ERROR",
            details=details,
            context=context,
            original_exception=original_exception,
        )


class TaskExecutionError(ProcessingError):
    """
    Exception raised when a chunk or file task fails unexpectedly.

    Wraps whatever escaped the worker so the awaiting coordinator can report it.
    """

    def __init__(
        self,
        message: str = "Task execution failed",
        details: str | None = None,
        context: dict[str, Any] | None = None,
        original_exception: Exception | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="TASK_EXECUTION_ERROR",
            details=details,
            context=context,
            original_exception=original_exception,
        )
