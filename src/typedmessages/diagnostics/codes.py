"""Diagnostic codes and data structures.

Defines error codes, source spans, and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "SourceSpan",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        2000-2999: Generation errors (depth limits, formatter failures)
        3000-3999: Syntax errors (ICU message parser failures)
        4000-4999: Translation file errors (loader)
        5000-5999: Configuration errors
    """

    # Generation errors (2000-2999)
    MAX_DEPTH_EXCEEDED = 2001
    FORMATTER_FAILED = 2002

    # Syntax errors (3000-3999)
    UNEXPECTED_EOF = 3001
    EMPTY_ARGUMENT = 3002
    MALFORMED_ARGUMENT = 3003
    EXPECT_ARGUMENT_CLOSING_BRACE = 3004
    INVALID_ARGUMENT_TYPE = 3005
    UNBALANCED_ARGUMENT_STYLE = 3006
    EXPECT_OPTION = 3007
    MISSING_OTHER_CLAUSE = 3008
    DUPLICATE_SELECTOR = 3009
    INVALID_PLURAL_OFFSET = 3010
    UNMATCHED_CLOSING_BRACE = 3011
    UNCLOSED_TAG = 3012
    UNMATCHED_CLOSING_TAG = 3013
    NESTING_DEPTH_EXCEEDED = 3014
    MESSAGE_TOO_LARGE = 3015

    # Translation file errors (4000-4999)
    TRANSLATION_FILE_UNREADABLE = 4001
    TRANSLATION_FILE_INVALID = 4002
    TRANSLATION_ENTRY_INVALID = 4003

    # Configuration errors (5000-5999)
    CONFIG_NOT_FOUND = 5001
    CONFIG_INVALID = 5002
    UNKNOWN_LANGUAGE = 5003
    EXTENDS_CYCLE = 5004


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Source code location for error reporting.

    Note:
        Python strings measure positions in characters (Unicode code points),
        not bytes.

    Attributes:
        start: Starting character offset (0-indexed)
        end: Ending character offset (exclusive)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    start: int
    end: int
    line: int
    column: int

    def __post_init__(self) -> None:
        """Validate SourceSpan invariants.

        Raises:
            ValueError: If start is negative, end precedes start, or line/column
                are less than 1 (both are 1-indexed).
        """
        if self.start < 0:
            msg = f"SourceSpan.start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"SourceSpan.end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)
        if self.line < 1:
            msg = f"SourceSpan.line must be >= 1 (1-indexed), got {self.line}"
            raise ValueError(msg)
        if self.column < 1:
            msg = f"SourceSpan.column must be >= 1 (1-indexed), got {self.column}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Provides rich error information
    for both humans and tools.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        span: Source location (None for non-syntax errors)
        hint: Suggestion for fixing the error
        file_path: Translation or config file the error belongs to
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    span: SourceSpan | None = None
    hint: str | None = None
    file_path: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Example output:
            error[MISSING_OTHER_CLAUSE]: Argument 'count' has no 'other' option
              --> line 1, column 1
              = help: Add an 'other { ... }' branch

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
