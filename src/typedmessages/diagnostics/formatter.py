"""Diagnostic formatting service.

Centralizes diagnostic output formatting with configurable options.
Python 3.13+. Zero external dependencies.
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from .codes import Diagnostic

__all__ = [
    "DiagnosticFormatter",
    "OutputFormat",
]


class OutputFormat(StrEnum):
    """Output format options for diagnostic formatting."""

    RUST = "rust"  # Rust compiler-style output (default)
    SIMPLE = "simple"  # Single-line format
    JSON = "json"  # JSON format for tooling integration


def _escape_control_chars(text: str) -> str:
    """Escape control characters so diagnostics cannot inject terminal sequences."""
    return "".join(
        ch if ch in "\n\t" or ch.isprintable() else repr(ch)[1:-1] for ch in text
    )


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Diagnostic formatting service.

    Example:
        >>> formatter = DiagnosticFormatter()
        >>> diagnostic = ErrorTemplate.missing_other_clause("{count, plural}", 0, "count")
        >>> print(formatter.format(diagnostic))
        error[MISSING_OTHER_CLAUSE]: Argument 'count' has no 'other' option
          --> line 1, column 1
          = help: Add an 'other { ... }' branch

        >>> formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        >>> print(formatter.format(diagnostic))
        MISSING_OTHER_CLAUSE: Argument 'count' has no 'other' option
    """

    output_format: OutputFormat = OutputFormat.RUST

    def format(self, diagnostic: Diagnostic) -> str:
        """Format a single diagnostic.

        Args:
            diagnostic: Diagnostic to format

        Returns:
            Formatted diagnostic string
        """
        match self.output_format:
            case OutputFormat.RUST:
                return self._format_rust(diagnostic)
            case OutputFormat.SIMPLE:
                return self._format_simple(diagnostic)
            case OutputFormat.JSON:
                return self._format_json(diagnostic)

    def format_all(self, diagnostics: Iterable[Diagnostic]) -> str:
        """Format multiple diagnostics separated by blank lines."""
        return "\n\n".join(self.format(d) for d in diagnostics)

    def _format_rust(self, diagnostic: Diagnostic) -> str:
        lines = [
            f"{diagnostic.severity}[{diagnostic.code.name}]: "
            f"{_escape_control_chars(diagnostic.message)}"
        ]
        if diagnostic.span is not None:
            location = f"line {diagnostic.span.line}, column {diagnostic.span.column}"
            if diagnostic.file_path:
                location = f"{diagnostic.file_path}, {location}"
            lines.append(f"  --> {location}")
        elif diagnostic.file_path:
            lines.append(f"  --> {diagnostic.file_path}")
        if diagnostic.hint:
            lines.append(f"  = help: {_escape_control_chars(diagnostic.hint)}")
        return "\n".join(lines)

    def _format_simple(self, diagnostic: Diagnostic) -> str:
        return f"{diagnostic.code.name}: {_escape_control_chars(diagnostic.message)}"

    def _format_json(self, diagnostic: Diagnostic) -> str:
        payload: dict[str, object] = {
            "code": diagnostic.code.name,
            "message": diagnostic.message,
            "severity": diagnostic.severity,
        }
        if diagnostic.span is not None:
            payload["line"] = diagnostic.span.line
            payload["column"] = diagnostic.span.column
        if diagnostic.hint:
            payload["hint"] = diagnostic.hint
        if diagnostic.file_path:
            payload["file"] = diagnostic.file_path
        return json.dumps(payload, ensure_ascii=False)
