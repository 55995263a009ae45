"""Diagnostic system for typedmessages errors.

Provides structured error diagnostics with codes, spans and hints.
Inspired by Rust compiler diagnostics and Elm error messages.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan
from .errors import (
    ConfigError,
    FormatterError,
    MessageSyntaxError,
    TranslationFileError,
    TypedMessagesError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "ConfigError",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "ErrorTemplate",
    "FormatterError",
    "MessageSyntaxError",
    "OutputFormat",
    "SourceSpan",
    "TranslationFileError",
    "TypedMessagesError",
]
