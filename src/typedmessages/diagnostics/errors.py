"""typedmessages exception hierarchy with structured diagnostics.

All exceptions can carry Diagnostic objects for rich error information.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic

__all__ = [
    "ConfigError",
    "FormatterError",
    "MessageSyntaxError",
    "TranslationFileError",
    "TypedMessagesError",
]


class TypedMessagesError(Exception):
    """Base exception for all typedmessages errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize TypedMessagesError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class MessageSyntaxError(TypedMessagesError):
    """Malformed ICU message string.

    Fatal to the translation unit being generated.
    """


class TranslationFileError(TypedMessagesError):
    """Translation file cannot be read or has the wrong shape."""


class ConfigError(TypedMessagesError):
    """Invalid or missing project configuration."""


class FormatterError(TypedMessagesError):
    """External source formatter failed on generated code."""
