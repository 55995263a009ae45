"""ICU MessageFormat syntax package.

Provides the parser and AST definitions for single message strings.
Separate from codegen so tooling can inspect messages without generating code.

Python 3.13+.
"""

from .ast import (
    ArgumentElement,
    DateElement,
    LiteralElement,
    Message,
    MessageElement,
    NumberElement,
    PluralElement,
    PoundElement,
    SelectElement,
    SelectOption,
    Span,
    TagElement,
    TimeElement,
)
from .cursor import Cursor, ParseResult
from .parser import MessageParser

__all__ = [
    "ArgumentElement",
    "Cursor",
    "DateElement",
    "LiteralElement",
    "Message",
    "MessageElement",
    "MessageParser",
    "NumberElement",
    "ParseResult",
    "PluralElement",
    "PoundElement",
    "SelectElement",
    "SelectOption",
    "Span",
    "TagElement",
    "TimeElement",
    "parse_message",
]


def parse_message(source: str) -> Message:
    """Parse an ICU message string into AST elements.

    Convenience function for MessageParser.parse().

    Args:
        source: ICU message text

    Returns:
        Tuple of message elements

    Raises:
        MessageSyntaxError: If the message is malformed

    Example:
        >>> from typedmessages.syntax import parse_message
        >>> parse_message("Hello {name}")[1].value
        'name'
    """
    parser = MessageParser()
    return parser.parse(source)
