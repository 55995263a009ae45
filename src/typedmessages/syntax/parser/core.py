"""Core ICU MessageFormat parser implementation.

This module provides the MessageParser class that turns a single message
string into the element tuple defined in :mod:`typedmessages.syntax.ast`.

Architecture:
    The parser uses an immutable cursor pattern
    (:class:`~typedmessages.syntax.cursor.Cursor`) to traverse source text.
    Grammar rules live in :mod:`~typedmessages.syntax.parser.rules` and
    return :class:`~typedmessages.syntax.cursor.ParseResult` values.

Security:
    Includes configurable input size and nesting depth limits.
"""

from typedmessages.constants import MAX_DEPTH, MAX_MESSAGE_SIZE
from typedmessages.diagnostics import ErrorTemplate, MessageSyntaxError
from typedmessages.syntax.ast import Message
from typedmessages.syntax.cursor import Cursor
from typedmessages.syntax.parser.rules import ParseContext, parse_message_elements

__all__ = ["MessageParser"]


class MessageParser:
    """ICU MessageFormat parser using immutable cursor pattern.

    Design:
    - One message in, one element tuple out; no partial results
    - Every syntax error raises MessageSyntaxError with line:column

    Attributes:
        max_message_size: Maximum allowed message length in characters
        max_nesting_depth: Maximum allowed placeholder/tag nesting depth
    """

    __slots__ = ("_max_message_size", "_max_nesting_depth")

    def __init__(
        self,
        *,
        max_message_size: int | None = None,
        max_nesting_depth: int | None = None,
    ) -> None:
        """Initialize parser with optional size and nesting depth limits.

        Args:
            max_message_size: Maximum message length (default: 1 MB).
                              Set to 0 to disable the limit.
            max_nesting_depth: Maximum nesting depth (default: 100).
        """
        self._max_message_size = (
            max_message_size if max_message_size is not None else MAX_MESSAGE_SIZE
        )
        self._max_nesting_depth = (
            max_nesting_depth if max_nesting_depth is not None else MAX_DEPTH
        )

    @property
    def max_message_size(self) -> int:
        """Maximum allowed message length."""
        return self._max_message_size

    @property
    def max_nesting_depth(self) -> int:
        """Maximum allowed placeholder/tag nesting depth."""
        return self._max_nesting_depth

    def parse(self, source: str) -> Message:
        """Parse one ICU message string.

        Args:
            source: Message text, e.g. "Hello {name}, you have {count, plural, one {# item} other {# items}}"

        Returns:
            Tuple of MessageElement nodes

        Raises:
            MessageSyntaxError: If the message is malformed or exceeds limits

        Example:
            >>> parser = MessageParser()
            >>> parser.parse("Hello {name}")
            (LiteralElement(value='Hello ', ...), ArgumentElement(value='name', ...))
        """
        if self._max_message_size and len(source) > self._max_message_size:
            raise MessageSyntaxError(
                ErrorTemplate.message_too_large(len(source), self._max_message_size)
            )

        context = ParseContext(max_nesting_depth=self._max_nesting_depth)
        result = parse_message_elements(Cursor(source, 0), context)
        return result.value
