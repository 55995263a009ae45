"""Primitive parsing utilities for the ICU message parser.

This module provides low-level parsers for argument names, tag names,
option selectors and ICU apostrophe quoting.
"""

from typedmessages.syntax.cursor import Cursor, ParseResult

__all__ = [
    "is_name_char",
    "is_tag_name_char",
    "is_tag_name_start",
    "parse_exact_selector",
    "parse_name",
    "parse_quoted_text",
    "parse_tag_name",
]

# Characters that may follow an apostrophe to open a quoted literal run.
# '#' only counts inside a plural branch.
_QUOTE_TRIGGERS: str = "{}<>"

_ASCII_DIGITS: str = "0123456789"


def is_name_char(ch: str) -> bool:
    """Argument names and selectors: letters, digits and underscore (any script)."""
    return ch.isalnum() or ch == "_"


def is_tag_name_start(ch: str | None) -> bool:
    """Tag names start with a letter."""
    return ch is not None and ch.isalpha()


def is_tag_name_char(ch: str) -> bool:
    """Tag names continue with letters, digits, '-', '_', '.' or ':'."""
    return ch.isalnum() or ch in "-_.:"


def parse_name(cursor: Cursor) -> ParseResult[str]:
    """Parse an argument name or option selector.

    Returns an empty value (cursor unchanged) when no name character is present;
    callers decide whether that is an error.

    Examples:
        name -> "name"
        user_count -> "user_count"
        0 -> "0"
    """
    start = cursor
    while not cursor.is_eof and is_name_char(cursor.current):
        cursor = cursor.advance()
    return ParseResult(start.slice_to(cursor.pos), cursor)


def parse_exact_selector(cursor: Cursor) -> ParseResult[str]:
    """Parse a plural exact-match selector: '=' followed by digits.

    Returns just "=" when no digits follow; callers reject that.
    """
    start = cursor
    cursor = cursor.advance()  # '='
    while not cursor.is_eof and cursor.current in _ASCII_DIGITS:
        cursor = cursor.advance()
    return ParseResult(start.slice_to(cursor.pos), cursor)


def parse_tag_name(cursor: Cursor) -> ParseResult[str]:
    """Parse a tag name; cursor must be on a tag-name start character."""
    start = cursor
    cursor = cursor.advance()
    while not cursor.is_eof and is_tag_name_char(cursor.current):
        cursor = cursor.advance()
    return ParseResult(start.slice_to(cursor.pos), cursor)


def parse_quoted_text(cursor: Cursor, *, in_plural: bool) -> ParseResult[str] | None:
    """Parse an apostrophe escape starting at a "'" character.

    ICU quoting rules:
        '' -> a single literal apostrophe
        '{ ... ' -> quoted run; syntax characters inside are literal and
                    '' inside the run is an apostrophe. An unterminated
                    run extends to the end of the message.
        '#' opens a run only inside a plural branch.

    Returns:
        ParseResult with the literal text, or None when the apostrophe does
        not start an escape (it is then an ordinary character).

    Example:
        >>> parse_quoted_text(Cursor("'{literal}' rest", 0), in_plural=False).value
        '{literal}'
    """
    following = cursor.peek(1)
    if following == "'":
        return ParseResult("'", cursor.advance(2))
    if following is None or not (
        following in _QUOTE_TRIGGERS or (in_plural and following == "#")
    ):
        return None

    parts: list[str] = [following]
    cursor = cursor.advance(2)
    while not cursor.is_eof:
        ch = cursor.current
        if ch == "'":
            if cursor.peek(1) == "'":
                parts.append("'")
                cursor = cursor.advance(2)
                continue
            return ParseResult("".join(parts), cursor.advance())
        parts.append(ch)
        cursor = cursor.advance()
    return ParseResult("".join(parts), cursor)
