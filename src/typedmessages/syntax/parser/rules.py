"""Grammar rules for the ICU message parser.

Every rule takes an immutable Cursor and returns a ParseResult with the
parsed node and the cursor positioned after it. Unlike a resource parser
there is no error recovery: one message is one unit, and any syntax error
raises MessageSyntaxError with a positioned Diagnostic.

Grammar (informal):
    message   := (literal | argument | tag | '#')*
    argument  := '{' name (',' type (',' style | ',' options)?)? '}'
    type      := number | date | time | plural | selectordinal | select
    options   := ('offset:' int)? (selector '{' message '}')+
    tag       := '<' tagname '>' message '</' tagname '>'
"""

from dataclasses import dataclass, field
from typing import NoReturn

from typedmessages.constants import MAX_DEPTH
from typedmessages.core.depth_guard import DepthGuard
from typedmessages.diagnostics import Diagnostic, ErrorTemplate, MessageSyntaxError
from typedmessages.enums import PluralType
from typedmessages.syntax.ast import (
    ArgumentElement,
    DateElement,
    LiteralElement,
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
from typedmessages.syntax.cursor import Cursor, ParseResult
from typedmessages.syntax.parser.primitives import (
    is_tag_name_start,
    parse_exact_selector,
    parse_name,
    parse_quoted_text,
    parse_tag_name,
)

__all__ = [
    "ParseContext",
    "parse_argument",
    "parse_message_elements",
    "parse_tag",
]

_SIMPLE_TYPES: frozenset[str] = frozenset({"number", "date", "time"})
_PLURAL_TYPES: dict[str, PluralType] = {
    "plural": PluralType.CARDINAL,
    "selectordinal": PluralType.ORDINAL,
}
_OFFSET_PREFIX: str = "offset:"
_OTHER: str = "other"


@dataclass(slots=True)
class ParseContext:
    """Per-message parse state: nesting depth tracking.

    Attributes:
        max_nesting_depth: Maximum nesting of placeholders and tags
    """

    max_nesting_depth: int = MAX_DEPTH
    _depth_guard: DepthGuard = field(init=False)

    def __post_init__(self) -> None:
        self._depth_guard = DepthGuard(max_depth=self.max_nesting_depth)

    def nested(self, cursor: Cursor) -> DepthGuard:
        """Enter one nesting level, converting depth overflow into a syntax error."""
        if self._depth_guard.is_exceeded():
            _fail(
                ErrorTemplate.nesting_depth_exceeded(
                    cursor.source, cursor.pos, self._depth_guard.max_depth
                )
            )
        return self._depth_guard


def _fail(diagnostic: Diagnostic) -> NoReturn:
    raise MessageSyntaxError(diagnostic)


def _append_literal(
    elements: list[MessageElement], text: str, start: int, end: int
) -> None:
    """Append text, merging with a directly preceding literal."""
    if elements and LiteralElement.guard(last := elements[-1]):
        merged_start = last.span.start if last.span else start
        elements[-1] = LiteralElement(last.value + text, Span(merged_start, end))
    else:
        elements.append(LiteralElement(text, Span(start, end)))


def _at_tag_boundary(cursor: Cursor) -> bool:
    """True at '<name' or '</name'."""
    if cursor.peek(1) == "/":
        return is_tag_name_start(cursor.peek(2))
    return is_tag_name_start(cursor.peek(1))


def _parse_literal(cursor: Cursor, *, in_plural: bool) -> ParseResult[str]:
    """Consume literal text up to the next syntax character."""
    parts: list[str] = []
    while not cursor.is_eof:
        ch = cursor.current
        if ch == "'":
            quoted = parse_quoted_text(cursor, in_plural=in_plural)
            if quoted is not None:
                parts.append(quoted.value)
                cursor = quoted.cursor
                continue
        elif ch in "{}" or (ch == "#" and in_plural):
            break
        elif ch == "<" and _at_tag_boundary(cursor):
            break
        parts.append(ch)
        cursor = cursor.advance()
    return ParseResult("".join(parts), cursor)


def parse_message_elements(
    cursor: Cursor,
    context: ParseContext,
    *,
    in_plural: bool = False,
    closing_tag: str | None = None,
    in_option: bool = False,
) -> ParseResult[tuple[MessageElement, ...]]:
    """Parse a (sub-)message up to EOF, an option's '}' or a closing tag.

    The terminator is left unconsumed for the caller.

    Args:
        cursor: Current position
        context: Parse context with depth guard
        in_plural: '#' denotes the plural value
        closing_tag: Name of the enclosing open tag, if any
        in_option: Inside a select/plural option body (stops at '}')
    """
    elements: list[MessageElement] = []
    while not cursor.is_eof:
        ch = cursor.current
        if ch == "{":
            argument = parse_argument(cursor, context)
            elements.append(argument.value)
            cursor = argument.cursor
        elif ch == "}":
            if closing_tag is not None:
                _fail(ErrorTemplate.unclosed_tag(cursor.source, cursor.pos, closing_tag))
            if in_option:
                break
            _fail(ErrorTemplate.unmatched_closing_brace(cursor.source, cursor.pos))
        elif ch == "#" and in_plural:
            elements.append(PoundElement(Span(cursor.pos, cursor.pos + 1)))
            cursor = cursor.advance()
        elif ch == "<" and _at_tag_boundary(cursor):
            if cursor.peek(1) == "/":
                if closing_tag is not None:
                    break
                found = parse_tag_name(cursor.advance(2)).value
                _fail(
                    ErrorTemplate.unmatched_closing_tag(cursor.source, cursor.pos, "", found)
                )
            tag = parse_tag(cursor, context, in_plural=in_plural)
            if LiteralElement.guard(tag.value):
                _append_literal(elements, tag.value.value, cursor.pos, tag.cursor.pos)
            else:
                elements.append(tag.value)
            cursor = tag.cursor
        else:
            start = cursor.pos
            literal = _parse_literal(cursor, in_plural=in_plural)
            cursor = literal.cursor
            if literal.value:
                _append_literal(elements, literal.value, start, cursor.pos)

    if cursor.is_eof and closing_tag is not None:
        _fail(ErrorTemplate.unclosed_tag(cursor.source, cursor.pos, closing_tag))
    if cursor.is_eof and in_option:
        _fail(ErrorTemplate.unexpected_eof(cursor.source, cursor.pos, "'}'"))
    return ParseResult(tuple(elements), cursor)


def parse_tag(
    cursor: Cursor, context: ParseContext, *, in_plural: bool
) -> ParseResult[TagElement | LiteralElement]:
    """Parse '<name>children</name>'.

    A self-closing '<name/>' is returned as literal text.
    """
    start = cursor.pos
    name_result = parse_tag_name(cursor.advance())
    name = name_result.value
    cursor = name_result.cursor.skip_whitespace()

    if cursor.startswith("/>"):
        cursor = cursor.advance(2)
        return ParseResult(LiteralElement(f"<{name}/>", Span(start, cursor.pos)), cursor)
    if cursor.is_eof or cursor.current != ">":
        _fail(ErrorTemplate.unclosed_tag(cursor.source, start, name))
    cursor = cursor.advance()

    with context.nested(cursor):
        children = parse_message_elements(
            cursor, context, in_plural=in_plural, closing_tag=name
        )
    cursor = children.cursor

    # At '</' followed by a tag name
    close_pos = cursor.pos
    closing = parse_tag_name(cursor.advance(2))
    if closing.value != name:
        _fail(
            ErrorTemplate.unmatched_closing_tag(cursor.source, close_pos, name, closing.value)
        )
    cursor = closing.cursor.skip_whitespace()
    if cursor.is_eof or cursor.current != ">":
        _fail(ErrorTemplate.unclosed_tag(cursor.source, start, name))
    cursor = cursor.advance()
    return ParseResult(TagElement(name, children.value, Span(start, cursor.pos)), cursor)


def _parse_style(cursor: Cursor) -> ParseResult[str]:
    """Read a raw argument style up to the closing '}' (left unconsumed).

    Nested braces must balance; apostrophe-quoted braces are ignored.
    """
    cursor = cursor.skip_whitespace()
    start = cursor
    depth = 0
    quoted = False
    while not cursor.is_eof:
        ch = cursor.current
        if ch == "'":
            quoted = not quoted
        elif not quoted and ch == "{":
            depth += 1
        elif not quoted and ch == "}":
            if depth == 0:
                return ParseResult(start.slice_to(cursor.pos).rstrip(), cursor)
            depth -= 1
        cursor = cursor.advance()
    if depth > 0:
        _fail(ErrorTemplate.unbalanced_argument_style(cursor.source, start.pos))
    _fail(ErrorTemplate.unexpected_eof(cursor.source, cursor.pos, "'}'"))


def _parse_offset(cursor: Cursor) -> ParseResult[int]:
    """Parse 'offset:N' (cursor at 'offset:')."""
    cursor = cursor.advance(len(_OFFSET_PREFIX)).skip_whitespace()
    start = cursor
    if not cursor.is_eof and cursor.current in "+-":
        cursor = cursor.advance()
    digits_start = cursor.pos
    while not cursor.is_eof and cursor.current.isdigit() and cursor.current.isascii():
        cursor = cursor.advance()
    if cursor.pos == digits_start:
        _fail(ErrorTemplate.invalid_plural_offset(cursor.source, start.pos))
    return ParseResult(int(start.slice_to(cursor.pos)), cursor)


def _parse_options(
    cursor: Cursor,
    context: ParseContext,
    argument: str,
    *,
    is_plural: bool,
) -> ParseResult[tuple[SelectOption, ...]]:
    """Parse 'selector {message}' pairs up to the argument's closing '}' (consumed)."""
    options: list[SelectOption] = []
    seen: set[str] = set()
    argument_start = cursor.pos
    while True:
        cursor = cursor.skip_whitespace()
        if cursor.is_eof:
            _fail(ErrorTemplate.unexpected_eof(cursor.source, cursor.pos, "'}'"))
        if cursor.current == "}":
            break

        option_start = cursor.pos
        if is_plural and cursor.current == "=":
            selector_result = parse_exact_selector(cursor)
            if len(selector_result.value) == 1:
                _fail(ErrorTemplate.expect_option(cursor.source, cursor.pos, argument))
        else:
            selector_result = parse_name(cursor)
            if not selector_result.value:
                _fail(ErrorTemplate.expect_option(cursor.source, cursor.pos, argument))
        selector = selector_result.value
        if selector in seen:
            _fail(
                ErrorTemplate.duplicate_selector(cursor.source, cursor.pos, argument, selector)
            )
        seen.add(selector)

        cursor = selector_result.cursor.skip_whitespace()
        body_open = cursor.expect("{")
        if body_open is None:
            _fail(ErrorTemplate.expect_option(cursor.source, cursor.pos, argument))
        with context.nested(body_open):
            body = parse_message_elements(
                body_open, context, in_plural=is_plural, in_option=True
            )
        cursor = body.cursor.advance()  # '}'
        options.append(SelectOption(selector, body.value, Span(option_start, cursor.pos)))

    if _OTHER not in seen:
        _fail(ErrorTemplate.missing_other_clause(cursor.source, argument_start, argument))
    return ParseResult(tuple(options), cursor.advance())


def parse_argument(cursor: Cursor, context: ParseContext) -> ParseResult[MessageElement]:
    """Parse a '{...}' placeholder; cursor must be on '{'."""
    start = cursor.pos
    with context.nested(cursor):
        return _parse_argument_body(cursor.advance(), context, start)


def _parse_argument_body(
    cursor: Cursor, context: ParseContext, start: int
) -> ParseResult[MessageElement]:
    source = cursor.source
    cursor = cursor.skip_whitespace()
    if cursor.is_eof:
        _fail(ErrorTemplate.unexpected_eof(source, cursor.pos, "argument name"))
    if cursor.current == "}":
        _fail(ErrorTemplate.empty_argument(source, start))

    name_result = parse_name(cursor)
    name = name_result.value
    if not name:
        _fail(ErrorTemplate.malformed_argument(source, cursor.pos))
    cursor = name_result.cursor.skip_whitespace()

    if cursor.is_eof:
        _fail(ErrorTemplate.unexpected_eof(source, cursor.pos, "'}' or ','"))
    if cursor.current == "}":
        cursor = cursor.advance()
        return ParseResult(ArgumentElement(name, Span(start, cursor.pos)), cursor)
    if cursor.current != ",":
        _fail(ErrorTemplate.expect_argument_closing_brace(source, cursor.pos))

    cursor = cursor.advance().skip_whitespace()
    type_start = cursor.pos
    type_result = parse_name(cursor)
    arg_type = type_result.value
    cursor = type_result.cursor.skip_whitespace()

    if arg_type in _SIMPLE_TYPES:
        style: str | None = None
        if cursor.is_eof:
            _fail(ErrorTemplate.unexpected_eof(source, cursor.pos, "'}' or ','"))
        if cursor.current == ",":
            style_result = _parse_style(cursor.advance())
            style = style_result.value or None
            cursor = style_result.cursor
        elif cursor.current != "}":
            _fail(ErrorTemplate.expect_argument_closing_brace(source, cursor.pos))
        cursor = cursor.advance()
        span = Span(start, cursor.pos)
        match arg_type:
            case "number":
                element: MessageElement = NumberElement(name, style, span)
            case "date":
                element = DateElement(name, style, span)
            case _:
                element = TimeElement(name, style, span)
        return ParseResult(element, cursor)

    if arg_type in _PLURAL_TYPES or arg_type == "select":
        if cursor.is_eof:
            _fail(ErrorTemplate.unexpected_eof(source, cursor.pos, "','"))
        if cursor.current != ",":
            _fail(ErrorTemplate.expect_option(source, cursor.pos, name))
        cursor = cursor.advance().skip_whitespace()

        if arg_type == "select":
            options = _parse_options(cursor, context, name, is_plural=False)
            cursor = options.cursor
            return ParseResult(
                SelectElement(name, options.value, Span(start, cursor.pos)), cursor
            )

        offset = 0
        if cursor.startswith(_OFFSET_PREFIX):
            offset_result = _parse_offset(cursor)
            offset = offset_result.value
            cursor = offset_result.cursor
        options = _parse_options(cursor, context, name, is_plural=True)
        cursor = options.cursor
        return ParseResult(
            PluralElement(
                name,
                options.value,
                offset=offset,
                plural_type=_PLURAL_TYPES[arg_type],
                span=Span(start, cursor.pos),
            ),
            cursor,
        )

    _fail(ErrorTemplate.invalid_argument_type(source, type_start, arg_type))
