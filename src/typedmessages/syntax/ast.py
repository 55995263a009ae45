"""ICU MessageFormat AST (Abstract Syntax Tree) node definitions.

One message string parses to a tuple of MessageElement nodes. The element
union is closed: code walking the tree matches exhaustively over it.
Includes type guards as static methods (eliminates circular imports).

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from typing import TypeIs

from typedmessages.enums import PluralType

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Base types
    "Span",
    # Elements
    "LiteralElement",
    "ArgumentElement",
    "NumberElement",
    "DateElement",
    "TimeElement",
    "SelectOption",
    "SelectElement",
    "PluralElement",
    "PoundElement",
    "TagElement",
    # Type aliases
    "MessageElement",
    "Message",
]


@dataclass(frozen=True, slots=True)
class Span:
    """Source position span.

    Attributes:
        start: Starting character offset (inclusive)
        end: Ending character offset (exclusive)

    Example:
        Source: "Hello {name}"
        ArgumentElement span: Span(start=6, end=12)
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        """Validate span invariants."""
        if self.start < 0:
            msg = f"Span start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"Span end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)


# ============================================================================
# ELEMENTS
# ============================================================================


@dataclass(frozen=True, slots=True)
class LiteralElement:
    """Plain text with ICU quoting already resolved.

    Example:
        "It''s {name}" -> LiteralElement("It's "), ArgumentElement("name")
    """

    value: str
    span: Span | None = None

    @staticmethod
    def guard(element: object) -> TypeIs["LiteralElement"]:
        """Type guard for LiteralElement."""
        return isinstance(element, LiteralElement)


@dataclass(frozen=True, slots=True)
class ArgumentElement:
    """Simple argument placeholder: {name}"""

    value: str
    span: Span | None = None

    @staticmethod
    def guard(element: object) -> TypeIs["ArgumentElement"]:
        """Type guard for ArgumentElement."""
        return isinstance(element, ArgumentElement)


@dataclass(frozen=True, slots=True)
class NumberElement:
    """Number placeholder: {n, number} or {n, number, ::currency/EUR}"""

    value: str
    style: str | None = None
    span: Span | None = None

    @staticmethod
    def guard(element: object) -> TypeIs["NumberElement"]:
        """Type guard for NumberElement."""
        return isinstance(element, NumberElement)


@dataclass(frozen=True, slots=True)
class DateElement:
    """Date placeholder: {d, date} or {d, date, short}"""

    value: str
    style: str | None = None
    span: Span | None = None

    @staticmethod
    def guard(element: object) -> TypeIs["DateElement"]:
        """Type guard for DateElement."""
        return isinstance(element, DateElement)


@dataclass(frozen=True, slots=True)
class TimeElement:
    """Time placeholder: {t, time} or {t, time, short}"""

    value: str
    style: str | None = None
    span: Span | None = None

    @staticmethod
    def guard(element: object) -> TypeIs["TimeElement"]:
        """Type guard for TimeElement."""
        return isinstance(element, TimeElement)


@dataclass(frozen=True, slots=True)
class SelectOption:
    """One branch of a select or plural placeholder.

    Attributes:
        selector: Option label ('male', 'other') or plural category ('one', '=0')
        value: Parsed sub-message of the branch
    """

    selector: str
    value: tuple["MessageElement", ...]
    span: Span | None = None


@dataclass(frozen=True, slots=True)
class SelectElement:
    """Select placeholder: {gender, select, male {He} female {She} other {They}}"""

    value: str
    options: tuple[SelectOption, ...]
    span: Span | None = None

    @property
    def selectors(self) -> tuple[str, ...]:
        """Option labels in source order."""
        return tuple(option.selector for option in self.options)

    @staticmethod
    def guard(element: object) -> TypeIs["SelectElement"]:
        """Type guard for SelectElement."""
        return isinstance(element, SelectElement)


@dataclass(frozen=True, slots=True)
class PluralElement:
    """Plural placeholder: {count, plural, offset:1 one {# item} other {# items}}

    Attributes:
        value: Argument name
        options: Branches keyed by plural category or exact match (=N)
        offset: Plural offset (0 when absent)
        plural_type: Cardinal (plural) or ordinal (selectordinal)
    """

    value: str
    options: tuple[SelectOption, ...]
    offset: int = 0
    plural_type: PluralType = PluralType.CARDINAL
    span: Span | None = None

    @property
    def selectors(self) -> tuple[str, ...]:
        """Option selectors in source order."""
        return tuple(option.selector for option in self.options)

    @staticmethod
    def guard(element: object) -> TypeIs["PluralElement"]:
        """Type guard for PluralElement."""
        return isinstance(element, PluralElement)


@dataclass(frozen=True, slots=True)
class PoundElement:
    """'#' inside a plural branch, standing for the (offset) plural value."""

    span: Span | None = None

    @staticmethod
    def guard(element: object) -> TypeIs["PoundElement"]:
        """Type guard for PoundElement."""
        return isinstance(element, PoundElement)


@dataclass(frozen=True, slots=True)
class TagElement:
    """Markup placeholder wrapping child content: <link>click here</link>"""

    value: str
    children: tuple["MessageElement", ...]
    span: Span | None = None

    @staticmethod
    def guard(element: object) -> TypeIs["TagElement"]:
        """Type guard for TagElement."""
        return isinstance(element, TagElement)


# ============================================================================
# TYPE ALIASES
# ============================================================================

type MessageElement = (
    LiteralElement
    | ArgumentElement
    | NumberElement
    | DateElement
    | TimeElement
    | SelectElement
    | PluralElement
    | PoundElement
    | TagElement
)

type Message = tuple[MessageElement, ...]
