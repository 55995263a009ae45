"""Placeholder type inference over ICU message ASTs.

Walks a parsed message and infers, for every placeholder, the TypeScript type
a caller must supply to render it:

    {name}                    -> string
    {n, number}               -> number
    {n, plural, ...}          -> number  (branches are walked for nested placeholders)
    {d, date} / {t, time}     -> Date | number
    {g, select, a {..} ...}   -> 'a' | ... (branches are walked)
    <link>..</link>           -> FormatXMLElementFn<T>  (children are walked)

Conflict Policy:
    Parameter maps are folded last-writer-wins: when a placeholder name is
    seen again, the later type replaces the earlier one. This applies within
    one message (siblings, nested branches) and across locales for one key.
    Every replacement that changes the type is recorded as a ParamConflict
    and logged at DEBUG, so callers can surface it; the type itself is still
    overwritten.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, assert_never

from typedmessages.constants import (
    DATE_TYPE,
    DEFAULT_TYPES_MODULE,
    MAX_DEPTH,
    NUMBER_TYPE,
    STRING_TYPE,
    TAG_TYPE,
)
from typedmessages.core.depth_guard import DepthGuard
from typedmessages.syntax.ast import (
    ArgumentElement,
    DateElement,
    LiteralElement,
    NumberElement,
    PluralElement,
    PoundElement,
    SelectElement,
    TagElement,
    TimeElement,
)

from .encoding import quote_literal

if TYPE_CHECKING:
    from typedmessages.syntax.ast import MessageElement

__all__ = [
    "ICUParams",
    "InferredTypes",
    "ParamConflict",
    "ParamTypeCollector",
    "extract_has_tags",
    "extract_param_types",
    "infer_message_types",
    "tag_type_import",
]

logger = logging.getLogger(__name__)

type ICUParams = dict[str, str]
"""Placeholder name -> TypeScript type expression."""


def tag_type_import(types_module: str = DEFAULT_TYPES_MODULE) -> str:
    """Import statement required by the tag render-callback type."""
    return f"import {{ FormatXMLElementFn }} from {quote_literal(types_module)};"


@dataclass(frozen=True, slots=True)
class ParamConflict:
    """A placeholder whose inferred type was overwritten by a different one."""

    name: str
    discarded: str
    kept: str


@dataclass(frozen=True, slots=True)
class InferredTypes:
    """Inference result for one parsed message."""

    params: Mapping[str, str]
    imports: tuple[str, ...]
    has_tags: bool
    conflicts: tuple[ParamConflict, ...] = ()


class ParamTypeCollector:
    """Last-writer-wins fold of parameter types and import statements.

    Insertion order is preserved: a name keeps the position of its first
    occurrence even when its type is overwritten later.
    """

    __slots__ = ("_imports", "conflicts", "params")

    def __init__(self) -> None:
        self.params: ICUParams = {}
        self.conflicts: list[ParamConflict] = []
        self._imports: dict[str, None] = {}

    @property
    def imports(self) -> tuple[str, ...]:
        """Import statements, deduplicated, in first-seen order."""
        return tuple(self._imports)

    def set(self, name: str, type_expr: str) -> None:
        """Record a type for name, overwriting any earlier one."""
        previous = self.params.get(name)
        if previous is not None and previous != type_expr:
            self.conflicts.append(ParamConflict(name, previous, type_expr))
            logger.debug(
                "Parameter '%s' retyped from %s to %s (last writer wins)",
                name,
                previous,
                type_expr,
            )
        self.params[name] = type_expr

    def merge(self, params: Mapping[str, str]) -> None:
        """Fold another parameter map into this one."""
        for name, type_expr in params.items():
            self.set(name, type_expr)

    def add_imports(self, imports: Iterable[str]) -> None:
        """Add import statements, keeping first-seen order."""
        for statement in imports:
            self._imports.setdefault(statement, None)


class _ParamTypeWalker:
    """Recursive walk over the closed MessageElement union.

    Depth Limiting:
        Includes DepthGuard to prevent stack overflow on programmatically
        constructed deeply nested ASTs.
    """

    __slots__ = ("_depth_guard", "_tag_import", "collector")

    def __init__(self, collector: ParamTypeCollector, *, types_module: str, max_depth: int) -> None:
        self.collector = collector
        self._tag_import = tag_type_import(types_module)
        self._depth_guard = DepthGuard(max_depth=max_depth)

    def walk(self, elements: Iterable[MessageElement]) -> None:
        collector = self.collector
        for element in elements:
            match element:
                case LiteralElement() | PoundElement():
                    pass
                case ArgumentElement(value=name):
                    collector.set(name, STRING_TYPE)
                case NumberElement(value=name):
                    collector.set(name, NUMBER_TYPE)
                case PluralElement(value=name, options=options):
                    collector.set(name, NUMBER_TYPE)
                    for option in options:
                        with self._depth_guard:
                            self.walk(option.value)
                case DateElement(value=name) | TimeElement(value=name):
                    collector.set(name, DATE_TYPE)
                case TagElement(value=name, children=children):
                    collector.set(name, TAG_TYPE)
                    collector.add_imports((self._tag_import,))
                    with self._depth_guard:
                        self.walk(children)
                case SelectElement(value=name, options=options):
                    collector.set(name, " | ".join(quote_literal(o.selector) for o in options))
                    for option in options:
                        with self._depth_guard:
                            self.walk(option.value)
                case _ as unreachable:
                    assert_never(unreachable)


def extract_param_types(
    elements: Iterable[MessageElement],
    *,
    types_module: str = DEFAULT_TYPES_MODULE,
    max_depth: int = MAX_DEPTH,
) -> tuple[ICUParams, tuple[str, ...]]:
    """Infer placeholder types for one parsed message.

    Args:
        elements: Parsed message elements
        types_module: Module the tag callback type is imported from
        max_depth: Maximum nesting depth to walk

    Returns:
        (params, imports): placeholder name -> type expression, and the
        import statements those types need

    Example:
        >>> from typedmessages.syntax import parse_message
        >>> extract_param_types(parse_message("Hi {name}, {n, number} new"))
        ({'name': 'string', 'n': 'number'}, ())
    """
    collector = ParamTypeCollector()
    _ParamTypeWalker(collector, types_module=types_module, max_depth=max_depth).walk(elements)
    return collector.params, collector.imports


def extract_has_tags(elements: Iterable[MessageElement], *, max_depth: int = MAX_DEPTH) -> bool:
    """Check whether any element at any depth is a tag.

    Select and plural branches and tag children are all searched.

    Example:
        >>> from typedmessages.syntax import parse_message
        >>> extract_has_tags(parse_message("{g, select, a {<b>x</b>} other {y}}"))
        True
    """
    return _has_tags(elements, DepthGuard(max_depth=max_depth))


def _has_tags(elements: Iterable[MessageElement], guard: DepthGuard) -> bool:
    for element in elements:
        match element:
            case TagElement():
                return True
            case SelectElement(options=options) | PluralElement(options=options):
                with guard:
                    if any(_has_tags(option.value, guard) for option in options):
                        return True
            case (
                LiteralElement()
                | PoundElement()
                | ArgumentElement()
                | NumberElement()
                | DateElement()
                | TimeElement()
            ):
                pass
            case _ as unreachable:
                assert_never(unreachable)
    return False


def infer_message_types(
    elements: Iterable[MessageElement],
    *,
    types_module: str = DEFAULT_TYPES_MODULE,
    max_depth: int = MAX_DEPTH,
) -> InferredTypes:
    """Full inference for one parsed message: params, imports, markup flag."""
    elements = tuple(elements)
    collector = ParamTypeCollector()
    _ParamTypeWalker(collector, types_module=types_module, max_depth=max_depth).walk(elements)
    return InferredTypes(
        params=collector.params,
        imports=collector.imports,
        has_tags=extract_has_tags(elements, max_depth=max_depth),
        conflicts=tuple(collector.conflicts),
    )
