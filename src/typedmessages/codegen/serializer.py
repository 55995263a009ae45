"""Serialize nested mappings into TypeScript object type / value literals.

Leaves are code fragments produced by the inferencer or the generator
(``string``, ``'a' | 'b'``, ``(values: {...}) => string``) and are inserted
verbatim. Only keys are quoted.

Python 3.13+.
"""

from collections.abc import Mapping

from typedmessages.constants import MAX_DEPTH
from typedmessages.core.depth_guard import DepthGuard

from .encoding import quote_literal

__all__ = ["TypeTree", "serialize_object_to_type"]

type TypeTree = Mapping[str, "str | TypeTree"]


def serialize_object_to_type(value: TypeTree, *, max_depth: int = MAX_DEPTH) -> str:
    """Render a nested mapping as ``{ 'key': value, 'nested': { ... } }``.

    Args:
        value: Mapping of keys to code fragments or nested mappings
        max_depth: Maximum mapping nesting (default: MAX_DEPTH)

    Returns:
        TypeScript object literal text; ``{}`` for an empty mapping

    Raises:
        DepthLimitExceededError: If mappings nest deeper than max_depth

    Example:
        >>> serialize_object_to_type({"name": "string", "user": {"id": "number"}})
        "{ 'name': string, 'user': { 'id': number } }"
    """
    return _serialize(value, DepthGuard(max_depth=max_depth))


def _serialize(value: TypeTree, guard: DepthGuard) -> str:
    with guard:
        entries: list[str] = []
        for key, item in value.items():
            if isinstance(item, Mapping):
                rendered = _serialize(item, guard)
            else:
                rendered = item
            entries.append(f"{quote_literal(key)}: {rendered}")
    if not entries:
        return "{}"
    return "{ " + ", ".join(entries) + " }"
