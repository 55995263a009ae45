"""Enumerations for typedmessages type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class PluralType(StrEnum):
    """Kind of plural argument.

    StrEnum provides automatic string conversion: str(PluralType.CARDINAL) == "cardinal"
    """

    CARDINAL = "cardinal"
    """Cardinal plural: {count, plural, one {# item} other {# items}}"""

    ORDINAL = "ordinal"
    """Ordinal plural: {place, selectordinal, one {#st} other {#th}}"""


class FallbackMode(StrEnum):
    """How missing messages are filled in when a translation unit is loaded."""

    NONE = "none"
    """Each language keeps only its own messages."""

    VALID = "valid"
    """Missing messages are taken from the language's extends chain."""

    ALL = "all"
    """Like VALID, then finally from the dev language."""


class TranslationFileKind(StrEnum):
    """Classification of a path inside a watched project."""

    DEV = "dev"
    """Authoring-locale file: <dir>.vocab/translations.json"""

    ALT = "alt"
    """Derived-locale file: <dir>.vocab/<language>.translations.json"""

    OTHER = "other"
    """Anything else (no regeneration)."""


__all__ = [
    "FallbackMode",
    "PluralType",
    "TranslationFileKind",
]
