"""Locale utilities backed by Babel.

Centralizes locale normalization and CLDR plural category lookup. Language
names in a project are free-form labels; Babel is consulted only to check
plural selectors, and an unknown language is never an error.

Python 3.13+.
"""

from __future__ import annotations

import functools
import logging
from typing import TYPE_CHECKING

from typedmessages.enums import PluralType

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "get_babel_locale",
    "normalize_locale",
    "plural_categories",
]

logger = logging.getLogger(__name__)

# CLDR implicit default category, not listed in Babel's PluralRule.tags
_OTHER_CATEGORY = "other"


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 locale code to POSIX format for Babel.

    Example:
        >>> normalize_locale("en-US")
        'en_US'
        >>> normalize_locale("en")  # Already normalized
        'en'
    """
    return locale_code.replace("-", "_")


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Thread-safe via lru_cache internal locking.

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Returns:
        Babel Locale object

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(locale_code))


@functools.lru_cache(maxsize=128)
def plural_categories(
    locale_code: str, plural_type: PluralType = PluralType.CARDINAL
) -> frozenset[str] | None:
    """CLDR plural categories for a language.

    Args:
        locale_code: Language name as configured in the project
        plural_type: Cardinal (plural) or ordinal (selectordinal) rules

    Returns:
        Categories including 'other', or None if Babel does not know the language

    Example:
        >>> sorted(plural_categories("en"))
        ['one', 'other']
        >>> plural_categories("pseudo-lang") is None
        True
    """
    from babel.core import UnknownLocaleError  # noqa: PLC0415

    try:
        locale = get_babel_locale(locale_code)
    except (UnknownLocaleError, ValueError, TypeError) as e:
        logger.debug("No CLDR plural rules for '%s': %s", locale_code, e)
        return None

    rule = locale.ordinal_form if plural_type is PluralType.ORDINAL else locale.plural_form
    return frozenset(rule.tags) | {_OTHER_CATEGORY}
