"""Type aliases for the localization domain.

Provides semantic type aliases used throughout the localization package
and by the code generator.

Python 3.13+. Zero external dependencies.
"""

__all__ = [
    "LanguageName",
    "MessageSource",
    "TranslationKey",
]

type TranslationKey = str
"""Key of a message inside a translation file (e.g., 'hello', 'cart.total')."""

type LanguageName = str
"""Language label as configured (e.g., 'en', 'en-AU', 'pseudo')."""

type MessageSource = str
"""Raw ICU message text as a Python string."""
