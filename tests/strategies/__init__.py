"""Hypothesis strategies for typedmessages property-based testing.

- messages: ICU message text, argument names and typed message fragments

Usage:
    from tests.strategies import argument_names, literal_text
    from tests.strategies.messages import typed_messages
"""

from .messages import (
    ARGUMENT_NAME_CHARS,
    SAFE_TEXT_CHARS,
    argument_names,
    literal_text,
    raw_strings,
    select_labels,
    typed_messages,
)

__all__ = [
    "ARGUMENT_NAME_CHARS",
    "SAFE_TEXT_CHARS",
    "argument_names",
    "literal_text",
    "raw_strings",
    "select_labels",
    "typed_messages",
]
