"""Escaping of raw strings embedded in generated TypeScript.

Message keys, option labels and literal message strings are embedded inside
single-quoted TypeScript literals. Keys are opaque: dots and other
characters carry no meaning here.

Python 3.13+. Zero external dependencies.
"""

__all__ = [
    "encode_backslash",
    "encode_line_terminators",
    "encode_within_single_quotes",
    "quote_literal",
]

# Line terminators, written as escapes inside literals
_LINE_TERMINATOR_ESCAPES = str.maketrans(
    {
        "\n": "\\n",
        "\r": "\\r",
        "\u2028": "\\u2028",
        "\u2029": "\\u2029",
    }
)


def encode_within_single_quotes(value: str) -> str:
    """Escape single quotes for embedding between single-quote delimiters.

    Example:
        >>> encode_within_single_quotes("it's")
        "it\\\\'s"
    """
    return value.replace("'", "\\'")


def encode_backslash(value: str) -> str:
    """Escape backslashes so they survive as literal characters.

    Example:
        >>> encode_backslash("a\\\\b")
        'a\\\\\\\\b'
    """
    return value.replace("\\", "\\\\")


def encode_line_terminators(value: str) -> str:
    """Escape line breaks so the literal stays on one line.

    Example:
        >>> encode_line_terminators("a\\nb")
        'a\\\\nb'
    """
    return value.translate(_LINE_TERMINATOR_ESCAPES)


def quote_literal(value: str) -> str:
    """Render value as a TypeScript single-quoted string literal.

    Backslashes are escaped before quotes and line breaks, so decoding the
    literal yields the original string.

    Example:
        >>> quote_literal("Hello")
        "'Hello'"
    """
    escaped = encode_line_terminators(encode_within_single_quotes(encode_backslash(value)))
    return f"'{escaped}'"
