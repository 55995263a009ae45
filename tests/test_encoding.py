"""Tests for single-quoted literal escaping."""

from __future__ import annotations

import re

import pytest
from hypothesis import given

from typedmessages.codegen.encoding import (
    encode_backslash,
    encode_within_single_quotes,
    quote_literal,
)
from tests.helpers.generated_code import decode_single_quoted
from tests.strategies import raw_strings


class TestEncoders:
    """Test the individual escaping steps."""

    def test_single_quote(self) -> None:
        """Single quotes gain a backslash."""
        assert encode_within_single_quotes("it's") == "it\\'s"

    def test_backslash(self) -> None:
        """Backslashes are doubled."""
        assert encode_backslash("a\\b") == "a\\\\b"

    def test_quote_literal_orders_escapes(self) -> None:
        """Backslashes are escaped before quotes."""
        assert quote_literal("\\'") == "'\\\\\\''"

    def test_dots_are_opaque(self) -> None:
        """Dots in keys pass through untouched."""
        assert quote_literal("cart.total") == "'cart.total'"

    def test_no_unescaped_quote_inside(self) -> None:
        """Every inner quote is preceded by an odd run of backslashes."""
        inner = quote_literal("a'b''c\\'")[1:-1]

        for match in re.finditer("'", inner):
            run = len(inner[: match.start()]) - len(inner[: match.start()].rstrip("\\"))
            assert run % 2 == 1

    @pytest.mark.parametrize(
        ("raw", "escaped"),
        [
            ("a\nb", "'a\\nb'"),
            ("a\rb", "'a\\rb'"),
            ("a\u2028b", "'a\\u2028b'"),
            ("a\u2029b", "'a\\u2029b'"),
        ],
    )
    def test_line_terminators_are_escaped(self, raw: str, escaped: str) -> None:
        """Line breaks become escapes, so the literal stays on one line."""
        assert quote_literal(raw) == escaped

    def test_backslash_before_n_is_not_a_newline(self) -> None:
        """A literal backslash followed by n stays distinct from a line break."""
        assert quote_literal("\\n") == "'\\\\n'"
        assert quote_literal("\\n") != quote_literal("\n")


class TestRoundTrip:
    """Test that decoding the literal yields the original string."""

    @given(raw_strings())
    def test_quote_literal_round_trip(self, value: str) -> None:
        """decode(quote_literal(v)) == v for any string."""
        assert decode_single_quoted(quote_literal(value)) == value
