"""Tests for nested mapping -> TypeScript object type serialization."""

from __future__ import annotations

import pytest

from typedmessages.codegen.serializer import serialize_object_to_type
from typedmessages.core.depth_guard import DepthLimitExceededError


class TestSerializeObjectToType:
    """Test serialize_object_to_type()."""

    def test_empty_mapping(self) -> None:
        """An empty mapping is '{}'."""
        assert serialize_object_to_type({}) == "{}"

    def test_flat_mapping(self) -> None:
        """Keys are quoted, leaves inserted verbatim, order kept."""
        assert serialize_object_to_type({"name": "string", "n": "number"}) == (
            "{ 'name': string, 'n': number }"
        )

    def test_nested_mapping(self) -> None:
        """Nested mappings recurse."""
        assert serialize_object_to_type({"user": {"id": "number"}}) == (
            "{ 'user': { 'id': number } }"
        )

    def test_leaves_are_not_escaped(self) -> None:
        """Leaf code fragments keep their own quotes."""
        assert serialize_object_to_type({"g": "'a' | 'b'"}) == "{ 'g': 'a' | 'b' }"

    def test_keys_are_escaped(self) -> None:
        """Keys with quotes and backslashes are escaped."""
        assert serialize_object_to_type({"it's\\": "string"}) == "{ 'it\\'s\\\\': string }"

    def test_depth_limit(self) -> None:
        """Mappings nested beyond max_depth raise."""
        value: dict[str, object] = {"leaf": "string"}
        for _ in range(10):
            value = {"nested": value}

        with pytest.raises(DepthLimitExceededError):
            serialize_object_to_type(value, max_depth=5)  # type: ignore[arg-type]
