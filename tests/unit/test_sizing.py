"""Unit tests for sizing utilities."""

from __future__ import annotations

import pytest

from wirecodec import (
    EncodeError,
    boolean,
    encoded_size,
    fixed_size,
    float64,
    list_,
    map_,
    maybe,
    string,
    tagged_union,
    tuple_,
    uint16,
    uint32,
)


class TestEncodedSize:
    """Test encoded_size()."""

    def test_list(self) -> None:
        """Test size includes the count prefix."""
        assert encoded_size(list_(uint16), [1, 2, 3]) == 7

    def test_string(self) -> None:
        """Test size counts UTF-8 bytes."""
        assert encoded_size(string, "héllo") == 7

    def test_maybe(self) -> None:
        """Test absent and present sizes."""
        assert encoded_size(maybe(uint32), None) == 1
        assert encoded_size(maybe(uint32), 5) == 5

    def test_invalid_value(self) -> None:
        """Test sizing an unencodable value."""
        with pytest.raises(EncodeError):
            encoded_size(uint16, -1)


class TestFixedSize:
    """Test fixed_size()."""

    def test_primitives(self) -> None:
        """Test fixed-width primitives."""
        assert fixed_size(boolean) == 1
        assert fixed_size(float64) == 8

    def test_composites(self) -> None:
        """Test tuples and maps of fixed-width members."""
        pair = tuple_(float64, float64)

        assert fixed_size(pair) == 16
        assert fixed_size(map_(pair, lambda p: p, lambda p: p)) == 16

    def test_variable(self) -> None:
        """Test codecs whose size depends on the value."""
        assert fixed_size(string) is None
        assert fixed_size(list_(uint16)) is None
        assert fixed_size(maybe(uint16)) is None
        assert fixed_size(tuple_(uint16, string)) is None

    def test_union(self) -> None:
        """Test unions whose variants agree on size."""
        codec = (
            tagged_union(lambda value, a, b: a(value) if value else b(value))
            .variant(0, bool, boolean)
            .variant(1, bool, boolean)
            .build()
        )
        assert fixed_size(codec) == 2
