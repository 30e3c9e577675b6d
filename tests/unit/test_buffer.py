"""Unit tests for Buffer and Cursor."""

from __future__ import annotations

import pytest

from wirecodec import DecodeOptions, InvalidValue, UnexpectedEndOfInput
from wirecodec.codec.buffer import Buffer, Cursor


class TestBuffer:
    """Test Buffer functionality."""

    def test_append(self) -> None:
        """Test appending raw bytes."""
        buffer = Buffer()
        buffer.append(b"\x01\x02")
        buffer.append_byte(3)

        assert len(buffer) == 3
        assert buffer.to_bytes() == b"\x01\x02\x03"

    def test_empty(self) -> None:
        """Test an untouched buffer is empty."""
        assert Buffer().to_bytes() == b""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (0, b"\x00"),
            (1, b"\x01"),
            (127, b"\x7f"),
            (128, b"\x80\x01"),
            (300, b"\xac\x02"),
            (16384, b"\x80\x80\x01"),
            ((1 << 64) - 1, b"\xff" * 9 + b"\x01"),
        ],
    )
    def test_write_varint(self, value: int, expected: bytes) -> None:
        """Test LEB128 encoding of known values."""
        buffer = Buffer()
        buffer.write_varint(value)
        assert buffer.to_bytes() == expected

    def test_write_varint_bounds(self) -> None:
        """Test varint range checking."""
        buffer = Buffer()

        with pytest.raises(ValueError, match="non-negative"):
            buffer.write_varint(-1)

        with pytest.raises(ValueError, match="64-bit"):
            buffer.write_varint(1 << 64)


class TestCursor:
    """Test Cursor functionality."""

    def test_read_advances(self) -> None:
        """Test reads advance the position."""
        cursor = Cursor(b"\x01\x02\x03\x04")

        assert cursor.read(2) == b"\x01\x02"
        assert cursor.position == 2
        assert cursor.remaining() == 2
        assert cursor.read_byte() == 3
        assert cursor.remaining() == 1

    def test_read_past_end(self) -> None:
        """Test reading past the end raises UnexpectedEndOfInput."""
        cursor = Cursor(b"\x01\x02")

        with pytest.raises(UnexpectedEndOfInput, match="need 3, have 2"):
            cursor.read(3)

    def test_read_byte_past_end(self) -> None:
        """Test reading a byte from empty input."""
        with pytest.raises(UnexpectedEndOfInput) as exc_info:
            Cursor(b"").read_byte()
        assert exc_info.value.position == 0

    def test_read_zero_bytes(self) -> None:
        """Test reading nothing at the end of input succeeds."""
        cursor = Cursor(b"")
        assert cursor.read(0) == b""

    def test_read_varint(self) -> None:
        """Test LEB128 decoding."""
        cursor = Cursor(b"\xac\x02\x7f")

        assert cursor.read_varint() == 300
        assert cursor.read_varint() == 127
        assert cursor.remaining() == 0

    def test_read_varint_truncated(self) -> None:
        """Test a varint cut off after a continuation byte."""
        with pytest.raises(UnexpectedEndOfInput):
            Cursor(b"\x80\x80").read_varint()

    def test_read_varint_too_long(self) -> None:
        """Test an 11-byte varint is rejected."""
        with pytest.raises(InvalidValue, match="longer than 10 bytes"):
            Cursor(b"\x80" * 10 + b"\x01").read_varint()

    def test_read_varint_overflow(self) -> None:
        """Test a 10-byte varint above 64 bits is rejected."""
        with pytest.raises(InvalidValue, match="exceeds 64 bits"):
            Cursor(b"\xff" * 9 + b"\x7f").read_varint()

    def test_read_length_exceeds_input(self) -> None:
        """Test a length prefix larger than the remaining input."""
        cursor = Cursor(b"\x05abc")

        with pytest.raises(UnexpectedEndOfInput, match="Length 5"):
            cursor.read_length()

    def test_read_length_unit_size(self) -> None:
        """Test the remaining-input check scales with unit size."""
        with pytest.raises(UnexpectedEndOfInput):
            Cursor(b"\x02\x00\x00\x00").read_length(unit_size=2)

        assert Cursor(b"\x02\x00\x00\x00\x00").read_length(unit_size=2) == 2

    def test_read_length_zero_unit_size(self) -> None:
        """Test unit size 0 skips the remaining-input check."""
        assert Cursor(b"\x64").read_length(unit_size=0) == 100

    def test_read_length_zero_unit_size_bound(self) -> None:
        """Test unit size 0 counts are bounded by max_empty_items."""
        cursor = Cursor(b"\x64", DecodeOptions(max_empty_items=99))

        with pytest.raises(InvalidValue, match="Count 100 of zero-width items"):
            cursor.read_length(unit_size=0)

    def test_read_length_max_length(self) -> None:
        """Test max_length is enforced before reading the payload."""
        cursor = Cursor(b"\x04abcd", DecodeOptions(max_length=3))

        with pytest.raises(InvalidValue, match="exceeds max_length=3"):
            cursor.read_length()


class TestDecodeOptions:
    """Test DecodeOptions validation."""

    def test_defaults(self) -> None:
        """Test default options."""
        options = DecodeOptions()
        assert options.allow_trailing is False
        assert options.max_length is None
        assert options.max_depth == 2000
        assert options.max_empty_items == 65536

    def test_negative_max_length(self) -> None:
        """Test negative max_length is rejected."""
        with pytest.raises(ValueError, match="max_length must be >= 0"):
            DecodeOptions(max_length=-1)

    def test_zero_max_depth(self) -> None:
        """Test max_depth must allow at least one level."""
        with pytest.raises(ValueError, match="max_depth must be >= 1"):
            DecodeOptions(max_depth=0)

    def test_negative_max_empty_items(self) -> None:
        """Test negative max_empty_items is rejected."""
        with pytest.raises(ValueError, match="max_empty_items must be >= 0"):
            DecodeOptions(max_empty_items=-1)


class TestCursorDepth:
    """Test nesting depth tracking on Cursor."""

    def test_enter_leave(self) -> None:
        """Test depth follows enter/leave calls."""
        cursor = Cursor(b"")
        cursor.enter("outer")
        cursor.enter("inner")
        assert cursor.depth == 2

        cursor.leave()
        cursor.leave()
        assert cursor.depth == 0

    def test_max_depth(self) -> None:
        """Test entering past max_depth fails."""
        cursor = Cursor(b"\x00", DecodeOptions(max_depth=2))
        cursor.enter("a")
        cursor.enter("b")

        with pytest.raises(InvalidValue, match="c: nesting exceeds max_depth=2"):
            cursor.enter("c")
        assert cursor.depth == 2
