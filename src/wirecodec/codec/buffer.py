"""Byte-level output buffer and input cursor.

This module provides the two containers threaded through every codec:
Buffer collects encoded bytes, Cursor reads them back with bounds checking.
Variable-length integers use unsigned LEB128 (7 bits per byte, low group first,
high bit set on every byte except the last).
"""

from __future__ import annotations

from ..exceptions import InvalidValue, UnexpectedEndOfInput
from .options import DEFAULT_OPTIONS, DecodeOptions

# 64-bit values need at most ceil(64 / 7) groups
MAX_VARINT_BYTES = 10
MAX_VARINT = (1 << 64) - 1


class Buffer:
    """Growable output byte sequence.

    A Buffer lives for the duration of one encode call. It only grows.

    Example:
        >>> buffer = Buffer()
        >>> buffer.append(b"\\x01\\x02")
        >>> buffer.write_varint(300)
        >>> buffer.to_bytes()
        b'\\x01\\x02\\xac\\x02'
    """

    def __init__(self) -> None:
        """Initialize an empty buffer."""
        self._data = bytearray()

    def append(self, data: bytes) -> None:
        """Append raw bytes.

        Args:
            data: Bytes to append
        """
        self._data += data

    def append_byte(self, value: int) -> None:
        """Append a single byte (0-255)."""
        self._data.append(value)

    def write_varint(self, value: int) -> None:
        """Write an unsigned integer as LEB128.

        Args:
            value: Unsigned integer (0 to 2**64 - 1)

        Raises:
            ValueError: If value is negative or wider than 64 bits
        """
        if value < 0:
            raise ValueError(f"varint requires non-negative value, got {value}")
        if value > MAX_VARINT:
            raise ValueError(f"Value {value} does not fit in a 64-bit varint")

        while value >= 0x80:
            self._data.append((value & 0x7F) | 0x80)
            value >>= 7
        self._data.append(value)

    def __len__(self) -> int:
        return len(self._data)

    def to_bytes(self) -> bytes:
        """Return the bytes written so far."""
        return bytes(self._data)


class Cursor:
    """Bounded read position over an immutable byte sequence.

    Every read advances the position and is checked against the remaining
    length; running out of input raises UnexpectedEndOfInput, never IndexError.

    Example:
        >>> cursor = Cursor(b"\\xac\\x02\\xff")
        >>> cursor.read_varint()
        300
        >>> cursor.remaining()
        1
    """

    def __init__(self, data: bytes, options: DecodeOptions | None = None) -> None:
        """Initialize a cursor at position 0.

        Args:
            data: Bytes to read from
            options: Decode options carried along for length checks
        """
        self._data = memoryview(data)
        self._position = 0
        self._depth = 0
        self.options = options if options is not None else DEFAULT_OPTIONS

    @property
    def position(self) -> int:
        """Current read offset in bytes."""
        return self._position

    @property
    def depth(self) -> int:
        """Number of recursive codecs currently being decoded."""
        return self._depth

    def enter(self, name: str) -> None:
        """Record entry into one level of a recursive codec.

        Args:
            name: Codec name, for the error message

        Raises:
            InvalidValue: If the nesting exceeds options.max_depth
        """
        if self._depth >= self.options.max_depth:
            raise InvalidValue(
                f"{name}: nesting exceeds max_depth={self.options.max_depth}", self._position
            )
        self._depth += 1

    def leave(self) -> None:
        """Record exit from one level of a recursive codec."""
        self._depth -= 1

    def remaining(self) -> int:
        """Return the number of unread bytes."""
        return len(self._data) - self._position

    def read(self, n: int) -> bytes:
        """Read the next n bytes.

        Args:
            n: Number of bytes to read

        Returns:
            Bytes read

        Raises:
            UnexpectedEndOfInput: If fewer than n bytes remain
        """
        end = self._position + n
        if end > len(self._data):
            raise UnexpectedEndOfInput(
                f"Not enough bytes: need {n}, have {self.remaining()}", self._position
            )
        chunk = self._data[self._position : end].tobytes()
        self._position = end
        return chunk

    def read_byte(self) -> int:
        """Read a single byte as an integer 0-255."""
        if self._position >= len(self._data):
            raise UnexpectedEndOfInput("Attempted to read past end of input", self._position)
        value = self._data[self._position]
        self._position += 1
        return value

    def read_varint(self) -> int:
        """Read an unsigned LEB128 integer.

        Raises:
            UnexpectedEndOfInput: If input ends inside the varint
            InvalidValue: If the varint is longer than 10 bytes or exceeds 64 bits
        """
        start = self._position
        result = 0
        shift = 0
        for _ in range(MAX_VARINT_BYTES):
            byte = self.read_byte()
            result |= (byte & 0x7F) << shift
            if not byte & 0x80:
                if result > MAX_VARINT:
                    raise InvalidValue("varint exceeds 64 bits", start)
                return result
            shift += 7
        raise InvalidValue(f"varint longer than {MAX_VARINT_BYTES} bytes", start)

    def read_length(self, unit_size: int = 1) -> int:
        """Read a length or count prefix and check it against the input.

        Args:
            unit_size: Minimum number of bytes each counted unit occupies.
                Zero means units may be empty; the count is then bounded by
                options.max_empty_items instead of the remaining input.

        Returns:
            Decoded length

        Raises:
            InvalidValue: If the length exceeds options.max_length, or
                options.max_empty_items for zero-width units
            UnexpectedEndOfInput: If the payload cannot fit in the remaining input
        """
        start = self._position
        length = self.read_varint()
        max_length = self.options.max_length
        if max_length is not None and length > max_length:
            raise InvalidValue(f"Length {length} exceeds max_length={max_length}", start)
        if unit_size == 0 and length > self.options.max_empty_items:
            raise InvalidValue(
                f"Count {length} of zero-width items exceeds "
                f"max_empty_items={self.options.max_empty_items}",
                start,
            )
        if length * unit_size > self.remaining():
            raise UnexpectedEndOfInput(
                f"Length {length} needs at least {length * unit_size} bytes, "
                f"have {self.remaining()}",
                self._position,
            )
        return length
