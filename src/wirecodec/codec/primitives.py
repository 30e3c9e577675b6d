"""Primitive codecs.

Fixed-width numbers are little-endian (two's complement for signed integers,
IEEE 754 for floats). Lengths, counts and tags are unsigned LEB128 varints.

Wire layout:
    int8/uint8 ........ 1 byte
    int16/uint16 ...... 2 bytes
    int32/uint32 ...... 4 bytes
    int64/uint64 ...... 8 bytes
    float32 / float64 . 4 / 8 bytes
    boolean ........... 1 byte, 0 or 1
    varint ............ 1-10 bytes (unsigned LEB128)
    zigzag ............ 1-10 bytes (signed, zig-zag mapped LEB128)
    string ............ varint byte length + UTF-8 bytes
    bytes_ ............ varint length + raw bytes
"""

from __future__ import annotations

import struct
from typing import Any

from ..exceptions import EncodeError, InvalidUtf8, InvalidValue
from .base import Codec
from .buffer import MAX_VARINT, Buffer, Cursor


def _fixed_int(name: str, fmt: str, size: int, signed: bool) -> Codec[int]:
    packer = struct.Struct(fmt)
    bits = size * 8
    if signed:
        min_value, max_value = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    else:
        min_value, max_value = 0, (1 << bits) - 1

    def encode_into(value: int, buffer: Buffer) -> None:
        if not isinstance(value, int) or isinstance(value, bool):
            raise EncodeError(f"{name}: expected int, got {type(value).__name__}")
        if value < min_value or value > max_value:
            raise EncodeError(
                f"{name}: value {value} out of bounds [{min_value}, {max_value}]"
            )
        buffer.append(packer.pack(value))

    def decode_from(cursor: Cursor) -> int:
        return packer.unpack(cursor.read(size))[0]

    return Codec(name, encode_into, decode_from, min_size=size, fixed_size=size)


def _fixed_float(name: str, fmt: str, size: int) -> Codec[float]:
    packer = struct.Struct(fmt)

    def encode_into(value: float, buffer: Buffer) -> None:
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            raise EncodeError(f"{name}: expected float, got {type(value).__name__}")
        try:
            buffer.append(packer.pack(value))
        except (struct.error, OverflowError) as e:
            raise EncodeError(f"{name}: cannot encode {value}: {e}") from e

    def decode_from(cursor: Cursor) -> float:
        return packer.unpack(cursor.read(size))[0]

    return Codec(name, encode_into, decode_from, min_size=size, fixed_size=size)


int8 = _fixed_int("int8", "<b", 1, signed=True)
int16 = _fixed_int("int16", "<h", 2, signed=True)
int32 = _fixed_int("int32", "<i", 4, signed=True)
int64 = _fixed_int("int64", "<q", 8, signed=True)
uint8 = _fixed_int("uint8", "<B", 1, signed=False)
uint16 = _fixed_int("uint16", "<H", 2, signed=False)
uint32 = _fixed_int("uint32", "<I", 4, signed=False)
uint64 = _fixed_int("uint64", "<Q", 8, signed=False)

float32 = _fixed_float("float32", "<f", 4)
float64 = _fixed_float("float64", "<d", 8)


def _encode_bool(value: bool, buffer: Buffer) -> None:
    if not isinstance(value, bool):
        raise EncodeError(f"boolean: expected bool, got {type(value).__name__}")
    buffer.append_byte(1 if value else 0)


def _decode_bool(cursor: Cursor) -> bool:
    start = cursor.position
    byte = cursor.read_byte()
    if byte > 1:
        raise InvalidValue(f"boolean: invalid byte {byte:#04x}", start)
    return byte == 1


boolean: Codec[bool] = Codec("boolean", _encode_bool, _decode_bool, min_size=1, fixed_size=1)


def _encode_varint(value: int, buffer: Buffer) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise EncodeError(f"varint: expected int, got {type(value).__name__}")
    if value < 0 or value > MAX_VARINT:
        raise EncodeError(f"varint: value {value} out of bounds [0, {MAX_VARINT}]")
    buffer.write_varint(value)


def _decode_varint(cursor: Cursor) -> int:
    return cursor.read_varint()


varint: Codec[int] = Codec("varint", _encode_varint, _decode_varint, min_size=1)


def _encode_zigzag(value: int, buffer: Buffer) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise EncodeError(f"zigzag: expected int, got {type(value).__name__}")
    if value < -(1 << 63) or value > (1 << 63) - 1:
        raise EncodeError(f"zigzag: value {value} does not fit in 64 bits")
    # 0, -1, 1, -2, ... -> 0, 1, 2, 3, ...
    buffer.write_varint(value * 2 if value >= 0 else -value * 2 - 1)


def _decode_zigzag(cursor: Cursor) -> int:
    raw = cursor.read_varint()
    return raw >> 1 if not raw & 1 else -(raw >> 1) - 1


zigzag: Codec[int] = Codec("zigzag", _encode_zigzag, _decode_zigzag, min_size=1)


def _encode_string(value: str, buffer: Buffer) -> None:
    if not isinstance(value, str):
        raise EncodeError(f"string: expected str, got {type(value).__name__}")
    try:
        payload = value.encode("utf-8")
    except UnicodeEncodeError as e:
        raise EncodeError(f"string: not encodable as UTF-8: {e}") from e
    buffer.write_varint(len(payload))
    buffer.append(payload)


def _decode_string(cursor: Cursor) -> str:
    length = cursor.read_length()
    start = cursor.position
    payload = cursor.read(length)
    try:
        return payload.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidUtf8(f"string: invalid UTF-8 encoding: {e.reason}", start + e.start) from e


string: Codec[str] = Codec("string", _encode_string, _decode_string, min_size=1)


def _encode_bytes(value: Any, buffer: Buffer) -> None:
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise EncodeError(f"bytes: expected bytes, got {type(value).__name__}")
    payload = bytes(value)
    buffer.write_varint(len(payload))
    buffer.append(payload)


def _decode_bytes(cursor: Cursor) -> bytes:
    return cursor.read(cursor.read_length())


bytes_: Codec[bytes] = Codec("bytes", _encode_bytes, _decode_bytes, min_size=1)


def constant(value: Any, name: str | None = None) -> Codec[Any]:
    """Create a zero-byte codec for a single known value.

    Encoding checks the value against the constant; decoding reads nothing.

    Args:
        value: The only value this codec accepts and produces
        name: Optional display name

    Example:
        >>> from wirecodec import constant, encode
        >>> encode(constant("v1"), "v1")
        b''
    """

    def encode_into(candidate: Any, buffer: Buffer) -> None:
        if candidate != value:
            raise EncodeError(f"constant: expected {value!r}, got {candidate!r}")

    def decode_from(cursor: Cursor) -> Any:
        return value

    return Codec(name or f"constant({value!r})", encode_into, decode_from, min_size=0, fixed_size=0)
