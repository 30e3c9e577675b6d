"""Structural combinators.

These functions build new codecs from existing ones. None of them run any
encode/decode logic at construction time, so they accept a recursive
placeholder as a member (see recursive.py).

Wire layout:
    map_ ........ same as the wrapped codec
    tuple_ ...... member encodings concatenated, no prefix
    list_ ....... varint count + count x element
    maybe ....... presence byte (0 = absent, 1 = present) + value if present
    dict_ ....... varint count + count x (key, value)
    enum_ ....... varint declaration ordinal
"""

from __future__ import annotations

import enum
from typing import Any, Callable, Sequence, TypeVar

from ..exceptions import EncodeError, InvalidValue
from .base import Codec, require_codec
from .buffer import Buffer, Cursor

A = TypeVar("A")
B = TypeVar("B")
T = TypeVar("T")
E = TypeVar("E", bound=enum.Enum)


def map_(
    codec: Codec[B],
    from_a_to_b: Callable[[A], B],
    from_b_to_a: Callable[[B], A],
    name: str | None = None,
) -> Codec[A]:
    """Derive a codec for A from a codec for B and a pair of conversions.

    Encoding applies from_a_to_b then delegates to codec; decoding delegates to
    codec then applies from_b_to_a. The two functions are not checked to be
    inverses of each other: round-trip correctness of a mapped codec is the
    caller's responsibility.

    If from_b_to_a raises ValueError or TypeError the decode fails with
    InvalidValue.

    Args:
        codec: Codec for the wire-side type B
        from_a_to_b: Conversion applied before encoding
        from_b_to_a: Conversion applied after decoding
        name: Optional display name

    Example:
        >>> from wirecodec import float64, map_, tuple_
        >>> point = map_(tuple_(float64, float64), lambda p: (p.x, p.y), lambda t: Point(*t))
    """
    inner = require_codec(codec, "map_")

    def encode_into(value: A, buffer: Buffer) -> None:
        inner.encode_into(from_a_to_b(value), buffer)

    def decode_from(cursor: Cursor) -> A:
        start = cursor.position
        decoded = inner.decode_from(cursor)
        try:
            return from_b_to_a(decoded)
        except (ValueError, TypeError) as e:
            raise InvalidValue(f"{name or inner.name}: conversion failed: {e}", start) from e

    return Codec(
        name or f"map({inner.name})",
        encode_into,
        decode_from,
        min_size=inner.min_size,
        fixed_size=inner.fixed_size,
    )


def tuple_(*codecs: Codec[Any]) -> Codec[tuple[Any, ...]]:
    """Create a fixed-arity product codec.

    Members are encoded back to back with no length prefix. Decoding runs each
    member decoder in order and stops at the first failure.

    Args:
        *codecs: Member codecs, in wire order

    Example:
        >>> from wirecodec import boolean, encode, int32, tuple_
        >>> encode(tuple_(int32, boolean), (7, True))
        b'\\x07\\x00\\x00\\x00\\x01'
    """
    members = tuple(require_codec(c, f"tuple_ member {i}") for i, c in enumerate(codecs))
    arity = len(members)
    name = f"tuple({', '.join(m.name for m in members)})"

    def encode_into(value: Sequence[Any], buffer: Buffer) -> None:
        try:
            count = len(value)
        except TypeError as e:
            raise EncodeError(f"{name}: expected a sequence, got {type(value).__name__}") from e
        if count != arity:
            raise EncodeError(f"{name}: expected {arity} items, got {count}")
        for member, item in zip(members, value):
            member.encode_into(item, buffer)

    def decode_from(cursor: Cursor) -> tuple[Any, ...]:
        items = []
        for member in members:
            items.append(member.decode_from(cursor))
        return tuple(items)

    sizes = [m.fixed_size for m in members]
    fixed_size = None if None in sizes else sum(s for s in sizes if s is not None)
    return Codec(
        name,
        encode_into,
        decode_from,
        min_size=sum(m.min_size for m in members),
        fixed_size=fixed_size,
    )


def list_(codec: Codec[T]) -> Codec[list[T]]:
    """Create a length-prefixed homogeneous list codec.

    Any sized iterable is accepted for encoding; decoding always returns a
    list. Decoding stops at the first failing element and discards the
    elements read so far.

    Args:
        codec: Element codec

    Example:
        >>> from wirecodec import encode, list_, uint8
        >>> encode(list_(uint8), [1, 2, 3])
        b'\\x03\\x01\\x02\\x03'
    """
    element = require_codec(codec, "list_")
    name = f"list({element.name})"

    def encode_into(value: Sequence[T], buffer: Buffer) -> None:
        if isinstance(value, (str, bytes)) or not hasattr(value, "__len__"):
            raise EncodeError(f"{name}: expected a list, got {type(value).__name__}")
        buffer.write_varint(len(value))
        for item in value:
            element.encode_into(item, buffer)

    def decode_from(cursor: Cursor) -> list[T]:
        # element.min_size is read here, not at construction, so a recursive
        # element reports its bound size
        count = cursor.read_length(element.min_size)
        items = []
        for _ in range(count):
            items.append(element.decode_from(cursor))
        return items

    return Codec(name, encode_into, decode_from, min_size=1)


def maybe(codec: Codec[T]) -> Codec[T | None]:
    """Create an optional codec; None means absent.

    Wire format is a presence byte (0 or 1) followed by the value when
    present. Any other presence byte fails with InvalidValue.

    Note that maybe(maybe(x)) cannot distinguish an absent outer value from a
    present-but-absent inner one, since both are None in Python.

    Example:
        >>> from wirecodec import encode, int32, maybe
        >>> encode(maybe(int32), None)
        b'\\x00'
    """
    inner = require_codec(codec, "maybe")
    name = f"maybe({inner.name})"

    def encode_into(value: T | None, buffer: Buffer) -> None:
        if value is None:
            buffer.append_byte(0)
        else:
            buffer.append_byte(1)
            inner.encode_into(value, buffer)

    def decode_from(cursor: Cursor) -> T | None:
        start = cursor.position
        flag = cursor.read_byte()
        if flag == 0:
            return None
        if flag == 1:
            return inner.decode_from(cursor)
        raise InvalidValue(f"{name}: invalid presence byte {flag:#04x}", start)

    return Codec(name, encode_into, decode_from, min_size=1)


def dict_(key_codec: Codec[A], value_codec: Codec[B]) -> Codec[dict[A, B]]:
    """Create a count-prefixed mapping codec.

    Entries are written in the dict's iteration order. A key that occurs twice
    in the input fails with InvalidValue.

    Args:
        key_codec: Codec for keys
        value_codec: Codec for values
    """
    keys = require_codec(key_codec, "dict_ key")
    values = require_codec(value_codec, "dict_ value")
    name = f"dict({keys.name}, {values.name})"

    def encode_into(value: dict[A, B], buffer: Buffer) -> None:
        if not isinstance(value, dict):
            raise EncodeError(f"{name}: expected dict, got {type(value).__name__}")
        buffer.write_varint(len(value))
        for key, item in value.items():
            keys.encode_into(key, buffer)
            values.encode_into(item, buffer)

    def decode_from(cursor: Cursor) -> dict[A, B]:
        count = cursor.read_length(keys.min_size + values.min_size)
        result: dict[A, B] = {}
        for _ in range(count):
            start = cursor.position
            key = keys.decode_from(cursor)
            if key in result:
                raise InvalidValue(f"{name}: duplicate key {key!r}", start)
            result[key] = values.decode_from(cursor)
        return result

    return Codec(name, encode_into, decode_from, min_size=1)


def enum_(enum_type: type[E]) -> Codec[E]:
    """Create a codec for an Enum, encoded as its declaration ordinal.

    The ordinal (0-indexed position in the enum) is written as a varint, so
    reordering members changes the wire format; appending does not.

    Args:
        enum_type: Enum class

    Example:
        >>> class Light(enum.Enum):
        ...     RED = "red"
        ...     GREEN = "green"
        >>> encode(enum_(Light), Light.GREEN)
        b'\\x01'
    """
    members = list(enum_type)
    ordinals = {member: i for i, member in enumerate(members)}
    name = f"enum({enum_type.__name__})"

    def encode_into(value: E, buffer: Buffer) -> None:
        if not isinstance(value, enum_type):
            raise EncodeError(f"{name}: expected {enum_type.__name__}, got {type(value).__name__}")
        buffer.write_varint(ordinals[value])

    def decode_from(cursor: Cursor) -> E:
        start = cursor.position
        ordinal = cursor.read_varint()
        if ordinal >= len(members):
            raise InvalidValue(
                f"{name}: invalid enum ordinal {ordinal} (only {len(members)} values)", start
            )
        return members[ordinal]

    return Codec(name, encode_into, decode_from, min_size=1)
