"""Codec value and top-level encode/decode entry points.

A Codec pairs an encoder and a decoder for one Python type. Codecs are built
once, by composing primitives with combinators, and are then shared freely:
they hold no mutable state, and every encode/decode call threads its own
Buffer or Cursor through the composed functions.
"""

from __future__ import annotations

import logging
import sys
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterator, TypeVar

from ..exceptions import DecodeError, EncodeError, InvalidValue, SchemaError, TrailingBytes
from .buffer import Buffer, Cursor
from .options import DEFAULT_OPTIONS, DecodeOptions

logger = logging.getLogger(__name__)

T = TypeVar("T")

EncodeFn = Callable[[Any, Buffer], None]
DecodeFn = Callable[[Cursor], Any]

# Interpreter frames reserved per nesting level of a recursive codec, and the
# most frames encode()/decode() will add on top of the current limit
FRAMES_PER_LEVEL = 8
MAX_HEADROOM_FRAMES = 20_000

_headroom_lock = threading.Lock()
_headroom_users = 0
_saved_limit = 0


@contextmanager
def _stack_headroom(levels: int) -> Iterator[None]:
    """Raise the recursion limit so `levels` nested values fit on the stack.

    Each nesting level of a recursive codec costs a few interpreter frames,
    so the default limit of 1000 would not hold a value 1000 levels deep.
    The limit is process-wide: concurrent calls share one raised limit and
    the last one out restores the original.
    """
    global _headroom_users, _saved_limit
    extra = min(levels * FRAMES_PER_LEVEL, MAX_HEADROOM_FRAMES)
    with _headroom_lock:
        if _headroom_users == 0:
            _saved_limit = sys.getrecursionlimit()
        _headroom_users += 1
        sys.setrecursionlimit(max(sys.getrecursionlimit(), _saved_limit + extra))
    try:
        yield
    finally:
        with _headroom_lock:
            _headroom_users -= 1
            if _headroom_users == 0:
                sys.setrecursionlimit(_saved_limit)


@dataclass(frozen=True, eq=False)
class Codec(Generic[T]):
    """Paired encode/decode operations for one type.

    Attributes:
        name: Human-readable description, used in repr and error messages
        encode_into: Appends the encoding of a value to a Buffer
        decode_from: Reads one value from a Cursor, raising DecodeError on failure
        min_size: Lower bound on the encoded size in bytes
        fixed_size: Exact encoded size in bytes, or None if it varies by value

    Codecs compare by identity. Use the combinators in this package to build
    them rather than instantiating Codec directly.
    """

    name: str
    encode_into: EncodeFn
    decode_from: DecodeFn
    min_size: int = 0
    fixed_size: int | None = None

    def __repr__(self) -> str:
        return f"<Codec {self.name}>"


def require_codec(candidate: Any, context: str) -> Codec[Any]:
    """Check that a combinator argument is a Codec.

    Raises:
        SchemaError: If candidate is not a Codec
    """
    if not isinstance(candidate, Codec):
        raise SchemaError(f"{context}: expected a Codec, got {type(candidate).__name__}")
    return candidate


def encode(codec: Codec[T], value: T) -> bytes:
    """Encode a value to bytes.

    Args:
        codec: Codec describing the value's wire layout
        value: Value to encode

    Returns:
        Encoded bytes

    Raises:
        EncodeError: If the value is outside the codec's domain, or is cyclic
            or nested too deeply to encode
        SchemaError: If a recursive codec is used before its definition completed

    Example:
        >>> from wirecodec import encode, maybe, int32
        >>> encode(maybe(int32), 42)
        b'\\x01*\\x00\\x00\\x00'
    """
    buffer = Buffer()
    with _stack_headroom(DEFAULT_OPTIONS.max_depth):
        try:
            codec.encode_into(value, buffer)
        except RecursionError as e:
            raise EncodeError(f"{codec.name}: value is cyclic or nested too deeply") from e
    return buffer.to_bytes()


def decode(codec: Codec[T], data: bytes, options: DecodeOptions | None = None) -> T:
    """Decode bytes to a value.

    Failures short-circuit: no partial value is returned. By default the whole
    input must be consumed (see DecodeOptions.allow_trailing).

    Args:
        codec: Codec describing the value's wire layout
        data: Bytes to decode
        options: Decode options (defaults to DecodeOptions())

    Returns:
        Decoded value

    Raises:
        UnexpectedEndOfInput: If the input is truncated
        InvalidUtf8: If a string payload is not valid UTF-8
        InvalidValue: If a byte is outside a closed encoding's domain, or
            recursive codecs nest deeper than options.max_depth
        UnknownTag: If a tagged union's tag matches no variant
        TrailingBytes: If input remains and allow_trailing is False
    """
    cursor = Cursor(data, options)
    try:
        with _stack_headroom(cursor.options.max_depth):
            try:
                value = codec.decode_from(cursor)
            except RecursionError as e:
                raise InvalidValue(f"{codec.name}: input nested too deeply", cursor.position) from e
        if cursor.remaining() and not cursor.options.allow_trailing:
            raise TrailingBytes(
                f"{cursor.remaining()} trailing bytes after {codec.name}", cursor.position
            )
    except DecodeError as e:
        logger.debug("decode of %s failed: %s", codec.name, e)
        raise
    return value
