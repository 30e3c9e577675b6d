"""Encoded size utilities.

This module provides functions to inspect how many bytes a codec produces.
"""

from __future__ import annotations

from typing import Any

from ..codec.base import Codec, encode


def encoded_size(codec: Codec[Any], value: Any) -> int:
    """Calculate the encoded size of a value in bytes.

    Args:
        codec: Codec to encode with
        value: Value to measure

    Returns:
        Size in bytes

    Raises:
        EncodeError: If the value is outside the codec's domain

    Example:
        >>> encoded_size(list_(uint16), [1, 2, 3])
        7  # 1 byte count + 3 x 2 bytes
    """
    return len(encode(codec, value))


def fixed_size(codec: Codec[Any]) -> int | None:
    """Return the size every value of codec encodes to, if there is one.

    Numeric primitives, booleans and tuples/models made only of them have a
    fixed size; anything with a length prefix, presence byte or multi-byte tag
    does not.

    Returns:
        Size in bytes, or None if the size depends on the value

    Example:
        >>> fixed_size(tuple_(float64, float64))
        16
        >>> fixed_size(string) is None
        True
    """
    return codec.fixed_size
