"""Codec combinator engine for wirecodec.

This module provides the Codec value, the primitive codecs, the structural
combinators, recursive codecs and the tagged-union builder.
"""

from __future__ import annotations

from .base import Codec, decode, encode
from .buffer import Buffer, Cursor
from .combinators import dict_, enum_, list_, map_, maybe, tuple_
from .options import DecodeOptions
from .primitives import (
    boolean,
    bytes_,
    constant,
    float32,
    float64,
    int8,
    int16,
    int32,
    int64,
    string,
    uint8,
    uint16,
    uint32,
    uint64,
    varint,
    zigzag,
)
from .recursive import recursive
from .union import TaggedUnionBuilder, Variant, tagged_union

__all__ = [
    "Codec",
    "encode",
    "decode",
    "Buffer",
    "Cursor",
    "DecodeOptions",
    "int8",
    "int16",
    "int32",
    "int64",
    "uint8",
    "uint16",
    "uint32",
    "uint64",
    "float32",
    "float64",
    "boolean",
    "varint",
    "zigzag",
    "string",
    "bytes_",
    "constant",
    "map_",
    "tuple_",
    "list_",
    "maybe",
    "dict_",
    "enum_",
    "recursive",
    "tagged_union",
    "TaggedUnionBuilder",
    "Variant",
]
