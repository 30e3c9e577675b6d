"""wirecodec: Composable Binary Codecs

A Python library for bidirectional binary serialization built from small
composable codec values. Each codec pairs an encoder and a decoder for one
type; combinators assemble them into codecs for arbitrarily complex data,
including self-referential and sum-typed data.

Key Features:
- Little-endian fixed-width numbers, LEB128 varints, length-prefixed strings
- map_, tuple_, list_, maybe, dict_ and enum_ combinators
- recursive() for self-referential types
- tagged_union() builder for sum types with explicit, stable wire tags
- pydantic model codecs
- Typed decode errors that never leak IndexError or struct.error

Quick Start:
    >>> from wirecodec import boolean, decode, encode, int32, string, tuple_
    >>>
    >>> record = tuple_(int32, string, boolean)
    >>> data = encode(record, (7, "hi", True))
    >>> decode(record, data)
    (7, 'hi', True)
"""

from __future__ import annotations

from .codec import (
    Buffer,
    Codec,
    Cursor,
    DecodeOptions,
    TaggedUnionBuilder,
    Variant,
    boolean,
    bytes_,
    constant,
    decode,
    dict_,
    encode,
    enum_,
    float32,
    float64,
    int8,
    int16,
    int32,
    int64,
    list_,
    map_,
    maybe,
    recursive,
    string,
    tagged_union,
    tuple_,
    uint8,
    uint16,
    uint32,
    uint64,
    varint,
    zigzag,
)
from .exceptions import (
    DecodeError,
    EncodeError,
    InvalidUtf8,
    InvalidValue,
    SchemaError,
    TrailingBytes,
    UnexpectedEndOfInput,
    UnknownTag,
    WirecodecError,
)
from .models import model
from .utils import encoded_size, fixed_size

__version__ = "0.1.0"

__all__ = [
    # Core API
    "Codec",
    "encode",
    "decode",
    "DecodeOptions",
    "Buffer",
    "Cursor",
    # Primitives
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
    # Combinators
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
    "model",
    # Exceptions
    "WirecodecError",
    "SchemaError",
    "EncodeError",
    "DecodeError",
    "UnexpectedEndOfInput",
    "InvalidUtf8",
    "InvalidValue",
    "UnknownTag",
    "TrailingBytes",
    # Sizing
    "encoded_size",
    "fixed_size",
    # Version
    "__version__",
]
