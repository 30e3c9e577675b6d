"""Errors raised while building, encoding and decoding codecs.

Mistakes in how codecs are wired together raise SchemaError as soon as they
are made. Values a codec cannot represent raise EncodeError. Malformed input
raises a DecodeError subclass that records the byte offset of the failure:
UnexpectedEndOfInput for truncated input, InvalidUtf8 for bad string
payloads, InvalidValue for bytes outside a closed encoding (including input
nested past DecodeOptions.max_depth), UnknownTag for unregistered union tags
and TrailingBytes for unconsumed input.
"""

from __future__ import annotations


class WirecodecError(Exception):
    """Base exception for all wirecodec errors."""

    pass


class SchemaError(WirecodecError):
    """Raised when a codec is constructed or wired together incorrectly.

    These are programmer errors and are reported at construction time, never
    deferred to a later decode call.

    Examples:
        - Two variants of one tagged union share a tag
        - A variant is added to a builder after build()
        - A recursive codec is used before its definition completed
        - A model field has no codec
    """

    pass


class EncodeError(WirecodecError):
    """Raised when a value is outside the domain of the codec encoding it.

    Examples:
        - Integer out of range for a fixed-width codec
        - Wrong Python type (str given to a boolean codec)
        - Tuple arity mismatch
        - Tagged-union matcher selected no variant
    """

    pass


class DecodeError(WirecodecError):
    """Raised when decoding binary data fails.

    Attributes:
        position: Byte offset in the input where the failure was detected,
            or None when unknown.
    """

    def __init__(self, message: str, position: int | None = None) -> None:
        super().__init__(message)
        self.position = position

    def __str__(self) -> str:
        message = super().__str__()
        if self.position is None:
            return message
        return f"{message} (at byte {self.position})"


class UnexpectedEndOfInput(DecodeError):
    """Fewer bytes remain than a primitive or length prefix requires."""

    pass


class InvalidUtf8(DecodeError):
    """A string payload is not valid UTF-8."""

    pass


class InvalidValue(DecodeError):
    """A decoded value is outside the allowed domain of a closed encoding.

    Examples:
        - Boolean byte other than 0 or 1
        - Presence byte other than 0 or 1
        - Enum ordinal past the last member
        - Length prefix above DecodeOptions.max_length
        - Recursive codecs nested deeper than DecodeOptions.max_depth
    """

    pass


class UnknownTag(DecodeError):
    """A tagged union's tag does not match any registered variant.

    Attributes:
        tag: The tag that was read.
    """

    def __init__(self, tag: int, position: int | None = None) -> None:
        super().__init__(f"Unknown tag: {tag}", position)
        self.tag = tag


class TrailingBytes(DecodeError):
    """Input bytes remain after the top-level value was decoded."""

    pass
