"""Decode-time configuration.

This module provides the DecodeOptions dataclass that tunes how strictly
decode() treats its input. Codecs themselves carry no configuration.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DecodeOptions:
    """Options for a single decode() call.

    Attributes:
        allow_trailing: If False (default), bytes left over after the top-level
            value fail with TrailingBytes. If True they are ignored.
        max_length: Upper bound on any decoded length or count prefix
            (string, bytes, list, dict). Larger prefixes fail with InvalidValue
            before any payload is read. None means no bound beyond the
            remaining input.
        max_depth: Maximum nesting of recursive codecs. Deeper input fails
            with InvalidValue instead of exhausting the interpreter stack.
        max_empty_items: Upper bound on the count of a list or dict whose
            elements may encode to zero bytes. Such counts cannot be checked
            against the remaining input, so they get this bound instead.

    Examples:
        ```python
        from wirecodec import DecodeOptions, decode, list_, uint8

        # Read a prefix of a larger buffer, refuse lists above 1000 items
        options = DecodeOptions(allow_trailing=True, max_length=1000)
        values = decode(list_(uint8), data, options=options)
        ```
    """

    allow_trailing: bool = False
    max_length: int | None = None
    max_depth: int = 2000
    max_empty_items: int = 65536

    def __post_init__(self) -> None:
        """Validate option values."""
        if self.max_length is not None and self.max_length < 0:
            raise ValueError(f"max_length must be >= 0, got {self.max_length}")
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be >= 1, got {self.max_depth}")
        if self.max_empty_items < 0:
            raise ValueError(f"max_empty_items must be >= 0, got {self.max_empty_items}")


DEFAULT_OPTIONS = DecodeOptions()
