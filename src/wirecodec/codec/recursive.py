"""Codecs for self-referential types.

recursive() hands build_fn a placeholder codec that stands for "the codec
being built". build_fn may embed the placeholder inside other combinators
(maybe, list_, tuple_, tagged-union fields) but must not encode or decode with
it. Once build_fn returns, the real codec's operations are bound into the
placeholder exactly once and the placeholder is returned.

Each decode through the placeholder counts one level of nesting; input nested
deeper than DecodeOptions.max_depth fails with InvalidValue.

Example:
    >>> from wirecodec import list_, map_, recursive, string, tuple_
    >>> tree = recursive(
    ...     lambda tree: map_(
    ...         tuple_(string, list_(tree)),
    ...         lambda node: (node.label, node.children),
    ...         lambda fields: Node(*fields),
    ...     )
    ... )
"""

from __future__ import annotations

import logging
from typing import Any, Callable, TypeVar

from ..exceptions import SchemaError
from .base import Codec
from .buffer import Buffer, Cursor

logger = logging.getLogger(__name__)

T = TypeVar("T")


def recursive(build_fn: Callable[[Codec[T]], Codec[T]], name: str | None = None) -> Codec[T]:
    """Build a codec for a type that refers to itself.

    Args:
        build_fn: Receives the placeholder and returns the real codec
            definition, typically with the placeholder embedded in it
        name: Optional display name

    Returns:
        The placeholder, now backed by the real codec

    Raises:
        SchemaError: If build_fn uses the placeholder to encode or decode,
            returns something that is not a Codec, or returns the placeholder
            itself
    """
    display = name or getattr(build_fn, "__name__", "recursive")

    def unbound_encode(value: Any, buffer: Buffer) -> None:
        raise SchemaError(f"recursive codec {display!r} used to encode before its definition completed")

    def unbound_decode(cursor: Cursor) -> Any:
        raise SchemaError(f"recursive codec {display!r} used to decode before its definition completed")

    placeholder: Codec[T] = Codec(f"recursive({display})", unbound_encode, unbound_decode)
    definition = build_fn(placeholder)

    if not isinstance(definition, Codec):
        raise SchemaError(
            f"recursive codec {display!r}: build_fn must return a Codec, "
            f"got {type(definition).__name__}"
        )
    if definition is placeholder:
        raise SchemaError(f"recursive codec {display!r}: build_fn returned the placeholder itself")

    target_decode = definition.decode_from

    def decode_from(cursor: Cursor) -> T:
        cursor.enter(placeholder.name)
        try:
            return target_decode(cursor)
        finally:
            cursor.leave()

    # Write-once: copy the definition into the placeholder. Encoding uses the
    # definition's function directly; decoding counts nesting depth first.
    object.__setattr__(placeholder, "encode_into", definition.encode_into)
    object.__setattr__(placeholder, "decode_from", decode_from)
    object.__setattr__(placeholder, "min_size", definition.min_size)
    object.__setattr__(placeholder, "fixed_size", definition.fixed_size)
    logger.debug("bound recursive codec %s to %s", display, definition.name)
    return placeholder
