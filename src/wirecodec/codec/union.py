"""Tagged-union (sum type) codecs.

A tagged union is written as a varint tag followed by the chosen variant's
fields. Tags are arbitrary non-negative integers, need not be contiguous, and
are independent of the order variants are registered in.

Codecs are assembled with a single-use builder:

    tagged_union(matcher) --variant(tag, constructor, *codecs)--> ... --build()--> Codec

The matcher picks the variant for a value on encode. It is called as
``matcher(value, *callbacks)`` with one callback per variant, in registration
order, and must call exactly one of them with that variant's field values:

    >>> shape = (
    ...     tagged_union(
    ...         lambda value, circle, rect: (
    ...             circle(value.radius)
    ...             if isinstance(value, Circle)
    ...             else rect(value.width, value.height)
    ...         )
    ...     )
    ...     .variant(0, Circle, float64)
    ...     .variant(1, Rect, float64, float64)
    ...     .build()
    ... )

Without a matcher, a value is dispatched to the first variant whose
constructor is a class the value is an instance of, and its fields are taken
from the value as a tuple/NamedTuple, a dataclass or a pydantic model.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

from pydantic import BaseModel

from ..exceptions import EncodeError, InvalidValue, SchemaError, UnknownTag
from .base import Codec, require_codec
from .buffer import MAX_VARINT, Buffer, Cursor

logger = logging.getLogger(__name__)

T = TypeVar("T")

Matcher = Callable[..., Any]


@dataclass(frozen=True)
class Variant:
    """One registered case of a tagged union.

    Attributes:
        tag: Wire tag
        constructor: Builds the union value from decoded field values
            (positionally, or by field name for a pydantic model)
        fields: Field codecs, in constructor argument order
    """

    tag: int
    constructor: Callable[..., Any]
    fields: tuple[Codec[Any], ...]

    @property
    def name(self) -> str:
        return getattr(self.constructor, "__name__", repr(self.constructor))

    def check_arity(self, values: tuple[Any, ...]) -> None:
        if len(values) != len(self.fields):
            raise EncodeError(
                f"variant {self.name} (tag {self.tag}): expected {len(self.fields)} "
                f"fields, got {len(values)}"
            )

    def construct(self, values: list[Any], start: int) -> Any:
        """Build the union value from decoded fields read from offset start."""
        try:
            if isinstance(self.constructor, type) and issubclass(self.constructor, BaseModel):
                return self.constructor(**dict(zip(self.constructor.model_fields, values)))
            return self.constructor(*values)
        except (ValueError, TypeError) as e:
            raise InvalidValue(
                f"variant {self.name} (tag {self.tag}): constructor failed: {e}", start
            ) from e


class TaggedUnionBuilder(Generic[T]):
    """Accumulates variants for a tagged-union codec.

    The builder is single-use: after build() it rejects further calls with
    SchemaError. Contract violations (duplicate tags, bad field codecs) are
    raised as soon as the offending variant is registered.
    """

    def __init__(self, matcher: Matcher | None = None, name: str | None = None) -> None:
        if matcher is not None and not callable(matcher):
            raise SchemaError(f"tagged_union: matcher must be callable, got {type(matcher).__name__}")
        self._matcher = matcher
        self._name = name
        self._variants: list[Variant] = []
        self._by_tag: dict[int, Variant] = {}
        self._built = False

    def variant(
        self, tag: int, constructor: Callable[..., T], *field_codecs: Codec[Any]
    ) -> TaggedUnionBuilder[T]:
        """Register one variant.

        Args:
            tag: Wire tag, a non-negative integer unique within this union
            constructor: Called with the decoded field values, in order
            *field_codecs: Codecs for the variant's fields (none for a
                zero-field variant)

        Returns:
            The builder, for chaining

        Raises:
            SchemaError: If the builder was already built, the tag is invalid or
                already registered, or a field codec is not a Codec
        """
        self._check_open("variant")
        if not isinstance(tag, int) or isinstance(tag, bool) or tag < 0 or tag > MAX_VARINT:
            raise SchemaError(f"tagged_union: tag must be an integer 0-{MAX_VARINT}, got {tag!r}")
        if tag in self._by_tag:
            existing = self._by_tag[tag]
            raise SchemaError(
                f"tagged_union: tag {tag} already registered to {existing.name}. "
                f"Cannot register {getattr(constructor, '__name__', constructor)!r} with the same tag."
            )
        if not callable(constructor):
            raise SchemaError(f"tagged_union: constructor for tag {tag} is not callable")
        fields = tuple(
            require_codec(c, f"tagged_union tag {tag} field {i}") for i, c in enumerate(field_codecs)
        )

        entry = Variant(tag, constructor, fields)
        self._variants.append(entry)
        self._by_tag[tag] = entry
        return self

    def build(self) -> Codec[T]:
        """Finish the union and return its codec.

        Raises:
            SchemaError: If called twice, or if no variant was registered, or if
                no matcher was given and some constructor is not a class
        """
        self._check_open("build")
        if not self._variants:
            raise SchemaError("tagged_union: cannot build a union with no variants")
        self._built = True

        variants = tuple(self._variants)
        by_tag = dict(self._by_tag)
        name = self._name or f"union({', '.join(f'{v.tag}:{v.name}' for v in variants)})"

        if self._matcher is not None:
            select = _matcher_dispatch(self._matcher, variants, name)
        else:
            select = _instance_dispatch(variants, name)

        # Field loops stay inline to keep recursive unions shallow on the stack
        def encode_into(value: T, buffer: Buffer) -> None:
            entry, fields = select(value)
            entry.check_arity(fields)
            buffer.write_varint(entry.tag)
            for field_codec, item in zip(entry.fields, fields):
                field_codec.encode_into(item, buffer)

        def decode_from(cursor: Cursor) -> T:
            start = cursor.position
            tag = cursor.read_varint()
            entry = by_tag.get(tag)
            if entry is None:
                raise UnknownTag(tag, start)
            fields_start = cursor.position
            values = []
            for field_codec in entry.fields:
                values.append(field_codec.decode_from(cursor))
            return entry.construct(values, fields_start)

        sizes = {_fixed_variant_size(v) for v in variants}
        fixed_size = sizes.pop() if len(sizes) == 1 else None

        logger.debug("built tagged union %s with %d variants", name, len(variants))
        return Codec(name, encode_into, decode_from, min_size=1, fixed_size=fixed_size)

    def _check_open(self, operation: str) -> None:
        if self._built:
            raise SchemaError(f"tagged_union: {operation}() called after build()")


def tagged_union(matcher: Matcher | None = None, name: str | None = None) -> TaggedUnionBuilder[Any]:
    """Start building a tagged-union codec.

    Args:
        matcher: Called as matcher(value, *callbacks) on encode; must call
            exactly one callback with the value's field values. If omitted,
            dispatch is by isinstance() against class constructors.
        name: Optional display name

    Returns:
        A builder in the accumulating state
    """
    return TaggedUnionBuilder(matcher, name)


def _matcher_dispatch(
    matcher: Matcher, variants: tuple[Variant, ...], name: str
) -> Callable[[Any], tuple[Variant, tuple[Any, ...]]]:
    def select(value: Any) -> tuple[Variant, tuple[Any, ...]]:
        chosen: list[tuple[Variant, tuple[Any, ...]]] = []

        # Callbacks only record the choice; fields are written after the
        # matcher returns, so a misbehaving matcher writes nothing.
        def make_callback(entry: Variant) -> Callable[..., None]:
            def callback(*fields: Any) -> None:
                chosen.append((entry, fields))

            return callback

        matcher(value, *[make_callback(entry) for entry in variants])

        if not chosen:
            raise EncodeError(f"{name}: matcher selected no variant for {value!r}")
        if len(chosen) > 1:
            tags = [entry.tag for entry, _ in chosen]
            raise EncodeError(f"{name}: matcher selected {len(chosen)} variants (tags {tags})")
        return chosen[0]

    return select


def _instance_dispatch(
    variants: tuple[Variant, ...], name: str
) -> Callable[[Any], tuple[Variant, tuple[Any, ...]]]:
    for entry in variants:
        if not isinstance(entry.constructor, type):
            raise SchemaError(
                f"{name}: variant tag {entry.tag} has a non-class constructor; "
                f"pass a matcher to tagged_union()"
            )

    def select(value: Any) -> tuple[Variant, tuple[Any, ...]]:
        for entry in variants:
            if isinstance(value, entry.constructor):
                return entry, _destructure(value, len(entry.fields))
        raise EncodeError(f"{name}: no variant for value of type {type(value).__name__}")

    return select


def _destructure(value: Any, arity: int) -> tuple[Any, ...]:
    """Split a variant value into its field values, in declaration order."""
    if arity == 0:
        return ()
    if isinstance(value, BaseModel):
        return tuple(getattr(value, field) for field in type(value).model_fields)
    if dataclasses.is_dataclass(value):
        return tuple(getattr(value, f.name) for f in dataclasses.fields(value))
    if isinstance(value, tuple):
        return tuple(value)
    raise EncodeError(
        f"cannot take fields from {type(value).__name__}; "
        f"use a tuple, dataclass or pydantic model, or pass a matcher"
    )


def _fixed_variant_size(entry: Variant) -> int | None:
    sizes = [f.fixed_size for f in entry.fields]
    if None in sizes or entry.tag >= 0x80:
        return None
    return 1 + sum(s for s in sizes if s is not None)
