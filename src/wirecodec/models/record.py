"""Product codecs for pydantic models.

model() builds a codec for a BaseModel subclass from one codec per field.
Fields are written back to back, in the order the codecs are given, with no
prefix, exactly like tuple_. Decoding validates the field values through the
model, so pydantic constraints (ge=, le=, max_length=, ...) are enforced on
the way in.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from ..codec.base import Codec, require_codec
from ..codec.buffer import Buffer, Cursor
from ..exceptions import EncodeError, InvalidValue, SchemaError

M = TypeVar("M", bound=BaseModel)


def model(model_class: type[M], **field_codecs: Codec[Any]) -> Codec[M]:
    """Create a codec for a pydantic model.

    Args:
        model_class: BaseModel subclass
        **field_codecs: One codec per model field; keyword order is wire order

    Returns:
        Codec for model_class instances

    Raises:
        SchemaError: If a model field has no codec or a codec names an unknown field

    Example:
        ```python
        from pydantic import BaseModel, Field
        from wirecodec import boolean, decode, encode, uint8
        from wirecodec.models import model

        class Status(BaseModel):
            vehicle_id: int = Field(ge=0, le=200)
            active: bool

        status = model(Status, vehicle_id=uint8, active=boolean)
        data = encode(status, Status(vehicle_id=42, active=True))
        assert decode(status, data) == Status(vehicle_id=42, active=True)
        ```
    """
    if not (isinstance(model_class, type) and issubclass(model_class, BaseModel)):
        raise SchemaError(f"model: expected a pydantic BaseModel subclass, got {model_class!r}")

    declared = set(model_class.model_fields)
    missing = [name for name in model_class.model_fields if name not in field_codecs]
    unknown = [name for name in field_codecs if name not in declared]
    if missing:
        raise SchemaError(f"model {model_class.__name__}: no codec for fields {missing}")
    if unknown:
        raise SchemaError(f"model {model_class.__name__}: unknown fields {unknown}")

    fields = [
        (name, require_codec(codec, f"model {model_class.__name__} field {name}"))
        for name, codec in field_codecs.items()
    ]
    name = model_class.__name__

    def encode_into(value: M, buffer: Buffer) -> None:
        if not isinstance(value, model_class):
            raise EncodeError(f"{name}: expected {name}, got {type(value).__name__}")
        for field_name, field_codec in fields:
            try:
                field_codec.encode_into(getattr(value, field_name), buffer)
            except EncodeError as e:
                raise EncodeError(f"{name}.{field_name}: {e}") from e

    def decode_from(cursor: Cursor) -> M:
        start = cursor.position
        values: dict[str, Any] = {}
        for field_name, field_codec in fields:
            values[field_name] = field_codec.decode_from(cursor)
        try:
            return model_class.model_validate(values)
        except ValidationError as e:
            raise InvalidValue(f"Failed to construct {name}: {e}", start) from e

    sizes = [codec.fixed_size for _, codec in fields]
    fixed_size = None if None in sizes else sum(s for s in sizes if s is not None)
    return Codec(
        name,
        encode_into,
        decode_from,
        min_size=sum(codec.min_size for _, codec in fields),
        fixed_size=fixed_size,
    )
