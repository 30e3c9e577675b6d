"""Unit tests for pydantic model codecs."""

from __future__ import annotations

import enum
from typing import Optional

import pytest
from pydantic import BaseModel, Field

from wirecodec import (
    EncodeError,
    InvalidValue,
    SchemaError,
    boolean,
    decode,
    encode,
    enum_,
    list_,
    maybe,
    string,
    uint8,
    uint16,
)
from wirecodec.models import model


class MissionPhase(enum.Enum):
    """Mission phase enum."""

    STARTUP = 1
    TRANSIT = 2
    SURVEY = 3


class StatusReport(BaseModel):
    """Vehicle status report."""

    vehicle_id: int = Field(ge=0, le=200)
    phase: MissionPhase
    depth_cm: int = Field(ge=0, le=10000)
    active: bool
    callsign: Optional[str] = None


status_codec = model(
    StatusReport,
    vehicle_id=uint8,
    phase=enum_(MissionPhase),
    depth_cm=uint16,
    active=boolean,
    callsign=maybe(string),
)


class TestModelCodec:
    """Test model() encode/decode."""

    def test_roundtrip(self) -> None:
        """Test a model round-trips field by field."""
        msg = StatusReport(vehicle_id=42, phase=MissionPhase.SURVEY, depth_cm=1500, active=True)
        data = encode(status_codec, msg)

        assert data == b"\x2a\x02\xdc\x05\x01\x00"
        assert decode(status_codec, data) == msg

    def test_optional_field(self) -> None:
        """Test an optional field that is present."""
        msg = StatusReport(
            vehicle_id=1, phase=MissionPhase.STARTUP, depth_cm=0, active=False, callsign="AUV"
        )
        assert decode(status_codec, encode(status_codec, msg)).callsign == "AUV"

    def test_keyword_order_is_wire_order(self) -> None:
        """Test fields are written in the order codecs are given."""

        class Pair(BaseModel):
            first: int
            second: int

        forward = model(Pair, first=uint8, second=uint8)
        backward = model(Pair, second=uint8, first=uint8)

        assert encode(forward, Pair(first=1, second=2)) == b"\x01\x02"
        assert encode(backward, Pair(first=1, second=2)) == b"\x02\x01"
        assert decode(backward, b"\x02\x01") == Pair(first=1, second=2)

    def test_validation_on_decode(self) -> None:
        """Test pydantic constraints are enforced when decoding."""
        # vehicle_id 250 fits in uint8 but violates le=200
        with pytest.raises(InvalidValue, match="Failed to construct StatusReport"):
            decode(status_codec, b"\xfa\x00\x00\x00\x01\x00")

    def test_nested_models(self) -> None:
        """Test a model codec used inside list_."""

        class Fleet(BaseModel):
            name: str
            members: list[StatusReport]

        fleet_codec = model(Fleet, name=string, members=list_(status_codec))
        fleet = Fleet(
            name="alpha",
            members=[
                StatusReport(vehicle_id=1, phase=MissionPhase.TRANSIT, depth_cm=10, active=True),
                StatusReport(vehicle_id=2, phase=MissionPhase.SURVEY, depth_cm=20, active=False),
            ],
        )

        assert decode(fleet_codec, encode(fleet_codec, fleet)) == fleet

    def test_field_encode_error(self) -> None:
        """Test field errors name the field."""
        msg = StatusReport.model_construct(
            vehicle_id=300, phase=MissionPhase.STARTUP, depth_cm=0, active=True, callsign=None
        )

        with pytest.raises(EncodeError, match="StatusReport.vehicle_id"):
            encode(status_codec, msg)

    def test_wrong_type(self) -> None:
        """Test encoding something other than the model."""
        with pytest.raises(EncodeError, match="expected StatusReport"):
            encode(status_codec, {"vehicle_id": 1})

    def test_fixed_size(self) -> None:
        """Test models of fixed-width fields have a fixed size."""

        class Sample(BaseModel):
            a: int
            b: bool

        assert model(Sample, a=uint16, b=boolean).fixed_size == 3
        assert status_codec.fixed_size is None


class TestModelSchema:
    """Test model() construction errors."""

    def test_missing_field(self) -> None:
        """Test every model field needs a codec."""
        with pytest.raises(SchemaError, match=r"no codec for fields \['active', 'callsign'\]"):
            model(StatusReport, vehicle_id=uint8, phase=enum_(MissionPhase), depth_cm=uint16)

    def test_unknown_field(self) -> None:
        """Test codecs for fields the model does not declare."""

        class Single(BaseModel):
            a: int

        with pytest.raises(SchemaError, match=r"unknown fields \['b'\]"):
            model(Single, a=uint8, b=uint8)

    def test_not_a_model(self) -> None:
        """Test a non-pydantic class is rejected."""
        with pytest.raises(SchemaError, match="BaseModel subclass"):
            model(dict, a=uint8)

    def test_non_codec(self) -> None:
        """Test field codecs are checked."""

        class Single(BaseModel):
            a: int

        with pytest.raises(SchemaError, match="field a"):
            model(Single, a=int)
