#!/usr/bin/env python3
"""Basic usage example for wirecodec.

This example demonstrates:
1. Building a product codec with map_ and tuple_
2. Building a sum-type codec with tagged_union
3. Encoding to bytes and decoding back
4. Handling decode errors
"""

from __future__ import annotations

from dataclasses import dataclass

from wirecodec import (
    DecodeError,
    decode,
    encode,
    encoded_size,
    float64,
    map_,
    tagged_union,
    tuple_,
    uint8,
)


@dataclass(frozen=True)
class GpsPoint:
    """A position in decimal degrees."""

    latitude: float
    longitude: float


gps_point = map_(
    tuple_(float64, float64),
    lambda point: (point.latitude, point.longitude),
    lambda fields: GpsPoint(*fields),
    name="GpsPoint",
)


@dataclass(frozen=True)
class Red:
    pass


@dataclass(frozen=True)
class Yellow:
    pass


@dataclass(frozen=True)
class Green:
    seconds_left: int


Semaphore = Red | Yellow | Green


def match_semaphore(value: Semaphore, red, yellow, green) -> None:
    if isinstance(value, Red):
        red()
    elif isinstance(value, Yellow):
        yellow()
    elif isinstance(value, Green):
        green(value.seconds_left)


semaphore = (
    tagged_union(match_semaphore, name="Semaphore")
    .variant(0, Red)
    .variant(1, Yellow)
    .variant(2, Green, uint8)
    .build()
)


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("wirecodec Basic Usage Example")
    print("=" * 60)
    print()

    print("1. Encoding a GPS point...")
    point = GpsPoint(latitude=42.358894, longitude=-71.063611)
    data = encode(gps_point, point)
    print(f"   {point}")
    print(f"   Encoded size: {len(data)} bytes")
    print(f"   Hex: {data.hex()}")
    print()

    print("2. Decoding it back...")
    decoded = decode(gps_point, data)
    print(f"   {decoded}")
    print(f"   Round-trip {'successful' if decoded == point else 'FAILED'}")
    print()

    print("3. Encoding semaphore states...")
    for state in (Red(), Yellow(), Green(seconds_left=30)):
        data = encode(semaphore, state)
        print(f"   {state!r:<28} -> {data.hex():<6} ({encoded_size(semaphore, state)} bytes)")
        assert decode(semaphore, data) == state
    print()

    print("4. Decoding bad input...")
    for bad in (b"\x07", b"\x02", b"\x00\x01"):
        try:
            decode(semaphore, bad)
        except DecodeError as e:
            print(f"   {bad.hex():<6} -> {type(e).__name__}: {e}")
    print()

    print("=" * 60)
    print("Example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
