#!/usr/bin/env python3
"""Schema evolution example for wirecodec.

Versions are modelled as a tagged union over the historical shapes of a
record, then collapsed into the current in-memory type with map_. Old tags
keep their decode path forever; new data is always written with the newest
tag.

    v1 (tag 1): name
    v2 (tag 2): name, age
    v3 (tag 3): name, age, email (optional)
"""

from __future__ import annotations

from typing import NamedTuple, Optional

from wirecodec import decode, encode, map_, maybe, string, tagged_union, uint8


class UserV1(NamedTuple):
    name: str


class UserV2(NamedTuple):
    name: str
    age: int


class UserV3(NamedTuple):
    name: str
    age: int
    email: Optional[str]


class User(NamedTuple):
    """Canonical in-memory shape."""

    name: str
    age: int
    email: Optional[str]


def normalize(shape: UserV1 | UserV2 | UserV3) -> User:
    if isinstance(shape, UserV1):
        return User(shape.name, 0, None)
    if isinstance(shape, UserV2):
        return User(shape.name, shape.age, None)
    return User(*shape)


user_versions = (
    tagged_union(name="UserVersions")
    .variant(1, UserV1, string)
    .variant(2, UserV2, string, uint8)
    .variant(3, UserV3, string, uint8, maybe(string))
    .build()
)

# New data is always written as the newest shape
user = map_(user_versions, lambda u: UserV3(*u), normalize, name="User")


def main() -> None:
    """Run the versioning example."""
    print("=" * 60)
    print("wirecodec Versioning Example")
    print("=" * 60)
    print()

    archived = {
        "v1": b"\x01\x05alice",
        "v2": b"\x02\x03bob\x2a",
    }
    for label, data in archived.items():
        print(f"   {label} {data.hex():<20} -> {decode(user, data)}")

    current = User("carol", 31, "carol@example.org")
    data = encode(user, current)
    print(f"   v3 {data.hex():<20} -> {decode(user, data)}")
    print()

    print("=" * 60)
    print("Example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
