#!/usr/bin/env python3
"""Recursive codec example for wirecodec.

This example demonstrates:
1. Peano numbers: a recursive tagged union (Zero | Succ(Peano))
2. Rose trees: a recursive product through list_
3. Linked lists: recursion through maybe
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from wirecodec import (
    decode,
    encode,
    int32,
    list_,
    map_,
    maybe,
    recursive,
    string,
    tagged_union,
    tuple_,
)


@dataclass(frozen=True)
class Zero:
    pass


@dataclass(frozen=True)
class Succ:
    predecessor: Zero | Succ


Peano = Zero | Succ

peano = recursive(
    lambda peano: tagged_union().variant(0, Zero).variant(1, Succ, peano).build(),
    name="Peano",
)


def to_peano(n: int) -> Peano:
    value: Peano = Zero()
    for _ in range(n):
        value = Succ(value)
    return value


def from_peano(value: Peano) -> int:
    n = 0
    while isinstance(value, Succ):
        value = value.predecessor
        n += 1
    return n


@dataclass
class Tree:
    label: str
    children: list[Tree] = field(default_factory=list)


tree = recursive(
    lambda tree: map_(
        tuple_(string, list_(tree)),
        lambda node: (node.label, node.children),
        lambda fields: Tree(*fields),
    ),
    name="Tree",
)


@dataclass
class Cell:
    head: int
    tail: Optional[Cell] = None


linked_list = recursive(
    lambda cell: map_(
        tuple_(int32, maybe(cell)),
        lambda c: (c.head, c.tail),
        lambda fields: Cell(*fields),
    ),
    name="LinkedList",
)


def main() -> None:
    """Run the recursive codec example."""
    print("=" * 60)
    print("wirecodec Recursive Codec Example")
    print("=" * 60)
    print()

    print("1. Peano numbers...")
    for n in (0, 1, 5):
        data = encode(peano, to_peano(n))
        print(f"   {n} -> {data.hex()}")
        assert from_peano(decode(peano, data)) == n
    print()

    print("2. Trees...")
    root = Tree("root", [Tree("left"), Tree("right", [Tree("leaf")])])
    data = encode(tree, root)
    print(f"   {len(data)} bytes: {data.hex()}")
    assert decode(tree, data) == root
    print()

    print("3. Deep linked list...")
    cells = None
    for i in range(1000):
        cells = Cell(i, cells)
    data = encode(linked_list, cells)
    print(f"   1000 cells -> {len(data)} bytes")
    decoded = decode(linked_list, data)
    for expected in range(999, -1, -1):
        assert decoded.head == expected
        decoded = decoded.tail
    assert decoded is None
    print()

    print("=" * 60)
    print("Example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
