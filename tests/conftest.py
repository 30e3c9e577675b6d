"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import sys
from typing import Iterator

import pytest


@pytest.fixture
def default_recursion_limit() -> Iterator[int]:
    """Run a test under CPython's default recursion limit of 1000."""
    previous = sys.getrecursionlimit()
    sys.setrecursionlimit(1000)
    try:
        yield 1000
    finally:
        sys.setrecursionlimit(previous)
