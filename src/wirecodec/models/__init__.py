"""Pydantic integration for wirecodec.

This module provides the model() combinator, a product codec for pydantic
BaseModel subclasses.
"""

from __future__ import annotations

from .record import model

__all__ = [
    "model",
]
