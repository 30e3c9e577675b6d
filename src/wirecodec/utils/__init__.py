"""Utility functions for wirecodec.

This module provides encoded size helpers.
"""

from __future__ import annotations

from .sizing import encoded_size, fixed_size

__all__ = [
    "encoded_size",
    "fixed_size",
]
