"""Shared utility functions for Dialectic."""

from __future__ import annotations

import math
import unicodedata
from typing import Any


def is_number(value: Any) -> bool:
    """True for ints and finite floats.

    bool is excluded even though it subclasses int: a JSON ``true`` is
    not a thought number. NaN and infinities are rejected too. Ints of
    any size are accepted and never converted to float.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    if isinstance(value, int):
        return True
    return math.isfinite(value)


def round_number(thought_number: int | float) -> int:
    """ceil(thought_number / 2), exact for arbitrarily large ints."""
    if isinstance(thought_number, int):
        return -(-thought_number // 2)
    return math.ceil(thought_number / 2)


def display_width(text: str) -> int:
    """Terminal columns taken by text; wide and fullwidth chars count 2."""
    return sum(2 if unicodedata.east_asian_width(ch) in ("W", "F") else 1 for ch in text)


def error_payload(message: str, **extra: Any) -> dict[str, Any]:
    """Build a tool-level error record ({"error": message, ...})."""
    return {"error": message, **extra}
