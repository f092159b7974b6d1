"""Text helpers for natural ordering and numeric coercion."""

from __future__ import annotations

import re
from typing import Any, List, Optional, Union

_DIGITS = re.compile(r"(\d+)")


def natural_sort_key(text: str) -> List[Union[str, int]]:
    """Key for natural, case-insensitive ordering.

    Runs of digits compare by value, so ``"file2"`` sorts before ``"file10"``.
    Text and numeric parts alternate starting with text, which keeps two keys
    comparable position by position.
    """
    parts = _DIGITS.split(text.casefold())
    return [int(part) if index % 2 else part for index, part in enumerate(parts)]


def compare_natural(left: str, right: str) -> int:
    """Three-way natural, case-insensitive comparison."""
    left_key = natural_sort_key(left)
    right_key = natural_sort_key(right)
    return (left_key > right_key) - (left_key < right_key)


def as_number(value: Any) -> Optional[Union[int, float]]:
    """Return ``value`` as a number when it is numeric, else ``None``.

    Numeric strings such as ``"12"`` or ``" 1.5 "`` count as numbers;
    booleans do not.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return None
        # "nan" and "inf" parse as floats but are not numeric text
        if number != number or number in (float("inf"), float("-inf")):
            return None
        return number
    return None


def compare_values(left: Any, right: Any) -> int:
    """Compare two field values numerically when both are numeric, else naturally."""
    left_number = as_number(left)
    right_number = as_number(right)
    if left_number is not None and right_number is not None:
        return (left_number > right_number) - (left_number < right_number)
    return compare_natural(str(left), str(right))


def snippet(text: str, limit: int = 80) -> str:
    """Single-line preview of ``text`` for tabular output."""
    flat = " ".join(text.split())
    if len(flat) <= limit:
        return flat
    return flat[: limit - 1] + "…"
