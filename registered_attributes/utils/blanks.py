"""Blank detection and sequence normalization for attribute values."""

from collections.abc import Iterable, Mapping
from typing import Any


def is_blank(value: Any, strip_whitespace: bool = True) -> bool:
    """Check whether a value counts as blank.

    Blank means None, an empty string (or whitespace-only when
    strip_whitespace is set), or an empty container.

    Examples:
        is_blank(None) → True
        is_blank("  ") → True
        is_blank("  ", strip_whitespace=False) → False
        is_blank(0) → False
    """
    if value is None:
        return True
    if isinstance(value, str):
        return not (value.strip() if strip_whitespace else value)
    if isinstance(value, (list, tuple, set, frozenset, dict)):
        return len(value) == 0
    return False


def as_list(value: Any) -> list:
    """Normalize a value into list form.

    None becomes an empty list; strings, bytes and mappings are treated as
    scalars rather than iterated.
    """
    if value is None:
        return []
    if isinstance(value, (str, bytes, Mapping)):
        return [value]
    if isinstance(value, Iterable):
        return list(value)
    return [value]


def compact_blanks(values: Iterable[Any], strip_whitespace: bool = True) -> list:
    """Drop blank elements, preserving order."""
    return [v for v in values if not is_blank(v, strip_whitespace=strip_whitespace)]
