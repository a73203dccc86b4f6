"""Selecting and converting the values of a mapping."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, TypeVar

K = TypeVar("K")
V = TypeVar("V")


def get_values(
    mapping: Mapping[K, V],
    key_filter: Callable[[K], bool] | None = None,
    converter: Callable[[V], Any] | None = None,
) -> list[Any]:
    """Return the values whose keys pass ``key_filter``, passed through ``converter``.

    Values come in the mapping's iteration order. Without a filter every key
    passes; without a converter values are returned as they are.
    """
    return [
        value if converter is None else converter(value)
        for key, value in mapping.items()
        if key_filter is None or key_filter(key)
    ]