"""An ordered key:value store driven by a client supplied key comparator.

Pairs are kept in a list sorted by key, and lookups use a binary search.
The comparator follows the ``<0``, ``0``, ``>0`` convention of a classic
three-way compare function.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .errors import abort_if

KeyCompare = Callable[[Any, Any], int]


@dataclass
class _Pair:
    key: Any
    value: Any


class KeyValueStore:
    """Key:value pairs held in key order as defined by *key_compare*."""

    def __init__(self, key_compare: KeyCompare) -> None:
        abort_if(
            key_compare is None or not callable(key_compare),
            "kv_create missing key compare function for HKV",
        )
        self._compare = key_compare
        self._pairs: list[_Pair] = []

    def _search(self, key: Any) -> tuple[int, bool]:
        """Return the insertion index for *key* and whether it is present."""
        low, high = 0, len(self._pairs)
        while low < high:
            middle = (low + high) // 2
            order = self._compare(key, self._pairs[middle].key)
            if order == 0:
                return middle, True
            if order < 0:
                high = middle
            else:
                low = middle + 1
        return low, False

    def get(self, key: Any) -> Any:
        """Return the value stored for *key*, or None if it is absent."""
        abort_if(key is None, "kv_get key may not be NULL")
        index, found = self._search(key)
        return self._pairs[index].value if found else None

    def put(self, key: Any, value: Any) -> Any:
        """Store *value* under *key*, replacing any earlier value.

        Returns the value passed in.
        """
        abort_if(key is None, "kv_put key may not be NULL")
        index, found = self._search(key)
        if found:
            self._pairs[index].value = value
        else:
            self._pairs.insert(index, _Pair(key, value))
        return value

    def delete(self, key: Any) -> bool:
        """Remove the pair for *key*; return whether anything was removed."""
        abort_if(key is None, "kv_delete key may not be NULL")
        index, found = self._search(key)
        if found:
            del self._pairs[index]
        return found

    def reset(self) -> int:
        """Remove every pair and return how many there were."""
        removed = len(self._pairs)
        self._pairs.clear()
        return removed

    def is_empty(self) -> bool:
        """Return True if the store holds no pairs."""
        return not self._pairs

    def __len__(self) -> int:
        return len(self._pairs)

    def keys(self) -> list[Any]:
        """Return all keys in key order."""
        return [pair.key for pair in self._pairs]

    def values(self) -> list[Any]:
        """Return all values, ordered by their keys."""
        return [pair.value for pair in self._pairs]