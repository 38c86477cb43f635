"""Thread-safe least-recently-used cache."""

from __future__ import annotations

import threading
from collections import OrderedDict
from typing import Callable, Generic, Hashable, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class LRUCache(Generic[K, V]):
    """A bounded cache that evicts the least recently used entry.

    Lookups of missing keys return ``empty_value`` instead of raising.
    Putting a key that is already cached keeps its stored value and only
    marks it as most recently used.
    """

    def __init__(self, capacity: int, empty_value: V = None) -> None:
        self._capacity = capacity
        self._empty_value = empty_value
        self._entries: OrderedDict[K, V] = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def key_exists(self, key: K) -> bool:
        with self._lock:
            return key in self._entries

    def get(self, key: K) -> V:
        with self._lock:
            return self._get(key)

    def put(self, key: K, value: V) -> V:
        """Store ``value`` and return the evicted value, or the empty value."""
        with self._lock:
            return self._put(key, value)

    def put_and_get(self, key: K, value: V) -> V:
        """Store ``value`` unless cached already, and return the cached value."""
        with self._lock:
            self._put(key, value)
            return self._get(key)

    def remove(self, key: K) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def find_matching_keys(self, key_prefix: K, comp: Callable[[K, K], bool]) -> set[K]:
        """Return every cached key for which ``comp(key_prefix, key)`` holds."""
        with self._lock:
            return {key for key in self._entries if comp(key_prefix, key)}

    def _get(self, key: K) -> V:
        if key not in self._entries:
            return self._empty_value
        self._entries.move_to_end(key, last=False)
        return self._entries[key]

    def _put(self, key: K, value: V) -> V:
        evicted = self._empty_value

        if key in self._entries:
            self._entries.move_to_end(key, last=False)
            return evicted

        if self._entries and len(self._entries) + 1 > self._capacity:
            _, evicted = self._entries.popitem(last=True)

        self._entries[key] = value
        self._entries.move_to_end(key, last=False)
        return evicted