"""Binary heap whose entries can be looked up, updated and removed by key."""

from __future__ import annotations

import threading
from typing import Callable, Generic, Hashable, TypeVar

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)


class IndexedHeap(Generic[T, K]):
    """A priority heap keyed by a user supplied index.

    ``comparator(a, b)`` returns True when ``a`` belongs above ``b``; a
    ``<`` comparator gives a min-heap, a ``>`` comparator a max-heap.
    Lookups that find nothing return ``null_value`` / ``null_index``.
    """

    def __init__(
        self,
        comparator: Callable[[T, T], bool],
        null_value: T = None,
        null_index: K = None,
    ) -> None:
        self._comparator = comparator
        self._null_value = null_value
        self._null_index = null_index
        self._values: list[T] = []
        self._keys: list[K] = []
        self._positions: dict[K, int] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._values)

    def __contains__(self, user_index: object) -> bool:
        with self._lock:
            return user_index in self._positions

    def insert(self, user_index: K, value: T) -> None:
        """Add ``value`` under ``user_index``; an existing entry is updated."""
        with self._lock:
            if user_index in self._positions:
                self._update(user_index, value)
                return
            self._values.append(value)
            self._keys.append(user_index)
            pos = len(self._values) - 1
            self._positions[user_index] = pos
            self._sift_up(pos)

    def update(self, user_index: K, new_value: T) -> None:
        """Change the value stored under ``user_index``; unknown keys are ignored."""
        with self._lock:
            self._update(user_index, new_value)

    def extract_top_element(self) -> tuple[T, K]:
        """Remove and return the top ``(value, index)`` pair."""
        top = self.extract_top_k_values(1)
        if not top:
            return (self._null_value, self._null_index)
        return top[0]

    def extract_top_k_values(self, k: int) -> list[tuple[T, K]]:
        """Remove and return up to ``k`` top ``(value, index)`` pairs in order."""
        with self._lock:
            extracted: list[tuple[T, K]] = []
            while k > 0 and self._values:
                extracted.append(self._pop_at(0))
                k -= 1
            return extracted

    def remove(self, user_index: K) -> T:
        """Remove the entry under ``user_index`` and return its value."""
        with self._lock:
            pos = self._positions.get(user_index)
            if pos is None:
                return self._null_value
            value, _ = self._pop_at(pos)
            return value

    def get(self, user_index: K) -> T:
        with self._lock:
            pos = self._positions.get(user_index)
            if pos is None:
                return self._null_value
            return self._values[pos]

    def is_null_value(self, value: T) -> bool:
        return value == self._null_value

    def is_null_index(self, index: K) -> bool:
        return index == self._null_index

    def _update(self, user_index: K, new_value: T) -> None:
        pos = self._positions.get(user_index)
        if pos is None:
            return
        old_value = self._values[pos]
        self._values[pos] = new_value
        if self._comparator(new_value, old_value):
            self._sift_up(pos)
        else:
            self._sift_down(pos)

    def _pop_at(self, pos: int) -> tuple[T, K]:
        value = self._values[pos]
        key = self._keys[pos]
        last = len(self._values) - 1
        self._swap(pos, last)
        self._values.pop()
        self._keys.pop()
        del self._positions[key]
        if pos < len(self._values):
            self._sift_down(pos)
            self._sift_up(pos)
        return value, key

    def _swap(self, i: int, j: int) -> None:
        self._values[i], self._values[j] = self._values[j], self._values[i]
        self._keys[i], self._keys[j] = self._keys[j], self._keys[i]
        self._positions[self._keys[i]] = i
        self._positions[self._keys[j]] = j

    def _sift_up(self, pos: int) -> None:
        while pos > 0:
            parent = (pos - 1) // 2
            if not self._comparator(self._values[pos], self._values[parent]):
                break
            self._swap(pos, parent)
            pos = parent

    def _sift_down(self, pos: int) -> None:
        size = len(self._values)
        while True:
            extreme = pos
            for child in (2 * pos + 1, 2 * pos + 2):
                if child < size and self._comparator(self._values[child], self._values[extreme]):
                    extreme = child
            if extreme == pos:
                return
            self._swap(pos, extreme)
            pos = extreme