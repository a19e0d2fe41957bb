"""Bounded LRU set of search states already proven to lead nowhere."""

from collections import OrderedDict
from typing import Hashable


class FailureMemo:
    """
    LRU-capped set of composite search keys.

    Entries are only valid for the duty ceiling they were recorded under; the
    solver creates a fresh memo for every deepening attempt.
    """

    def __init__(self, capacity: int):
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1 (got {capacity})")
        self.capacity = capacity
        self._entries = OrderedDict()
        self.hits = 0
        self.evictions = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: Hashable) -> bool:
        if key in self._entries:
            self._entries.move_to_end(key)
            self.hits += 1
            return True
        return False

    def add(self, key: Hashable):
        self._entries[key] = None
        self._entries.move_to_end(key)
        if len(self._entries) > self.capacity:
            self._entries.popitem(last=False)
            self.evictions += 1
