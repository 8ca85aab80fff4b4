"""Hash-based duplicate suppression on the primary field."""

from __future__ import annotations

from typing import Set

from .rules import PASSTHROUGH_CODEC

_HASH_SEED = 5381
_HASH_MASK = 0xFFFFFFFF


def hash_text(text: str) -> int:
    """32-bit multiplicative rolling hash (seed 5381, h*33 + byte) over the raw bytes."""
    h = _HASH_SEED
    for byte in text.encode(PASSTHROUGH_CODEC):
        h = (h * 33 + byte) & _HASH_MASK
    return h


class DedupFilter:
    """
    Remembers up to `capacity` hashes of primary-field text.

    A hash match counts as a duplicate without comparing the strings, so
    colliding texts are reported as duplicates. Once full, new hashes are no
    longer recorded and repeats of them go undetected.
    """

    def __init__(self, capacity: int) -> None:
        self.capacity = capacity
        self._seen: Set[int] = set()

    def __len__(self) -> int:
        return len(self._seen)

    @property
    def full(self) -> bool:
        return len(self._seen) >= self.capacity

    def seen(self, text: str) -> bool:
        """Report whether `text` was seen before, recording it if there is room."""
        h = hash_text(text)
        if h in self._seen:
            return True
        if not self.full:
            self._seen.add(h)
        return False
