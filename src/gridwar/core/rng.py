"""Seeded randomness for deck shuffles and spawn square picks.

Every random decision of a battle goes through one ``RNG`` so that a stage
replayed with the same seed deals the same hand and spawns on the same squares.
"""
from __future__ import annotations

from random import Random
from typing import List, MutableSequence, Sequence, TypeVar

T = TypeVar("T")


class RNG:
    def __init__(self, seed: int) -> None:
        self._random = Random(seed)

    def randint(self, low: int, high: int) -> int:
        """Inclusive on both ends."""
        return self._random.randint(low, high)

    def choice(self, items: Sequence[T]) -> T:
        if not items:
            raise ValueError("Cannot pick from an empty sequence.")
        return self._random.choice(items)

    def sample(self, items: Sequence[T], count: int) -> List[T]:
        """Pick ``count`` distinct entries, e.g. free squares for a spawn wave."""
        if count > len(items):
            raise ValueError(f"Cannot pick {count} distinct entries out of {len(items)}.")
        return self._random.sample(list(items), count)

    def shuffle(self, items: MutableSequence[T]) -> None:
        """Shuffle ``items`` in place; used for the opening deck order."""
        self._random.shuffle(items)
