# src/keymaze/solver/small_set.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Iterator

CAPACITY = 32


def _check(i: int) -> None:
    if not 0 <= i < CAPACITY:
        raise ValueError(f"id {i} outside small-set range 0..{CAPACITY - 1}")


@dataclass(frozen=True, order=True)
class SmallSet:
    """
    Immutable bounded set of small ids, stored as a bit mask.
    insert/remove return a new set; nothing mutates in place.
    """
    mask: int = 0

    @classmethod
    def from_ids(cls, ids: Iterable[int]) -> "SmallSet":
        m = 0
        for i in ids:
            _check(i)
            m |= (1 << i)
        return cls(m)

    def insert(self, i: int) -> "SmallSet":
        _check(i)
        return SmallSet(self.mask | (1 << i))

    def remove(self, i: int) -> "SmallSet":
        _check(i)
        return SmallSet(self.mask & ~(1 << i))

    def is_empty(self) -> bool:
        return self.mask == 0

    def is_subset_of(self, other: "SmallSet") -> bool:
        return self.mask & ~other.mask == 0

    def iterate(self) -> Iterator[int]:
        """Ascending ids; each call starts a fresh pass."""
        m = self.mask
        idx = 0
        while m:
            if m & 1:
                yield idx
            m >>= 1; idx += 1

    def __iter__(self) -> Iterator[int]:
        return self.iterate()

    def __contains__(self, i: object) -> bool:
        return isinstance(i, int) and 0 <= i < CAPACITY and bool((self.mask >> i) & 1)

    def __len__(self) -> int:
        return bin(self.mask).count("1")

    def __repr__(self) -> str:
        return f"SmallSet({list(self.iterate())})"
