# src/keymaze/solver/symmetric_table.py
from __future__ import annotations
from typing import Generic, Iterator, List, Tuple, TypeVar

V = TypeVar("V")


class SymmetricTable(Generic[V]):
    """
    Values for unordered id pairs (a, b) with 0 <= a, b < n, packed triangularly.

    The slot for a pair is hi*(hi+1)//2 + lo with hi = max(a, b), lo = min(a, b),
    so get(a, b) and get(b, a) always read the same slot. Diagonal pairs (a, a)
    have a slot too.
    """

    def __init__(self, n: int, fill: V):
        if n < 0:
            raise ValueError("n must be non-negative")
        self.n = n
        self._data: List[V] = [fill] * (n * (n + 1) // 2)

    def index(self, a: int, b: int) -> int:
        if not (0 <= a < self.n and 0 <= b < self.n):
            raise IndexError(f"pair ({a}, {b}) outside table of size {self.n}")
        hi, lo = (a, b) if a >= b else (b, a)
        return hi * (hi + 1) // 2 + lo

    def get(self, a: int, b: int) -> V:
        return self._data[self.index(a, b)]

    def set(self, a: int, b: int, value: V) -> None:
        self._data[self.index(a, b)] = value

    def pairs(self) -> Iterator[Tuple[int, int, V]]:
        """(hi, lo, value) for every slot, in storage order."""
        i = 0
        for hi in range(self.n):
            for lo in range(hi + 1):
                yield hi, lo, self._data[i]
                i += 1

    def __len__(self) -> int:
        return len(self._data)
