# src/keymaze/solver/memo.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterator, Optional, Tuple

from ..maze.types import KeyId, SubProblem


@dataclass(frozen=True)
class CacheEntry:
    cost: int
    predecessor: Optional[KeyId]                    # last key of the state this came from; None = start
    last_by_quadrant: Tuple[Optional[KeyId], ...] = ()


class SubsetCache:
    """
    Transposition table for the subset DP: SubProblem -> CacheEntry, sharded by
    subset size. Owned by one solve; cleared once the answer is extracted.
    """

    def __init__(self) -> None:
        self._levels: Dict[int, Dict[SubProblem, CacheEntry]] = {}

    def get(self, state: SubProblem) -> Optional[CacheEntry]:
        level = self._levels.get(len(state.collected))
        return None if level is None else level.get(state)

    def put(self, state: SubProblem, entry: CacheEntry) -> bool:
        """Store entry unless an equal-or-cheaper one is already there. Returns True if stored."""
        level = self._levels.setdefault(len(state.collected), {})
        hit = level.get(state)
        if hit is not None and hit.cost <= entry.cost:
            return False
        level[state] = entry
        return True

    def level(self, size: int) -> Dict[SubProblem, CacheEntry]:
        return self._levels.get(size, {})

    def items(self) -> Iterator[Tuple[SubProblem, CacheEntry]]:
        for size in sorted(self._levels):
            yield from self._levels[size].items()

    def clear(self) -> None:
        self._levels.clear()

    def __len__(self) -> int:
        return sum(len(v) for v in self._levels.values())
