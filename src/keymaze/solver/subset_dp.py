# src/keymaze/solver/subset_dp.py
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Iterator, List, Optional, Sequence, Tuple

from ..maze.types import KeyId, QuadrantMap, QuadSubProblem, SolverConfig, SolveResult, SubProblem
from ..maze.errors import NoSolution
from .small_set import SmallSet
from .memo import CacheEntry, SubsetCache
from .reachability import PairTable
from .debug import progress


# ---------- subset enumeration ----------
def subsets_of_size(ids: Sequence[KeyId], size: int) -> Iterator[SmallSet]:
    """
    All size-`size` subsets of `ids`, built by extending ascending index
    combinations. Each call returns a fresh generator.
    """
    pool = sorted(ids)

    def extend(first: int, chosen: SmallSet, remaining: int) -> Iterator[SmallSet]:
        if remaining == 0:
            yield chosen
            return
        for i in range(first, len(pool) - remaining + 1):
            yield from extend(i + 1, chosen.insert(pool[i]), remaining - 1)

    return extend(0, SmallSet(), size)


# ---------- solver interface ----------
class SubsetSolver(ABC):
    """
    Exact DP over subsets of collected keys.

    dp(S, k) is the cheapest way to have collected exactly S with k picked up
    last. Levels are resolved by increasing |S|, so every state only reads
    states one level down. A transition into k is allowed only when every gate
    on the stored path to k is opened by a key in S minus k.
    """
    agents: int = 1

    def __init__(self, table: PairTable, key_ids: Sequence[KeyId], start_id: int,
                 cfg: Optional[SolverConfig] = None):
        self.table = table
        self.key_ids = sorted(key_ids)
        self.start_id = start_id
        self.cfg = cfg or SolverConfig(agents=self.agents)
        self.cache = SubsetCache()

    @abstractmethod
    def origin_of(self, prev_key: Optional[KeyId], prev: Optional[CacheEntry], k: KeyId) -> int:
        """Table id the agent collecting k walks from."""
        ...

    def advance(self, prev: Optional[CacheEntry], k: KeyId) -> Tuple[Optional[KeyId], ...]:
        return ()

    def transition(self, rest: SmallSet, prev_key: Optional[KeyId], prev: Optional[CacheEntry],
                   k: KeyId) -> Optional[CacheEntry]:
        origin = self.origin_of(prev_key, prev, k)
        info = self.table.get(origin, k)
        if info is None:
            return None
        if not info.required_gates.is_subset_of(rest):
            return None
        base = prev.cost if prev is not None else 0
        return CacheEntry(cost=base + info.distance, predecessor=prev_key,
                          last_by_quadrant=self.advance(prev, k))

    def resolve(self, subset: SmallSet, k: KeyId) -> Optional[CacheEntry]:
        rest = subset.remove(k)
        if rest.is_empty():
            return self.transition(rest, None, None, k)

        best: Optional[CacheEntry] = None
        for j in rest:
            prev = self.cache.get(SubProblem(rest, j))
            if prev is None:
                continue
            cand = self.transition(rest, j, prev, k)
            if cand is not None and (best is None or cand.cost < best.cost):
                best = cand
        return best

    def solve(self, keep_cache: bool = False) -> SolveResult:
        n = len(self.key_ids)
        if n == 0:
            return self._result(0, [])

        for size in range(1, n + 1):
            resolved = 0
            for subset in subsets_of_size(self.key_ids, size):
                for k in subset:
                    entry = self.resolve(subset, k)
                    if entry is not None:
                        self.cache.put(SubProblem(subset, k), entry)
                        resolved += 1
            if self.cfg.progress:
                progress("dp", f"📐 Level {size}/{n}: {resolved} states resolved")
            if resolved == 0:
                break

        full = SmallSet.from_ids(self.key_ids)
        best_k: Optional[KeyId] = None
        best: Optional[CacheEntry] = None
        for k in full:
            hit = self.cache.get(SubProblem(full, k))
            if hit is not None and (best is None or hit.cost < best.cost):
                best, best_k = hit, k
        if best is None:
            self.cache.clear()
            raise NoSolution(f"no gate-respecting order collects all {n} keys")

        result = self._result(best.cost, self.collection_order(full, best_k))
        result.states_resolved = len(self.cache)
        if not keep_cache:
            self.cache.clear()
        return result

    def collection_order(self, full: SmallSet, last: KeyId) -> List[KeyId]:
        """Follow predecessors back from (full, last); returns keys in pickup order."""
        order: List[KeyId] = []
        subset, k = full, last
        while True:
            entry = self.cache.get(SubProblem(subset, k))
            order.append(k)
            if entry is None or entry.predecessor is None:
                break
            subset, k = subset.remove(k), entry.predecessor
        order.reverse()
        return order

    def _result(self, cost: int, order: List[KeyId]) -> SolveResult:
        return SolveResult(total_cost=cost, order=order, agents=self.agents, num_keys=len(self.key_ids))


# ---------- single agent ----------
class SingleAgentSolver(SubsetSolver):
    """The one agent always continues from the key it picked up last."""
    agents = 1

    def origin_of(self, prev_key: Optional[KeyId], prev: Optional[CacheEntry], k: KeyId) -> int:
        return self.start_id if prev_key is None else prev_key


# ---------- four agents ----------
class FourAgentSolver(SubsetSolver):
    """
    One agent per quadrant. Collecting k moves only the agent of k's quadrant,
    from that quadrant's last key (or the start); the other slots carry over.
    Each (S, k) state keeps the positions of its cheapest predecessor.
    """
    agents = 4

    def __init__(self, table: PairTable, key_ids: Sequence[KeyId], start_id: int,
                 quadrants: QuadrantMap, cfg: Optional[SolverConfig] = None):
        super().__init__(table, key_ids, start_id, cfg)
        self.quadrants = quadrants
        self.n_quadrants = self.cfg.quadrants

    def _positions(self, prev: Optional[CacheEntry]) -> Tuple[Optional[KeyId], ...]:
        if prev is None or not prev.last_by_quadrant:
            return (None,) * self.n_quadrants
        return prev.last_by_quadrant

    def origin_of(self, prev_key: Optional[KeyId], prev: Optional[CacheEntry], k: KeyId) -> int:
        last = self._positions(prev)[self.quadrants[k]]
        return self.start_id if last is None else last

    def advance(self, prev: Optional[CacheEntry], k: KeyId) -> Tuple[Optional[KeyId], ...]:
        positions = list(self._positions(prev))
        positions[self.quadrants[k]] = k
        return tuple(positions)

    def state_of(self, subset: SmallSet, k: KeyId) -> Optional[QuadSubProblem]:
        entry = self.cache.get(SubProblem(subset, k))
        if entry is None:
            return None
        return QuadSubProblem(collected=subset, last_by_quadrant=entry.last_by_quadrant)

    def _result(self, cost: int, order: List[KeyId]) -> SolveResult:
        result = super()._result(cost, order)
        result.quadrants = dict(self.quadrants)
        return result
