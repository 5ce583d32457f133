# src/keymaze/solver/replay.py
from __future__ import annotations
from typing import Dict, List, Optional, Sequence

from ..maze.types import KeyId, QuadrantMap, ReplayResult, ReplayStep
from ..maze.errors import NoSolution
from .small_set import SmallSet
from .reachability import PairTable, require_pair
from .debug import progress


def replay_order(table: PairTable, start_id: int, order: Sequence[KeyId],
                 quadrants: Optional[QuadrantMap] = None) -> ReplayResult:
    """
    Walk a pickup order through the pair table and total its cost.

    With `quadrants`, each key is walked to from the last key of its own
    quadrant (or the start); otherwise from the previous key.
    Raises UnreachablePair for a missing leg and NoSolution when a leg needs a
    gate whose key is not held yet.
    """
    held = SmallSet()
    last_in: Dict[int, int] = {}
    steps: List[ReplayStep] = []
    total = 0
    prev = start_id

    for k in order:
        if k in held:
            raise NoSolution(f"key {k} appears twice in the order")
        q = quadrants[k] if quadrants is not None else None
        origin = last_in.get(q, start_id) if q is not None else prev

        info = require_pair(table, origin, k)
        if not info.required_gates.is_subset_of(held):
            locked = [g for g in info.required_gates if g not in held]
            raise NoSolution(f"reaching key {k} from {origin} needs gates {locked} still locked")

        steps.append(ReplayStep(key=k, origin=origin, distance=info.distance,
                                required_gates=list(info.required_gates), quadrant=q))
        total += info.distance
        held = held.insert(k)
        if q is not None:
            last_in[q] = k
        prev = k
        progress("replay", f"🔑 {origin} -> {k}: +{info.distance} (total {total})")

    return ReplayResult(total_cost=total, steps=steps, collected=list(held))
