# src/keymaze/solver/partition.py
from __future__ import annotations
from typing import Dict, Optional, Sequence

from ..maze.types import KeyId, QuadrantMap
from ..maze.errors import PartitionFailure
from .reachability import PairTable
from .debug import progress


def assign_quadrants(key_ids: Sequence[KeyId], table: PairTable, quadrants: int = 4) -> QuadrantMap:
    """
    Split the keys into `quadrants` independent regions.

    Region q holds its exemplar and every key with a table entry against the
    exemplar (gates are ignored for this, the BFS walks through them). The
    first key still unassigned during the scan is the next exemplar.
    Raises PartitionFailure if keys remain after the last region.
    """
    keys = sorted(key_ids)
    assignment: Dict[KeyId, int] = {}
    exemplar: Optional[KeyId] = keys[0] if keys else None

    for q in range(quadrants):
        if exemplar is None:
            break
        next_exemplar: Optional[KeyId] = None
        for k in keys:
            if k in assignment:
                continue
            if k == exemplar or table.get(exemplar, k) is not None:
                assignment[k] = q
            elif next_exemplar is None:
                next_exemplar = k
        exemplar = next_exemplar

    unassigned = [k for k in keys if k not in assignment]
    if unassigned:
        raise PartitionFailure(unassigned, quadrants)

    sizes = [sum(1 for v in assignment.values() if v == q) for q in range(quadrants)]
    progress("quadrants", f"🧭 Quadrants: key counts {sizes}")
    return assignment
