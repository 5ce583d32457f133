# src/keymaze/solver/reachability.py
from __future__ import annotations
from collections import deque
from typing import Deque, List, Optional, Tuple

import numpy as np

from ..maze.types import Grid, CellKind, Coordinate, PairInfo
from ..maze.errors import ParseError, UnreachablePair
from .small_set import SmallSet
from .symmetric_table import SymmetricTable
from .debug import progress

PairTable = SymmetricTable[Optional[PairInfo]]

# down, up, right, left
_DIRECTIONS = ((1, 0), (-1, 0), (0, 1), (0, -1))


def compute_pair_table(grid: Grid) -> PairTable:
    """
    Shortest distance and gate dependencies between every pair of keys, and
    between each key and the start.

    One BFS runs from every key cell and every start cell. All start cells share
    grid.start_id, so two of them must never share a region: that raises
    ParseError naming both cells. Pairs that never connect keep the fill value None.
    """
    start_id = grid.start_id
    table: PairTable = SymmetricTable(start_id + 1, None)

    origins: List[Tuple[int, Coordinate]] = [(k, pos) for k, pos in sorted(grid.keys.items())]
    origins += [(start_id, pos) for pos in grid.starts]

    for origin_id, origin in origins:
        other_starts = _bfs_from(grid, origin_id, origin, table)
        if origin_id == start_id and other_starts:
            r, c = other_starts[0]
            raise ParseError(f"start cells {origin} and {other_starts[0]} share a region", row=r, col=c)

    written = sum(1 for _, _, info in table.pairs() if info is not None)
    progress("pairs", f"🔗 Pair table: {len(grid.keys)} keys, {len(grid.starts)} start cell(s), {written} reachable pairs")
    return table


def _bfs_from(grid: Grid, origin_id: int, origin: Coordinate, table: PairTable) -> List[Coordinate]:
    """
    Unit-weight BFS over passable cells. Each frontier cell carries the gates
    crossed on the path that first discovered it; later equal-length paths with
    a different gate set are not considered.
    Returns the start cells reached other than the origin, nearest first.
    """
    start_id = grid.start_id
    R, C = grid.shape
    seen = np.zeros((R, C), dtype=bool)
    seen[origin] = True

    reached_starts: List[Coordinate] = []
    q: Deque[Tuple[Coordinate, int, SmallSet]] = deque([(origin, 0, SmallSet())])
    while q:
        (r, c), dist, gates = q.popleft()

        cell = grid.at((r, c))
        if dist > 0:
            if cell.kind is CellKind.KEY:
                dest_id = cell.id
            elif cell.kind is CellKind.START:
                dest_id = start_id
                reached_starts.append((r, c))
            else:
                dest_id = None
            if dest_id is not None and dest_id != origin_id:
                table.set(origin_id, dest_id, PairInfo(distance=dist, required_gates=gates))

        for dr, dc in _DIRECTIONS:
            rr, cc = r + dr, c + dc
            nxt = grid.at((rr, cc))
            if nxt is None or not nxt.passable or seen[rr, cc]:
                continue
            seen[rr, cc] = True
            nxt_gates = gates.insert(nxt.id) if nxt.kind is CellKind.GATE else gates
            q.append(((rr, cc), dist + 1, nxt_gates))

    return reached_starts


def require_pair(table: PairTable, a: int, b: int) -> PairInfo:
    """Entry for (a, b); UnreachablePair when the BFS never connected them."""
    info = table.get(a, b)
    if info is None:
        raise UnreachablePair(a, b)
    return info
