# src/keymaze/maze/types.py
"""
Shared data types for the key-collection maze solver.
This module contains the common classes used by the parser, the
reachability pass and the subset solver to avoid circular imports.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple, TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from ..solver.small_set import SmallSet

# Type aliases
KeyId = int
Coordinate = Tuple[int, int]                    # (row, col)
QuadrantMap = Dict[KeyId, int]

WALL = ord("#")
FLOOR = ord(".")
START = ord("@")


class CellKind(Enum):
    WALL = "wall"
    FLOOR = "floor"
    KEY = "key"
    GATE = "gate"
    START = "start"


@dataclass(frozen=True)
class Cell:
    kind: CellKind
    id: Optional[KeyId] = None                  # set for KEY and GATE only

    @property
    def passable(self) -> bool:
        return self.kind is not CellKind.WALL


def decode_glyph(glyph: int) -> Optional[Cell]:
    """Map one byte of maze text to a Cell; None if the byte is not in the alphabet."""
    if glyph == WALL:
        return Cell(CellKind.WALL)
    if glyph == FLOOR:
        return Cell(CellKind.FLOOR)
    if glyph == START:
        return Cell(CellKind.START)
    if ord("a") <= glyph <= ord("z"):
        return Cell(CellKind.KEY, glyph - ord("a"))
    if ord("A") <= glyph <= ord("Z"):
        return Cell(CellKind.GATE, glyph - ord("A"))
    return None


_CELLS: Dict[int, Optional[Cell]] = {g: decode_glyph(g) for g in range(256)}


@dataclass(frozen=True, eq=False)
class Grid:
    """
    Immutable maze. `glyphs` holds the raw maze bytes (uint8, rows x cols);
    the index dicts are built once by the parser.
    """
    glyphs: np.ndarray
    keys: Dict[KeyId, Coordinate]
    gates: Dict[KeyId, List[Coordinate]]
    starts: List[Coordinate]

    @property
    def shape(self) -> Tuple[int, int]:
        return self.glyphs.shape

    @property
    def key_ids(self) -> List[KeyId]:
        return sorted(self.keys)

    @property
    def start_id(self) -> int:
        """Synthetic id shared by every start cell: one past the largest key id."""
        return max(self.keys) + 1 if self.keys else 0

    def at(self, coord: Coordinate) -> Optional[Cell]:
        r, c = coord
        R, C = self.glyphs.shape
        if not (0 <= r < R and 0 <= c < C):
            return None
        return _CELLS[int(self.glyphs[r, c])]

    def rows(self) -> List[str]:
        return ["".join(chr(g) for g in row) for row in self.glyphs.tolist()]


@dataclass(frozen=True)
class PairInfo:
    distance: int
    required_gates: "SmallSet"


@dataclass(frozen=True)
class SubProblem:
    """DP state: exactly `collected` is held, `last_key` was picked up most recently."""
    collected: "SmallSet"
    last_key: KeyId


@dataclass(frozen=True)
class QuadSubProblem:
    """Four-agent DP state; a None slot means that quadrant's agent is still at the start."""
    collected: "SmallSet"
    last_by_quadrant: Tuple[Optional[KeyId], ...]


@dataclass
class SolverConfig:
    agents: int = 1
    quadrants: int = 4
    split_vault: bool = False
    progress: bool = True


@dataclass
class SolveResult:
    total_cost: int
    order: List[KeyId]
    agents: int
    num_keys: int
    quadrants: QuadrantMap = field(default_factory=dict)
    states_resolved: int = 0

    @property
    def order_letters(self) -> str:
        return "".join(chr(ord("a") + k) for k in self.order)


@dataclass
class ReplayStep:
    key: KeyId
    origin: int                                 # key id, or the start id
    distance: int
    required_gates: List[KeyId]
    quadrant: Optional[int] = None


@dataclass
class ReplayResult:
    total_cost: int
    steps: List[ReplayStep]
    collected: List[KeyId]
