# src/keymaze/maze/errors.py
from __future__ import annotations
from typing import Optional


class KeyMazeError(Exception):
    """Base class for every fatal or reportable solver condition."""


class ParseError(KeyMazeError, ValueError):
    def __init__(self, message: str, row: Optional[int] = None, col: Optional[int] = None):
        self.row = row
        self.col = col
        where = f" (row {row}, col {col})" if row is not None and col is not None else ""
        super().__init__(f"{message}{where}")


class UnreachablePair(KeyMazeError, LookupError):
    def __init__(self, a: int, b: int):
        self.a = a
        self.b = b
        super().__init__(f"no path between ids {a} and {b}")


class PartitionFailure(KeyMazeError, RuntimeError):
    def __init__(self, unassigned, quadrants: int = 4):
        self.unassigned = list(unassigned)
        super().__init__(
            f"maze does not split into {quadrants} independent regions; "
            f"unassigned keys: {self.unassigned}"
        )


class NoSolution(KeyMazeError, RuntimeError):
    pass
