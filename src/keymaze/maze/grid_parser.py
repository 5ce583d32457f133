# src/keymaze/maze/grid_parser.py
from __future__ import annotations
from typing import BinaryIO, Dict, List, TextIO, Union

import numpy as np

from .types import Grid, CellKind, Coordinate, KeyId, decode_glyph, WALL
from .errors import ParseError


# ------------------------- Reading -------------------------

def read_grid(stream: Union[TextIO, BinaryIO]) -> Grid:
    """Read the whole stream (text or bytes) and parse it as one maze."""
    data = stream.read()
    if isinstance(data, bytes):
        try:
            data = data.decode("ascii")
        except UnicodeDecodeError as e:
            raise ParseError(f"maze input is not ASCII: {e}") from e
    return parse_grid(data)


def parse_grid(text: str) -> Grid:
    """
    Decode maze text into a Grid.

    Alphabet:
      '#' wall, '.' floor, '@' start,
      'a'..'z' key (id = alphabet position), 'A'..'Z' gate opened by the same-letter key.

    Constraints enforced:
      * every row has the same width (blank leading/trailing lines are dropped)
      * each key letter appears at most once
      * at least one start cell
    """
    lines = [line.rstrip("\r") for line in text.split("\n")]
    while lines and not lines[-1].strip():
        lines.pop()
    while lines and not lines[0].strip():
        lines.pop(0)
    if not lines:
        raise ParseError("maze is empty")

    width = len(lines[0])
    for r, line in enumerate(lines):
        if len(line) != width:
            raise ParseError(f"row has width {len(line)}, expected {width}", row=r, col=min(len(line), width))

    keys: Dict[KeyId, Coordinate] = {}
    gates: Dict[KeyId, List[Coordinate]] = {}
    starts: List[Coordinate] = []
    glyphs = np.full((len(lines), width), WALL, dtype=np.uint8)

    for r, line in enumerate(lines):
        for c, ch in enumerate(line):
            code = ord(ch)
            cell = decode_glyph(code) if code < 256 else None
            if cell is None:
                raise ParseError(f"unrecognized maze character {ch!r}", row=r, col=c)
            glyphs[r, c] = code
            if cell.kind is CellKind.KEY:
                if cell.id in keys:
                    raise ParseError(f"key {ch!r} appears more than once", row=r, col=c)
                keys[cell.id] = (r, c)
            elif cell.kind is CellKind.GATE:
                gates.setdefault(cell.id, []).append((r, c))
            elif cell.kind is CellKind.START:
                starts.append((r, c))

    if not starts:
        raise ParseError("maze has no start cell '@'")

    glyphs.setflags(write=False)
    return Grid(glyphs=glyphs, keys=keys, gates=gates, starts=starts)


# ------------------------- Vault split -------------------------

_SPLIT_PATTERN = (
    "@#@",
    "###",
    "@#@",
)


def split_vault(grid: Grid) -> Grid:
    """
    Replace the 3x3 block around a lone start with four starts separated by walls:

        ...      @#@
        .@.  ->  ###
        ...      @#@

    The block must be open floor apart from the start itself.
    """
    if len(grid.starts) != 1:
        raise ParseError(f"vault split needs exactly one start, found {len(grid.starts)}")
    sr, sc = grid.starts[0]
    for dr in (-1, 0, 1):
        for dc in (-1, 0, 1):
            if (dr, dc) == (0, 0):
                continue
            cell = grid.at((sr + dr, sc + dc))
            if cell is None or cell.kind is not CellKind.FLOOR:
                raise ParseError("vault split needs open floor around the start", row=sr + dr, col=sc + dc)

    glyphs = grid.glyphs.copy()
    for dr, row in enumerate(_SPLIT_PATTERN):
        for dc, ch in enumerate(row):
            glyphs[sr - 1 + dr, sc - 1 + dc] = ord(ch)
    glyphs.setflags(write=False)

    starts = [(sr - 1, sc - 1), (sr - 1, sc + 1), (sr + 1, sc - 1), (sr + 1, sc + 1)]
    return Grid(glyphs=glyphs, keys=dict(grid.keys),
                gates={g: list(cs) for g, cs in grid.gates.items()}, starts=starts)


def pretty_print_grid(grid: Grid) -> None:
    """Quick ASCII preview of the maze as parsed."""
    for row in grid.rows():
        print(row)
