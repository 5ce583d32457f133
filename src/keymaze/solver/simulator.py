#!/usr/bin/env python3
# src/keymaze/solver/simulator.py — solve one maze from text or a stream

from __future__ import annotations
import argparse
import sys
from pathlib import Path
from typing import List, Optional

from ..maze.types import Grid, SolverConfig, SolveResult
from ..maze.errors import KeyMazeError, NoSolution, ParseError
from ..maze.grid_parser import parse_grid, read_grid, split_vault, pretty_print_grid
from .reachability import compute_pair_table
from .partition import assign_quadrants
from .subset_dp import SingleAgentSolver, FourAgentSolver
from .replay import replay_order
from .debug import progress, is_debug_enabled, set_debug


def solve_grid(grid: Grid, cfg: Optional[SolverConfig] = None) -> SolveResult:
    """Grid -> pair table -> (quadrants ->) subset DP -> minimal total moves."""
    cfg = cfg or SolverConfig()
    if cfg.agents not in (1, 4):
        raise ValueError(f"agents must be 1 or 4, got {cfg.agents}")

    if cfg.split_vault:
        grid = split_vault(grid)
    if cfg.agents == 1 and len(grid.starts) != 1:
        raise ParseError(f"a single agent needs exactly one start, found {len(grid.starts)}")

    progress("maze", f"🔍 Maze {grid.shape[0]}x{grid.shape[1]}, keys: "
                      f"{''.join(chr(ord('a') + k) for k in grid.key_ids) or '-'}")
    if is_debug_enabled() and cfg.split_vault:
        pretty_print_grid(grid)

    table = compute_pair_table(grid)
    if cfg.agents == 1:
        solver = SingleAgentSolver(table, grid.key_ids, grid.start_id, cfg)
    else:
        quadrants = assign_quadrants(grid.key_ids, table, cfg.quadrants)
        solver = FourAgentSolver(table, grid.key_ids, grid.start_id, quadrants, cfg)

    result = solver.solve()
    replay = replay_order(table, grid.start_id, result.order, result.quadrants or None)
    if replay.total_cost != result.total_cost:
        raise NoSolution(f"order {result.order_letters or '-'} replays to {replay.total_cost} moves, "
                         f"solver reported {result.total_cost}")
    progress("result", f"🎯 Result: {result.total_cost} moves, order {result.order_letters or '-'}")
    return result


def solve_text(text: str, cfg: Optional[SolverConfig] = None) -> SolveResult:
    return solve_grid(parse_grid(text), cfg)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Minimum moves to collect every key in a gated maze")
    parser.add_argument("maze", nargs="?", default="-",
                        help="maze file, or '-' to read standard input (default)")
    parser.add_argument("--agents", type=int, choices=(1, 4), default=1,
                        help="one agent, or four agents with one quadrant each")
    parser.add_argument("--split", action="store_true",
                        help="wall off the start into four starts before solving (implies --agents 4)")
    parser.add_argument("--debug", action="store_true", help="print progress lines")
    parser.add_argument("--quiet", action="store_true", help="print only the answer")
    args = parser.parse_args(argv)

    if args.debug:
        set_debug(True)
    elif args.quiet:
        set_debug(False)

    cfg = SolverConfig(agents=4 if args.split else args.agents, split_vault=args.split)
    try:
        if args.maze == "-":
            grid = read_grid(sys.stdin.buffer)
        else:
            with open(Path(args.maze), "rb") as f:
                grid = read_grid(f)
        result = solve_grid(grid, cfg)
    except KeyMazeError as e:
        print(f"❌ {e.__class__.__name__}: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"❌ Cannot read maze: {e}", file=sys.stderr)
        return 1

    print(result.total_cost)
    return 0


if __name__ == "__main__":
    sys.exit(main())
