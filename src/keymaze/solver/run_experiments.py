#!/usr/bin/env python3
"""
Solve every maze under data/mazes in each agent mode and tabulate the results.
"""

import argparse
import time
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import pandas as pd

from ..maze.types import SolverConfig, SolveResult
from ..maze.errors import KeyMazeError
from ..maze.grid_parser import parse_grid
from ..utils.path import get_maze_dir, get_project_root
from .simulator import solve_grid
from .metrics import summarize
from .debug import set_debug

MODES: List[Tuple[str, SolverConfig]] = [
    ("single", SolverConfig(agents=1, progress=False)),
    ("four", SolverConfig(agents=4, progress=False)),
    ("split", SolverConfig(agents=4, split_vault=True, progress=False)),
]


def run_experiments(paths: Sequence[Path], modes: Sequence[Tuple[str, SolverConfig]] = MODES) -> pd.DataFrame:
    """One row per (maze, mode); failed solves keep the error kind in `status`."""
    rows = []
    results: List[SolveResult] = []
    for path in paths:
        grid = parse_grid(path.read_text())
        for mode_name, cfg in modes:
            start = time.time()
            try:
                result = solve_grid(grid, cfg)
            except KeyMazeError as e:
                print(f"  {path.name} [{mode_name}]: {e.__class__.__name__} - {e}")
                rows.append({"maze": path.name, "mode": mode_name, "keys": len(grid.keys),
                             "cost": None, "order": None, "states": None,
                             "seconds": time.time() - start, "status": e.__class__.__name__})
                continue
            elapsed = time.time() - start
            print(f"  {path.name} [{mode_name}]: {result.total_cost} moves in {elapsed:.2f}s")
            results.append(result)
            rows.append({"maze": path.name, "mode": mode_name, "keys": result.num_keys,
                         "cost": result.total_cost, "order": result.order_letters,
                         "states": result.states_resolved, "seconds": elapsed, "status": "ok"})

    if results:
        print(f"📊 Summary: {summarize(results)}")
    return pd.DataFrame(rows, columns=["maze", "mode", "keys", "cost", "order", "states", "seconds", "status"])


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Batch-solve maze files")
    parser.add_argument("--maze-dir", type=Path, default=get_maze_dir())
    parser.add_argument("--csv", type=Path, default=None,
                        help="write the table here (e.g. data/processed/results.csv)")
    args = parser.parse_args(argv)

    set_debug(False)
    paths = sorted(args.maze_dir.glob("*.txt"))
    print(f"🧪 Solving {len(paths)} mazes from {args.maze_dir}")
    print("=" * 50)
    df = run_experiments(paths)
    print(df.to_string(index=False))

    if args.csv is not None:
        out = args.csv if args.csv.is_absolute() else get_project_root() / args.csv
        out.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(out, index=False)
        print(f"✅ Wrote {out}")


if __name__ == "__main__":
    main()
