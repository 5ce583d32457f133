# src/keymaze/solver/metrics.py
from __future__ import annotations
from typing import List, Dict, Any
import statistics as stats
from ..maze.types import SolveResult

def summarize(results: List[SolveResult]) -> Dict[str, Any]:
    costs = [r.total_cost for r in results]
    keys = [r.num_keys for r in results]
    states = [r.states_resolved for r in results]
    return {
        "mazes": len(results),
        "mean_cost": stats.mean(costs) if costs else None,
        "median_cost": stats.median(costs) if costs else None,
        "max_cost": max(costs) if costs else None,
        "mean_keys": stats.mean(keys) if keys else None,
        "total_states": sum(states),
    }
