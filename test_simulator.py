#!/usr/bin/env python3
"""
Test the solve facade, the command line entry point and the batch runner.
"""

import sys
from pathlib import Path

import pytest

# Add src to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root / "src"))

from keymaze.maze.types import SolverConfig
from keymaze.maze.errors import NoSolution, ParseError, PartitionFailure
from keymaze.solver import simulator
from keymaze.solver.simulator import solve_text, main
from keymaze.solver.subset_dp import SingleAgentSolver
from keymaze.solver.run_experiments import run_experiments
from keymaze.solver.metrics import summarize
from keymaze.solver.debug import progress, set_debug, is_debug_enabled

MAZE_DIR = project_root / "data" / "mazes"


@pytest.fixture(autouse=True)
def quiet():
    set_debug(False)
    yield
    set_debug(False)


def test_solve_text_single_agent():
    result = solve_text("#########\n#b.A.@.a#\n#########")
    assert result.total_cost == 8
    assert result.agents == 1
    assert result.num_keys == 2


def test_solve_text_split_vault():
    text = (MAZE_DIR / "vault_24.txt").read_text()
    result = solve_text(text, SolverConfig(agents=4, split_vault=True))
    assert result.total_cost == 24
    assert result.agents == 4
    assert sorted(result.quadrants.values()) == [0, 1, 2, 3]


def test_single_agent_rejects_several_starts():
    text = (MAZE_DIR / "cross_11.txt").read_text()
    with pytest.raises(ParseError):
        solve_text(text)
    assert solve_text(text, SolverConfig(agents=4)).total_cost == 11


def test_four_agents_reject_five_regions():
    with pytest.raises(PartitionFailure):
        solve_text("###########\n#a#b#c#d#e#\n#@#.#.#.#.#\n###########", SolverConfig(agents=4))


def test_four_agents_reject_starts_in_one_region():
    with pytest.raises(ParseError):
        solve_text("###########\n#@.a.....@#\n###########", SolverConfig(agents=4, progress=False))


def test_solve_checks_answer_against_replayed_order(monkeypatch):
    class Miscounting(SingleAgentSolver):
        def solve(self, keep_cache=False):
            result = super().solve(keep_cache)
            result.total_cost -= 1
            return result

    monkeypatch.setattr(simulator, "SingleAgentSolver", Miscounting)
    with pytest.raises(NoSolution) as exc:
        solve_text("#########\n#b.A.@.a#\n#########")
    assert "replays to 8" in str(exc.value)


def test_progress_lines_are_tagged_by_stage(capsys):
    set_debug(True)
    solve_text("#########\n#b.A.@.a#\n#########")
    lines = capsys.readouterr().out.strip().splitlines()
    stages = [line.split("]")[0].lstrip("[") for line in lines]
    assert stages == ["maze", "pairs", "dp", "dp", "replay", "replay", "result"]
    assert lines[4] == "[replay] 🔑 2 -> 0: +2 (total 2)"
    assert lines[5] == "[replay] 🔑 0 -> 1: +6 (total 8)"


def test_progress_rejects_unknown_stage(capsys):
    with pytest.raises(ValueError):
        progress("bfs", "anything")
    set_debug(False)
    progress("dp", "hidden")
    assert capsys.readouterr().out == ""


def test_bad_agent_count():
    with pytest.raises(ValueError):
        solve_text("@.a", SolverConfig(agents=2))


def test_main_prints_answer(capsys):
    assert main([str(MAZE_DIR / "corridor_8.txt"), "--quiet"]) == 0
    assert capsys.readouterr().out == "8\n"
    assert not is_debug_enabled()


def test_main_four_agents(capsys):
    assert main([str(MAZE_DIR / "four_rooms_8.txt"), "--agents", "4", "--quiet"]) == 0
    assert capsys.readouterr().out.strip() == "8"


def test_main_split_flag(capsys):
    assert main([str(MAZE_DIR / "vault_24.txt"), "--split", "--quiet"]) == 0
    assert capsys.readouterr().out.strip() == "24"


def test_main_reports_parse_error(tmp_path, capsys):
    bad = tmp_path / "bad.txt"
    bad.write_text("#@?a#\n")
    assert main([str(bad), "--quiet"]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "ParseError" in captured.err


def test_main_reports_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "nope.txt"), "--quiet"]) == 1
    assert "Cannot read maze" in capsys.readouterr().err


def test_main_progress_lines(capsys):
    assert main([str(MAZE_DIR / "corridor_8.txt"), "--debug"]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert lines[-1] == "8"
    assert sum(1 for line in lines if "Level" in line) == 2


def test_run_experiments_table():
    paths = [MAZE_DIR / "corridor_8.txt", MAZE_DIR / "cross_11.txt"]
    df = run_experiments(paths)

    assert list(df.columns) == ["maze", "mode", "keys", "cost", "order", "states", "seconds", "status"]
    assert len(df) == 6
    row = df[(df.maze == "corridor_8.txt") & (df["mode"] == "single")].iloc[0]
    assert row["cost"] == 8 and row["status"] == "ok" and row["order"] == "ab"
    cross = df[df.maze == "cross_11.txt"].set_index("mode")
    assert cross.loc["single", "status"] == "ParseError"
    assert cross.loc["four", "cost"] == 11
    assert cross.loc["split", "status"] == "ParseError"


def test_summarize():
    results = [solve_text("@.a"), solve_text("#########\n#b.A.@.a#\n#########")]
    summary = summarize(results)
    assert summary["mazes"] == 2
    assert summary["mean_cost"] == 5
    assert summary["max_cost"] == 8
    assert summarize([])["mean_cost"] is None


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
