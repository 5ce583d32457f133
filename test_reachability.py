#!/usr/bin/env python3
"""
Test the pairwise BFS table and the quadrant partition.
"""

import sys
from pathlib import Path

import pytest

# Add src to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root / "src"))

from keymaze.maze.types import PairInfo
from keymaze.maze.errors import ParseError, PartitionFailure, UnreachablePair
from keymaze.maze.grid_parser import parse_grid, split_vault
from keymaze.solver.small_set import SmallSet
from keymaze.solver.symmetric_table import SymmetricTable
from keymaze.solver.reachability import compute_pair_table, require_pair, _bfs_from
from keymaze.solver.partition import assign_quadrants

CORRIDOR = "#########\n#b.A.@.a#\n#########"

FOUR_ROOMS = """\
#######
#a.#Cd#
##@#@##
#######
##@#@##
#cB#Ab#
#######
"""

VAULT = """\
###############
#d.ABC.#.....a#
######...######
######.@.######
######...######
#b.....#.....c#
###############
"""


def test_single_row_distance():
    grid = parse_grid("@.a")
    table = compute_pair_table(grid)
    assert table.get(grid.start_id, 0) == PairInfo(distance=2, required_gates=SmallSet())


def test_corridor_distances_and_gates():
    grid = parse_grid(CORRIDOR)
    table = compute_pair_table(grid)
    start = grid.start_id
    a, b = 0, 1

    assert table.get(start, a) == PairInfo(2, SmallSet())
    assert table.get(start, b) == PairInfo(4, SmallSet.from_ids([a]))
    assert table.get(a, b) == PairInfo(6, SmallSet.from_ids([a]))
    assert table.get(b, a) is table.get(a, b)


def test_required_gates_exclude_destination_key():
    grid = parse_grid(CORRIDOR)
    table = compute_pair_table(grid)
    for k in grid.key_ids:
        info = table.get(grid.start_id, k)
        assert k not in info.required_gates


def test_unreachable_pairs_stay_empty():
    grid = parse_grid("#####\n#@#a#\n#####")
    table = compute_pair_table(grid)
    assert table.get(grid.start_id, 0) is None
    with pytest.raises(UnreachablePair):
        require_pair(table, grid.start_id, 0)


def test_keys_and_gates_are_passable():
    # b sits behind a and gate C; the walk still goes through both
    grid = parse_grid("@aCb")
    table = compute_pair_table(grid)
    info = table.get(grid.start_id, 1)
    assert info.distance == 3
    assert list(info.required_gates) == [2]


def test_first_discovered_gate_set_is_kept():
    # Two shortest paths from @ to b: one through gate A, one clear.
    # The clear one is discovered first (down before right).
    grid = parse_grid("####\n#@A#\n#.b#\n####")
    table = compute_pair_table(grid)
    assert table.get(grid.start_id, 1) == PairInfo(2, SmallSet())

    # From b's own traversal the gated path is found first (up before left).
    from_b = SymmetricTable(grid.start_id + 1, None)
    _bfs_from(grid, 1, grid.keys[1], from_b)
    assert from_b.get(1, grid.start_id) == PairInfo(2, SmallSet.from_ids([0]))


def test_all_start_cells_share_one_id():
    grid = split_vault(parse_grid(VAULT))
    table = compute_pair_table(grid)
    start = grid.start_id
    for k in grid.key_ids:
        assert table.get(start, k).distance == 6
    assert table.get(start, 3).required_gates == SmallSet.from_ids([0, 1, 2])
    # keys in different quadrants never connect
    assert table.get(0, 3) is None


def test_starts_sharing_a_region_are_rejected():
    # Both @ cells map to one table id; the farther start would overwrite (start, a).
    grid = parse_grid("###########\n#@.a.....@#\n###########")
    with pytest.raises(ParseError) as exc:
        compute_pair_table(grid)
    assert (exc.value.row, exc.value.col) == (1, 9)
    assert "(1, 1)" in str(exc.value)


def test_partition_four_rooms():
    grid = parse_grid(FOUR_ROOMS)
    table = compute_pair_table(grid)
    quadrants = assign_quadrants(grid.key_ids, table)
    assert quadrants == {0: 0, 1: 1, 2: 2, 3: 3}


def test_partition_is_total_and_in_range():
    grid = split_vault(parse_grid(VAULT))
    table = compute_pair_table(grid)
    quadrants = assign_quadrants(grid.key_ids, table)
    assert set(quadrants) == set(grid.key_ids)
    assert all(0 <= q < 4 for q in quadrants.values())
    # a is in the top-right room, d in the top-left one
    assert quadrants[0] != quadrants[3]


def test_partition_connected_maze_uses_one_quadrant():
    grid = parse_grid(CORRIDOR)
    table = compute_pair_table(grid)
    assert assign_quadrants(grid.key_ids, table) == {0: 0, 1: 0}


def test_partition_groups_keys_by_exemplar_reachability():
    table = SymmetricTable(6, None)
    table.set(0, 2, PairInfo(1, SmallSet()))
    table.set(1, 4, PairInfo(1, SmallSet()))
    assert assign_quadrants([0, 1, 2, 3, 4], table) == {0: 0, 2: 0, 1: 1, 4: 1, 3: 2}


def test_partition_failure_with_five_regions():
    grid = parse_grid("###########\n#a#b#c#d#e#\n#@#.#.#.#.#\n###########")
    table = compute_pair_table(grid)
    with pytest.raises(PartitionFailure) as exc:
        assign_quadrants(grid.key_ids, table)
    assert exc.value.unassigned == [4]


def test_partition_of_no_keys():
    assert assign_quadrants([], SymmetricTable(1, None)) == {}


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
