from __future__ import annotations

import random

import pytest

from cubesolver.config import ENV_MAX_DEPTH
from cubesolver.cube import Cube
from cubesolver.search import NodePool, SearchNode, TwoPhaseSearch, solve
from cubesolver.tables import SolverTables


def test_solved_cube_needs_no_moves(tables: SolverTables) -> None:
    assert solve(Cube(), tables=tables) == ""


def test_rotated_solved_cube_needs_no_moves(tables: SolverTables) -> None:
    assert solve(Cube().move("x y"), tables=tables) == ""


def test_solves_commutator(tables: SolverTables) -> None:
    solution = solve(Cube().move("R U R' U'"), tables=tables)
    assert solution is not None
    assert len(solution.split(" ")) <= 22
    assert Cube().move("R U R' U'").move(solution).is_solved()


def test_solution_maps_back_through_whole_cube_rotation(tables: SolverTables) -> None:
    for algorithm in ("y R", "x R U", "z2 F' D", "x' y L2 B"):
        solution = solve(Cube().move(algorithm), tables=tables)
        assert solution is not None
        assert Cube().move(algorithm).move(solution).is_solved()


def test_subgroup_cube_is_solved_by_phase_two_alone(tables: SolverTables) -> None:
    solution = solve(Cube().move("U R2 D' F2"), tables=tables)
    assert solution is not None
    assert len(solution.split()) == 4
    assert all(move[0] in "UD" or move.endswith("2") for move in solution.split())
    assert Cube().move("U R2 D' F2").move(solution).is_solved()


def test_solves_scrambles(tables: SolverTables) -> None:
    rng = random.Random(31)
    names = ["U", "U2", "U'", "R", "R2", "R'", "F", "F2", "F'", "D", "D2", "D'", "L", "L2", "L'", "B", "B2", "B'"]
    for _ in range(3):
        algorithm = " ".join(rng.choice(names) for _ in range(12))
        solution = solve(Cube().move(algorithm), tables=tables)
        assert solution is not None
        assert len(solution.split()) <= 22
        assert Cube().move(algorithm).move(solution).is_solved()


def test_solves_random_state(tables: SolverTables) -> None:
    cube = Cube.random(random.Random(42))
    solution = solve(cube, tables=tables)
    assert solution is not None
    assert cube.copy().move(solution).is_solved()


def test_budget_exhaustion_returns_none(tables: SolverTables) -> None:
    assert solve(Cube().move("R U R' U'"), max_depth=2, tables=tables) is None


def test_negative_depth_is_rejected(tables: SolverTables) -> None:
    with pytest.raises(ValueError):
        solve(Cube(), max_depth=-1, tables=tables)


def test_default_depth_comes_from_environment(tables: SolverTables, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(ENV_MAX_DEPTH, "3")
    assert solve(Cube().move("R U R' U'"), tables=tables) is None
    monkeypatch.setenv(ENV_MAX_DEPTH, "6")
    assert solve(Cube().move("R U R' U'"), tables=tables) is not None


def test_search_returns_every_node_to_the_pool(tables: SolverTables) -> None:
    search = TwoPhaseSearch(tables, max_depth=22)
    assert search.run(Cube().move("R U R' U'")) is not None
    assert len(search._pool._free) == 23


def test_node_pool_reuses_released_nodes() -> None:
    pool = NodePool(2)
    first = pool.acquire()
    second = pool.acquire()
    assert first is not second
    pool.release(second)
    assert pool.acquire() is second


def test_node_moves_walk_parent_chain() -> None:
    root = SearchNode()
    child = SearchNode(parent=root, last_move=3, depth=1)
    grandchild = SearchNode(parent=child, last_move=2, depth=2)
    assert grandchild.moves() == ["R", "U'"]
    assert root.moves() == []


def test_zero_depth_from_environment_solves_only_solved_cubes(
    tables: SolverTables, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv(ENV_MAX_DEPTH, "0")
    assert solve(Cube(), tables=tables) == ""
    assert solve(Cube().move("R"), tables=tables) is None
