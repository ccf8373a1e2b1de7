from __future__ import annotations

import random

import pytest

from cubesolver.config import ENV_SCRAMBLE_LENGTH
from cubesolver.cube import Cube
from cubesolver.scramble import random_move_scramble, scramble
from cubesolver.tables import SolverTables

_AXIS = {"U": 0, "D": 0, "R": 1, "L": 1, "F": 2, "B": 2}


def test_random_move_scramble_never_repeats_an_axis() -> None:
    moves = random_move_scramble(200, rng=random.Random(3)).split()
    assert len(moves) == 200
    for previous, current in zip(moves, moves[1:]):
        assert _AXIS[previous[0]] != _AXIS[current[0]]


def test_random_move_scramble_default_length(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(ENV_SCRAMBLE_LENGTH, raising=False)
    assert len(random_move_scramble(rng=random.Random(1)).split()) == 25
    monkeypatch.setenv(ENV_SCRAMBLE_LENGTH, "8")
    assert len(random_move_scramble(rng=random.Random(1)).split()) == 8


def test_random_move_scramble_is_a_valid_algorithm() -> None:
    assert Cube().move(random_move_scramble(30, rng=random.Random(9))).verify() is None


def test_scramble_reaches_the_random_state(tables: SolverTables) -> None:
    sequence = scramble(rng=random.Random(11), tables=tables)
    assert Cube().move(sequence) == Cube.random(random.Random(11))
