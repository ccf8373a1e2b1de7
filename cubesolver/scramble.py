from __future__ import annotations

import random

from cubesolver.config import SolverConfig
from cubesolver.cube import Cube
from cubesolver.notation import format_moves
from cubesolver.search import solve
from cubesolver.tables import MOVE_NAMES, N_MOVES, SolverTables


def scramble(rng: random.Random | None = None, tables: SolverTables | None = None) -> str:
    """Scramble leading to a uniformly random reachable state."""
    solution = solve(Cube.random(rng), tables=tables)
    return Cube.inverse(solution or "")


def _axis(move: int) -> int:
    # U/D -> 0, R/L -> 1, F/B -> 2
    return (move // 3) % 3


def random_move_scramble(length: int | None = None, rng: random.Random | None = None) -> str:
    """Random face turns, no two consecutive turns on the same axis."""
    if length is None:
        length = SolverConfig.from_env().scramble_length
    if length < 0:
        raise ValueError("length must be >= 0")

    rng = rng or random.Random()
    moves: list[int] = []
    while len(moves) < length:
        move = rng.randrange(N_MOVES)
        if moves and _axis(moves[-1]) == _axis(move):
            continue
        moves.append(move)
    return format_moves(MOVE_NAMES[move] for move in moves)
