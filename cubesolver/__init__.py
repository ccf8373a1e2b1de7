from cubesolver.config import SolverConfig
from cubesolver.cube import Cube
from cubesolver.models import Center, Corner, CubeDefect, Edge
from cubesolver.notation import AlgorithmSyntaxError, InvalidMoveToken, Notation, invert_algorithm, parse_algorithm
from cubesolver.scramble import random_move_scramble, scramble
from cubesolver.search import TwoPhaseSearch, solve
from cubesolver.tables import SolverTables, TableProvider, initialize_tables

__all__ = [
    "AlgorithmSyntaxError",
    "Center",
    "Corner",
    "Cube",
    "CubeDefect",
    "Edge",
    "InvalidMoveToken",
    "Notation",
    "SolverConfig",
    "SolverTables",
    "TableProvider",
    "TwoPhaseSearch",
    "initialize_tables",
    "invert_algorithm",
    "parse_algorithm",
    "random_move_scramble",
    "scramble",
    "solve",
]
