from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from functools import cached_property
from typing import Callable, Sequence

import numpy as np

from cubesolver.coordinates import (
    COORDINATE_FAMILIES,
    N_FLIP,
    N_MERGE,
    N_PARITY,
    N_SLICE1,
    N_SLICE2,
    N_TWIST,
    N_UR_TO_DF,
    N_URF_TO_DLF,
    UB_TO_DF,
    UR_TO_UL,
    CoordinateFamily,
    merge_edge_permutations,
)
from cubesolver.cube import MOVES, Cube

logger = logging.getLogger(__name__)

N_FACES = 6
N_POWERS = 3
N_MOVES = N_FACES * N_POWERS

MOVE_NAMES: tuple[str, ...] = tuple(
    f"{face}{suffix}" for face in "URFDLB" for suffix in ("", "2", "'")
)
PHASE1_MOVES: tuple[int, ...] = tuple(range(N_MOVES))
# U, U2, U', R2, F2, D, D2, D', L2, B2
PHASE2_MOVES: tuple[int, ...] = (0, 1, 2, 4, 7, 9, 10, 11, 13, 16)

UNKNOWN = 0xF
_NIBBLES_PER_WORD = 8
_NIBBLE_SHIFTS = np.arange(_NIBBLES_PER_WORD, dtype=np.uint32) * 4

Neighbours = Callable[[np.ndarray, int], np.ndarray]


# Pruning storage: 4-bit entries, eight per uint32 word.


def get_pruning(table: Sequence[int], index: int) -> int:
    return (int(table[index >> 3]) >> ((index & 7) << 2)) & 0xF


def set_pruning(table: np.ndarray, index: int, value: int) -> None:
    shift = (index & 7) << 2
    word = index >> 3
    table[word] = (table[word] & ~np.uint32(0xF << shift)) | np.uint32(value << shift)


def get_pruning_many(table: np.ndarray, size: int) -> np.ndarray:
    """All entries of a packed table as a uint8 array of length `size`."""
    return ((table[:, None] >> _NIBBLE_SHIFTS) & 0xF).astype(np.uint8).ravel()[:size]


def set_pruning_many(table: np.ndarray, indices: np.ndarray, value: int) -> None:
    words = indices >> 3
    shifts = ((indices & 7) << 2).astype(np.uint32)
    np.bitwise_and.at(table, words, ~(np.uint32(0xF) << shifts))
    np.bitwise_or.at(table, words, np.uint32(value) << shifts)


def new_pruning_table(size: int) -> np.ndarray:
    return np.full(-(-size // _NIBBLES_PER_WORD), 0xFFFFFFFF, dtype=np.uint32)


# Move tables


def build_move_table(family: CoordinateFamily) -> np.ndarray:
    """table[coordinate, move] for the 18 face turns, move = face * 3 + power."""
    multiply = Cube.corner_multiply if family.part == "corners" else Cube.edge_multiply
    powers = 1 if family.closed else N_POWERS
    rows = []
    cube = Cube()

    for coordinate in range(family.size):
        family.decode(cube, coordinate)
        row = []
        for face in range(N_FACES):
            turned = cube.copy()
            for _ in range(powers):
                multiply(turned, MOVES[face])
                row.append(family.encode(turned))
        rows.append(row)

    if family.closed:
        quarter = np.array(rows, dtype=np.int32)
        table = np.empty((family.size, N_MOVES), dtype=np.int32)
        for face in range(N_FACES):
            column = quarter[:, face]
            table[:, face * 3] = column
            table[:, face * 3 + 1] = column[column]
            table[:, face * 3 + 2] = column[column[column]]
    else:
        table = np.array(rows, dtype=np.int32)

    logger.debug("Built %s move table: %d x %d", family.name, family.size, N_MOVES)
    return table


def build_parity_table() -> np.ndarray:
    table = np.empty((N_PARITY, N_MOVES), dtype=np.int32)
    for move in range(N_MOVES):
        quarter_turn = move % 3 != 1
        for parity in range(N_PARITY):
            table[parity, move] = parity ^ 1 if quarter_turn else parity
    return table


def build_merge_table() -> np.ndarray:
    cube = Cube()
    uppers = []
    lowers = []
    for value in range(N_MERGE):
        UR_TO_UL.decode(cube, value)
        uppers.append(cube.ep)
        UB_TO_DF.decode(cube, value)
        lowers.append(cube.ep)
    return np.array(
        [[merge_edge_permutations(upper, lower) for lower in lowers] for upper in uppers],
        dtype=np.int32,
    )


# Pruning tables


def build_pruning_table(name: str, size: int, moves: Sequence[int], neighbours: Neighbours) -> np.ndarray:
    """Breadth-first distance layers from index 0, stored 4 bits per entry."""
    table = new_pruning_table(size)
    set_pruning(table, 0, 0)
    depth = 0
    done = 1

    while done < size:
        values = get_pruning_many(table, size)
        frontier = np.flatnonzero(values == depth)
        if not frontier.size:
            break
        for move in moves:
            reached = neighbours(frontier, move)
            fresh = np.unique(reached[values[reached] == UNKNOWN])
            if fresh.size:
                values[fresh] = depth + 1
                set_pruning_many(table, fresh, depth + 1)
                done += fresh.size
        depth += 1

    logger.debug("Built %s pruning table: %d entries, depth %d", name, size, depth)
    return table


def _phase1_neighbours(orientation: np.ndarray, fr_to_br: np.ndarray) -> Neighbours:
    def neighbours(index: np.ndarray, move: int) -> np.ndarray:
        ori, slice1 = np.divmod(index, N_SLICE1)
        return orientation[ori, move].astype(np.int64) * N_SLICE1 + fr_to_br[slice1 * N_SLICE2, move] // N_SLICE2

    return neighbours


def _phase2_neighbours(permutation: np.ndarray, fr_to_br: np.ndarray, parity: np.ndarray) -> Neighbours:
    def neighbours(index: np.ndarray, move: int) -> np.ndarray:
        rest, par = np.divmod(index, N_PARITY)
        perm, slice2 = np.divmod(rest, N_SLICE2)
        next_perm = permutation[perm, move].astype(np.int64)
        return (next_perm * N_SLICE2 + fr_to_br[slice2, move]) * N_PARITY + parity[par, move]

    return neighbours


@dataclass(frozen=True)
class SearchRows:
    """Plain-list copies of the tables for scalar lookups in the search loop."""

    twist: list[list[int]]
    flip: list[list[int]]
    fr_to_br: list[list[int]]
    urf_to_dlf: list[list[int]]
    ur_to_df: list[list[int]]
    ur_to_ul: list[list[int]]
    ub_to_df: list[list[int]]
    parity: list[list[int]]
    merge_ur_to_df: list[list[int]]
    slice_twist: list[int]
    slice_flip: list[int]
    slice_urf_to_dlf_parity: list[int]
    slice_ur_to_df_parity: list[int]


@dataclass(frozen=True, eq=False)
class SolverTables:
    twist: np.ndarray
    flip: np.ndarray
    fr_to_br: np.ndarray
    urf_to_dlf: np.ndarray
    ur_to_df: np.ndarray
    ur_to_ul: np.ndarray
    ub_to_df: np.ndarray
    parity: np.ndarray
    merge_ur_to_df: np.ndarray
    slice_twist: np.ndarray
    slice_flip: np.ndarray
    slice_urf_to_dlf_parity: np.ndarray
    slice_ur_to_df_parity: np.ndarray

    def __post_init__(self) -> None:
        for value in vars(self).values():
            value.setflags(write=False)

    @cached_property
    def rows(self) -> SearchRows:
        return SearchRows(**{name: getattr(self, name).tolist() for name in SearchRows.__dataclass_fields__})

    @classmethod
    def build(cls) -> SolverTables:
        started = time.perf_counter()
        logger.info("Building move tables")
        move_tables = {family.name: build_move_table(family) for family in COORDINATE_FAMILIES}
        parity = build_parity_table()
        merge = build_merge_table()

        logger.info("Building pruning tables")
        fr_to_br = move_tables["fr_to_br"]
        slice_twist = build_pruning_table(
            "slice_twist",
            N_SLICE1 * N_TWIST,
            PHASE1_MOVES,
            _phase1_neighbours(move_tables["twist"], fr_to_br),
        )
        slice_flip = build_pruning_table(
            "slice_flip",
            N_SLICE1 * N_FLIP,
            PHASE1_MOVES,
            _phase1_neighbours(move_tables["flip"], fr_to_br),
        )
        slice_urf_to_dlf_parity = build_pruning_table(
            "slice_urf_to_dlf_parity",
            N_SLICE2 * N_URF_TO_DLF * N_PARITY,
            PHASE2_MOVES,
            _phase2_neighbours(move_tables["urf_to_dlf"], fr_to_br, parity),
        )
        slice_ur_to_df_parity = build_pruning_table(
            "slice_ur_to_df_parity",
            N_SLICE2 * N_UR_TO_DF * N_PARITY,
            PHASE2_MOVES,
            _phase2_neighbours(move_tables["ur_to_df"], fr_to_br, parity),
        )

        tables = cls(
            **move_tables,
            parity=parity,
            merge_ur_to_df=merge,
            slice_twist=slice_twist,
            slice_flip=slice_flip,
            slice_urf_to_dlf_parity=slice_urf_to_dlf_parity,
            slice_ur_to_df_parity=slice_ur_to_df_parity,
        )
        logger.info("Solver tables ready in %.1fs", time.perf_counter() - started)
        return tables


class TableProvider:
    """Builds `SolverTables` once and hands out the same read-only instance."""

    def __init__(self, builder: Callable[[], SolverTables] = SolverTables.build) -> None:
        self._builder = builder
        self._lock = threading.Lock()
        self._tables: SolverTables | None = None

    @property
    def ready(self) -> bool:
        return self._tables is not None

    def get(self) -> SolverTables:
        tables = self._tables
        if tables is not None:
            logger.debug("Solver tables already initialized")
            return tables
        with self._lock:
            if self._tables is None:
                built = self._builder()
                # Warm the list copies before publishing so readers never race on them.
                built.rows
                self._tables = built
            return self._tables


DEFAULT_PROVIDER = TableProvider()


def initialize_tables() -> SolverTables:
    return DEFAULT_PROVIDER.get()
