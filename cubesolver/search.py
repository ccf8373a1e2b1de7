from __future__ import annotations

import logging
from dataclasses import dataclass

from cubesolver.config import SolverConfig
from cubesolver.coordinates import (
    N_PARITY,
    N_SLICE1,
    N_SLICE2,
    get_flip,
    get_fr_to_br,
    get_parity,
    get_twist,
    get_ub_to_df,
    get_ur_to_ul,
    get_urf_to_dlf,
)
from cubesolver.cube import Cube
from cubesolver.models import FACE_ORDER
from cubesolver.notation import format_moves
from cubesolver.tables import (
    MOVE_NAMES,
    N_FACES,
    PHASE1_MOVES,
    PHASE2_MOVES,
    SearchRows,
    SolverTables,
    get_pruning,
    initialize_tables,
)

logger = logging.getLogger(__name__)

_PHASE2_MOVE_SET = frozenset(PHASE2_MOVES)


def _next_moves(phase2: bool) -> tuple[tuple[int, ...], ...]:
    """Moves allowed after a turn of each face.

    A face never follows itself, and U, R, F never follow their opposite
    face, so each pair of commuting turns is tried in one order only.
    """
    result = []
    for last_face in range(N_FACES):
        allowed = []
        for face in range(N_FACES):
            if face == last_face or face == last_face - 3:
                continue
            powers = (0, 1, 2) if not phase2 or face in (0, 3) else (1,)
            allowed.extend(face * 3 + power for power in powers)
        result.append(tuple(allowed))
    return tuple(result)


_PHASE1_NEXT = _next_moves(phase2=False)
_PHASE2_NEXT = _next_moves(phase2=True)


@dataclass(slots=True)
class SearchNode:
    parent: SearchNode | None = None
    last_move: int | None = None
    depth: int = 0
    # phase 1
    flip: int = 0
    twist: int = 0
    slice: int = 0
    # phase 2
    parity: int = 0
    urf_to_dlf: int = 0
    fr_to_br: int = 0
    ur_to_ul: int = 0
    ub_to_df: int = 0
    ur_to_df: int = 0

    def init_from_cube(self, cube: Cube) -> SearchNode:
        self.parent = None
        self.last_move = None
        self.depth = 0
        self.flip = get_flip(cube)
        self.twist = get_twist(cube)
        self.fr_to_br = get_fr_to_br(cube)
        self.slice = self.fr_to_br // N_SLICE2
        self.parity = get_parity(cube)
        self.urf_to_dlf = get_urf_to_dlf(cube)
        self.ur_to_ul = get_ur_to_ul(cube)
        self.ub_to_df = get_ub_to_df(cube)
        return self

    def moves(self) -> list[str]:
        names = []
        node: SearchNode | None = self
        while node is not None and node.last_move is not None:
            names.append(MOVE_NAMES[node.last_move])
            node = node.parent
        names.reverse()
        return names


class NodePool:
    """Free list holding one node per reachable search depth."""

    def __init__(self, capacity: int) -> None:
        self._free = [SearchNode() for _ in range(capacity)]

    def acquire(self) -> SearchNode:
        return self._free.pop()

    def release(self, node: SearchNode) -> None:
        self._free.append(node)


class TwoPhaseSearch:
    """One solve: IDA* to the <U, D, R2, L2, F2, B2> subgroup, then IDA* inside it.

    Instances hold per-search state and must not be shared between threads;
    the tables they read are shared.
    """

    def __init__(self, tables: SolverTables, max_depth: int) -> None:
        self._rows: SearchRows = tables.rows
        self._max_depth = max_depth
        self._pool = NodePool(max_depth + 1)
        self._solution: list[str] | None = None

    def run(self, cube: Cube) -> list[str] | None:
        self._solution = None
        root = self._pool.acquire().init_from_cube(cube)
        for depth in range(self._max_depth + 1):
            logger.debug("Phase 1 depth bound %d", depth)
            self._phase1(root, depth)
            if self._solution is not None:
                break
        self._pool.release(root)

        if self._solution is None:
            logger.info("No solution within %d moves", self._max_depth)
        else:
            logger.info("Found solution of %d moves", len(self._solution))
        return self._solution

    def _phase1_distance(self, node: SearchNode) -> int:
        rows = self._rows
        return max(
            get_pruning(rows.slice_flip, N_SLICE1 * node.flip + node.slice),
            get_pruning(rows.slice_twist, N_SLICE1 * node.twist + node.slice),
        )

    def _phase2_distance(self, node: SearchNode) -> int:
        rows = self._rows
        return max(
            get_pruning(
                rows.slice_ur_to_df_parity,
                (N_SLICE2 * node.ur_to_df + node.fr_to_br) * N_PARITY + node.parity,
            ),
            get_pruning(
                rows.slice_urf_to_dlf_parity,
                (N_SLICE2 * node.urf_to_dlf + node.fr_to_br) * N_PARITY + node.parity,
            ),
        )

    def _phase1(self, node: SearchNode, depth: int) -> None:
        distance = self._phase1_distance(node)
        if depth == 0:
            # A last move from the phase 2 set would just be repeated by phase 2.
            if distance == 0 and (node.last_move is None or node.last_move not in _PHASE2_MOVE_SET):
                self._phase2_search(node)
            return
        if distance > depth:
            return

        rows = self._rows
        candidates = PHASE1_MOVES if node.last_move is None else _PHASE1_NEXT[node.last_move // 3]
        for move in candidates:
            child = self._pool.acquire()
            child.parent = node
            child.last_move = move
            child.depth = node.depth + 1
            child.flip = rows.flip[node.flip][move]
            child.twist = rows.twist[node.twist][move]
            child.slice = rows.fr_to_br[node.slice * N_SLICE2][move] // N_SLICE2
            self._phase1(child, depth - 1)
            self._pool.release(child)
            if self._solution is not None:
                return

    def _init_phase2(self, node: SearchNode) -> None:
        chain = []
        current: SearchNode | None = node
        while current is not None and current.parent is not None:
            chain.append(current)
            current = current.parent

        rows = self._rows
        for child in reversed(chain):
            parent = child.parent
            move = child.last_move
            child.urf_to_dlf = rows.urf_to_dlf[parent.urf_to_dlf][move]
            child.fr_to_br = rows.fr_to_br[parent.fr_to_br][move]
            child.parity = rows.parity[parent.parity][move]
            child.ur_to_ul = rows.ur_to_ul[parent.ur_to_ul][move]
            child.ub_to_df = rows.ub_to_df[parent.ub_to_df][move]
        node.ur_to_df = rows.merge_ur_to_df[node.ur_to_ul][node.ub_to_df]

    def _phase2_search(self, node: SearchNode) -> None:
        self._init_phase2(node)
        for depth in range(self._max_depth - node.depth + 1):
            self._phase2(node, depth)
            if self._solution is not None:
                return

    def _phase2(self, node: SearchNode, depth: int) -> None:
        distance = self._phase2_distance(node)
        if depth == 0:
            if distance == 0:
                self._solution = node.moves()
            return
        if distance > depth:
            return

        rows = self._rows
        candidates = PHASE2_MOVES if node.last_move is None else _PHASE2_NEXT[node.last_move // 3]
        for move in candidates:
            child = self._pool.acquire()
            child.parent = node
            child.last_move = move
            child.depth = node.depth + 1
            child.urf_to_dlf = rows.urf_to_dlf[node.urf_to_dlf][move]
            child.fr_to_br = rows.fr_to_br[node.fr_to_br][move]
            child.parity = rows.parity[node.parity][move]
            child.ur_to_df = rows.ur_to_df[node.ur_to_df][move]
            self._phase2(child, depth - 1)
            self._pool.release(child)
            if self._solution is not None:
                return


def solve(cube: Cube, max_depth: int | None = None, tables: SolverTables | None = None) -> str | None:
    """Returns a move sequence solving `cube`, or None if none fits in `max_depth` moves.

    The cube is assumed valid (see `Cube.verify`).
    """
    if max_depth is None:
        max_depth = SolverConfig.from_env().max_depth
    if max_depth < 0:
        raise ValueError("max_depth must be >= 0")

    tables = tables or initialize_tables()

    clone = cube.copy()
    upright = clone.upright()
    clone.move(upright)
    # Slot -> face the rotation brought there; maps moves back to the unrotated cube.
    rotation = Cube().move(upright).center

    moves = TwoPhaseSearch(tables, max_depth).run(clone)
    if moves is None:
        return None
    return format_moves(FACE_ORDER[rotation[FACE_ORDER.index(move[0])]] + move[1:] for move in moves)
