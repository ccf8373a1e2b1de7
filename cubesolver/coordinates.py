"""Dense integer coordinates over parts of the cube state.

Orientation coordinates (twist, flip) are mixed-radix numbers over all but the
last piece, whose orientation follows from the others. Permutation coordinates
combine the choice of slots occupied by a tracked range of pieces with the
rank of their relative order:

    coordinate = choice_index * k! + order_rank
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Literal

from cubesolver.combinatorics import cnk, factorial, rotate_left, rotate_right
from cubesolver.cube import N_CORNERS, N_EDGES, Cube
from cubesolver.models import Corner, Edge

N_TWIST = 2187
N_FLIP = 2048
N_PARITY = 2
N_SLICE1 = 495
N_SLICE2 = 24
N_FR_TO_BR = 11880
N_URF_TO_DLF = 20160
N_UR_TO_DF = 20160
N_UR_TO_UL = 1320
N_UB_TO_DF = 1320
N_MERGE = 336

CubePart = Literal["corners", "edges"]

_BINOMIAL = tuple(tuple(cnk(n, k) for k in range(N_EDGES + 1)) for n in range(N_EDGES + 1))


def get_twist(cube: Cube) -> int:
    value = 0
    for ori in cube.co[: N_CORNERS - 1]:
        value = 3 * value + ori
    return value


def set_twist(cube: Cube, value: int) -> None:
    co = [0] * N_CORNERS
    total = 0
    for i in range(N_CORNERS - 2, -1, -1):
        co[i] = value % 3
        value //= 3
        total += co[i]
    co[-1] = (3 - total % 3) % 3
    cube.co = co


def get_flip(cube: Cube) -> int:
    value = 0
    for ori in cube.eo[: N_EDGES - 1]:
        value = 2 * value + ori
    return value


def set_flip(cube: Cube, value: int) -> None:
    eo = [0] * N_EDGES
    total = 0
    for i in range(N_EDGES - 2, -1, -1):
        eo[i] = value % 2
        value //= 2
        total += eo[i]
    eo[-1] = total % 2
    cube.eo = eo


def encode_permutation(perm: list[int], start: int, end: int, from_end: bool) -> int:
    """Encodes where pieces start..end sit in `perm` and in which order.

    With `from_end` the slots are walked from the last one, so that pieces
    sitting in their home slots at the end of the array encode as 0.
    """
    max_our = end - start
    max_all = len(perm) - 1
    our = [-1] * (max_our + 1)
    choice = 0
    x = 0

    if from_end:
        for j in range(max_all, -1, -1):
            if start <= perm[j] <= end:
                choice += _BINOMIAL[max_all - j][x + 1]
                our[max_our - x] = perm[j]
                x += 1
    else:
        for j in range(max_all + 1):
            if start <= perm[j] <= end:
                choice += _BINOMIAL[j][x + 1]
                our[x] = perm[j]
                x += 1

    rank = 0
    for j in range(max_our, -1, -1):
        k = 0
        while our[j] != start + j:
            rotate_left(our, 0, j)
            k += 1
        rank = (j + 1) * rank + k

    return choice * factorial(max_our + 1) + rank


def decode_permutation(size: int, start: int, end: int, from_end: bool, index: int) -> list[int]:
    """Inverse of `encode_permutation`; slots holding untracked pieces are -1."""
    max_our = end - start
    max_all = size - 1
    our = list(range(start, end + 1))
    perm = [-1] * size
    choice, rank = divmod(index, factorial(max_our + 1))

    for j in range(1, max_our + 1):
        rank, k = divmod(rank, j + 1)
        for _ in range(k):
            rotate_right(our, 0, j)

    x = max_our
    if from_end:
        for j in range(max_all + 1):
            c = _BINOMIAL[max_all - j][x + 1]
            if choice >= c:
                perm[j] = our[max_our - x]
                choice -= c
                x -= 1
    else:
        for j in range(max_all, -1, -1):
            c = _BINOMIAL[j][x + 1]
            if choice >= c:
                perm[j] = our[x]
                choice -= c
                x -= 1

    return perm


def _corner_permutation(start: int, end: int) -> tuple[Callable[[Cube], int], Callable[[Cube, int], None]]:
    def encode(cube: Cube) -> int:
        return encode_permutation(cube.cp, start, end, False)

    def decode(cube: Cube, value: int) -> None:
        cube.cp = decode_permutation(N_CORNERS, start, end, False, value)

    return encode, decode


def _edge_permutation(
    start: int, end: int, from_end: bool = False
) -> tuple[Callable[[Cube], int], Callable[[Cube, int], None]]:
    def encode(cube: Cube) -> int:
        return encode_permutation(cube.ep, start, end, from_end)

    def decode(cube: Cube, value: int) -> None:
        cube.ep = decode_permutation(N_EDGES, start, end, from_end, value)

    return encode, decode


get_urf_to_dlf, set_urf_to_dlf = _corner_permutation(Corner.URF, Corner.DLF)
get_ur_to_ul, set_ur_to_ul = _edge_permutation(Edge.UR, Edge.UL)
get_ub_to_df, set_ub_to_df = _edge_permutation(Edge.UB, Edge.DF)
get_ur_to_df, set_ur_to_df = _edge_permutation(Edge.UR, Edge.DF)
get_fr_to_br, set_fr_to_br = _edge_permutation(Edge.FR, Edge.BR, from_end=True)


def get_slice(cube: Cube) -> int:
    return get_fr_to_br(cube) // N_SLICE2


def get_parity(cube: Cube) -> int:
    return cube.corner_parity()


def merge_ur_to_df(ur_to_ul: int, ub_to_df: int) -> int:
    """Combines the two 3-edge coordinates into `ur_to_df`, or -1 if they overlap."""
    upper = decode_permutation(N_EDGES, Edge.UR, Edge.UL, False, ur_to_ul)
    lower = decode_permutation(N_EDGES, Edge.UB, Edge.DF, False, ub_to_df)
    return merge_edge_permutations(upper, lower)


def merge_edge_permutations(upper: list[int], lower: list[int]) -> int:
    """Overlays decoded UR..UL and UB..DF edges in the U/D layers and encodes UR..DF."""
    merged = list(lower)
    for slot in range(Edge.DB + 1):
        if upper[slot] != -1:
            if merged[slot] != -1:
                return -1
            merged[slot] = upper[slot]
    return encode_permutation(merged, Edge.UR, Edge.DF, False)


@dataclass(frozen=True)
class CoordinateFamily:
    name: str
    size: int
    part: CubePart
    encode: Callable[[Cube], int]
    decode: Callable[[Cube, int], None]
    # False when quarter turns can leave the domain (only half turns of R F L B stay in it).
    closed: bool = True


TWIST = CoordinateFamily("twist", N_TWIST, "corners", get_twist, set_twist)
FLIP = CoordinateFamily("flip", N_FLIP, "edges", get_flip, set_flip)
FR_TO_BR = CoordinateFamily("fr_to_br", N_FR_TO_BR, "edges", get_fr_to_br, set_fr_to_br)
URF_TO_DLF = CoordinateFamily("urf_to_dlf", N_URF_TO_DLF, "corners", get_urf_to_dlf, set_urf_to_dlf)
UR_TO_DF = CoordinateFamily("ur_to_df", N_UR_TO_DF, "edges", get_ur_to_df, set_ur_to_df, closed=False)
UR_TO_UL = CoordinateFamily("ur_to_ul", N_UR_TO_UL, "edges", get_ur_to_ul, set_ur_to_ul)
UB_TO_DF = CoordinateFamily("ub_to_df", N_UB_TO_DF, "edges", get_ub_to_df, set_ub_to_df)

COORDINATE_FAMILIES: tuple[CoordinateFamily, ...] = (
    TWIST,
    FLIP,
    FR_TO_BR,
    URF_TO_DLF,
    UR_TO_DF,
    UR_TO_UL,
    UB_TO_DF,
)
