from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Mapping, Sequence

from cubesolver.facelets import (
    CENTER_FACELETS,
    CORNER_COLORS,
    CORNER_FACELETS,
    EDGE_COLORS,
    EDGE_FACELETS,
    FACELET_COUNT,
    validate_facelets,
)
from cubesolver.models import FACE_ORDER, Center, CubeDefect, Edge
from cubesolver.notation import Notation, move_power, split_move

N_CENTERS = 6
N_CORNERS = 8
N_EDGES = 12

_RAW_FIELDS = {"center": N_CENTERS, "cp": N_CORNERS, "co": N_CORNERS, "ep": N_EDGES, "eo": N_EDGES}

# Index of every move base in the move registry.
MOVE_BASES = "URFDLBEMSxyzurfdlb"
MOVE_INDEX = {base: index for index, base in enumerate(MOVE_BASES)}

# Whole-cube rotations that bring the F center to the front, keyed by the slot it sits in.
_FRONT_ROTATIONS = {Center.D: "x", Center.U: "x'", Center.B: "x2", Center.R: "y", Center.L: "y'"}
# Rotations that bring the U center on top once the F center is in place.
_UP_ROTATIONS = {Center.L: "z", Center.R: "z'", Center.D: "z2"}


def _identity(size: int) -> list[int]:
    return list(range(size))


def _permutation_parity(perm: Sequence[int]) -> int:
    inversions = 0
    for i in range(len(perm) - 1, 0, -1):
        for j in range(i - 1, -1, -1):
            if perm[j] > perm[i]:
                inversions += 1
    return inversions % 2


@dataclass
class Cube:
    """Cubie-level state: slot -> piece permutations plus piece orientations.

    The same shape describes a move; `multiply` right-composes a move onto the state.
    """

    center: list[int] = field(default_factory=lambda: _identity(N_CENTERS))
    cp: list[int] = field(default_factory=lambda: _identity(N_CORNERS))
    co: list[int] = field(default_factory=lambda: [0] * N_CORNERS)
    ep: list[int] = field(default_factory=lambda: _identity(N_EDGES))
    eo: list[int] = field(default_factory=lambda: [0] * N_EDGES)

    def copy(self) -> Cube:
        return Cube(
            center=list(self.center),
            cp=list(self.cp),
            co=list(self.co),
            ep=list(self.ep),
            eo=list(self.eo),
        )

    # Facelets

    def to_facelets(self) -> str:
        result = [""] * FACELET_COUNT
        for slot, facelet in enumerate(CENTER_FACELETS):
            result[facelet] = FACE_ORDER[self.center[slot]]
        for slot in range(N_CORNERS):
            corner, ori = self.cp[slot], self.co[slot]
            for n in range(3):
                result[CORNER_FACELETS[slot][(n + ori) % 3]] = CORNER_COLORS[corner][n]
        for slot in range(N_EDGES):
            edge, ori = self.ep[slot], self.eo[slot]
            for n in range(2):
                result[EDGE_FACELETS[slot][(n + ori) % 2]] = EDGE_COLORS[edge][n]
        return "".join(result)

    @classmethod
    def from_facelets(cls, facelets: str) -> Cube:
        validate_facelets(facelets)
        cube = cls(cp=[-1] * N_CORNERS, ep=[-1] * N_EDGES)
        cube.center = [FACE_ORDER.index(facelets[facelet]) for facelet in CENTER_FACELETS]

        for slot, stickers in enumerate(CORNER_FACELETS):
            ori = 0
            while ori < 3 and facelets[stickers[ori]] not in "UD":
                ori += 1
            if ori == 3:
                continue
            col1 = facelets[stickers[(ori + 1) % 3]]
            col2 = facelets[stickers[(ori + 2) % 3]]
            for corner, colors in enumerate(CORNER_COLORS):
                if col1 == colors[1] and col2 == colors[2]:
                    cube.cp[slot] = corner
                    cube.co[slot] = ori
                    break

        for slot, (first, second) in enumerate(EDGE_FACELETS):
            stickers = facelets[first] + facelets[second]
            for edge, colors in enumerate(EDGE_COLORS):
                if stickers == colors:
                    cube.ep[slot] = edge
                    cube.eo[slot] = 0
                    break
                if stickers == colors[::-1]:
                    cube.ep[slot] = edge
                    cube.eo[slot] = 1
                    break

        return cube

    # Raw arrays

    def to_raw(self) -> dict[str, list[int]]:
        return {name: list(getattr(self, name)) for name in _RAW_FIELDS}

    @classmethod
    def from_raw(cls, raw: Mapping[str, Sequence[int]]) -> Cube:
        """Inverse of `to_raw`; the arrays are copied, not checked for validity (see `verify`)."""
        arrays = {}
        for name, size in _RAW_FIELDS.items():
            if name not in raw:
                raise ValueError(f"Raw cube state is missing '{name}'")
            values = [int(value) for value in raw[name]]
            if len(values) != size:
                raise ValueError(f"Raw cube field '{name}' must have {size} entries, got {len(values)}")
            arrays[name] = values
        return cls(**arrays)

    # Multiplication

    def center_multiply(self, other: Cube) -> None:
        center = self.center
        self.center = [center[source] for source in other.center]

    def corner_multiply(self, other: Cube) -> None:
        cp, co = self.cp, self.co
        self.cp = [cp[source] for source in other.cp]
        self.co = [(co[source] + ori) % 3 for source, ori in zip(other.cp, other.co)]

    def edge_multiply(self, other: Cube) -> None:
        ep, eo = self.ep, self.eo
        self.ep = [ep[source] for source in other.ep]
        self.eo = [(eo[source] + ori) % 2 for source, ori in zip(other.ep, other.eo)]

    def multiply(self, other: Cube) -> None:
        self.center_multiply(other)
        self.corner_multiply(other)
        self.edge_multiply(other)

    def move(self, algorithm: str) -> Cube:
        """Applies an algorithm such as "R U R' U'" in place and returns the cube."""
        for token in Notation.parse(algorithm):
            base = split_move(token)[0]
            move_cube = MOVES[MOVE_INDEX[base]]
            for _ in range(move_power(token)):
                self.multiply(move_cube)
        return self

    # Orientation

    def upright(self) -> str:
        """Rotation sequence that brings the F center to the front and the U center on top."""
        clone = self.copy()
        result: list[str] = []

        front_rotation = _FRONT_ROTATIONS.get(Center(clone.center.index(Center.F)))
        if front_rotation:
            result.append(front_rotation)
            clone.move(front_rotation)

        up_rotation = _UP_ROTATIONS.get(Center(clone.center.index(Center.U)))
        if up_rotation:
            result.append(up_rotation)

        return " ".join(result)

    # Validity

    def corner_parity(self) -> int:
        return _permutation_parity(self.cp)

    def edge_parity(self) -> int:
        return _permutation_parity(self.ep)

    def verify(self) -> CubeDefect | None:
        if any(not 0 <= corner < N_CORNERS for corner in self.cp):
            return CubeDefect.MISSING_CORNER
        if len(set(self.cp)) != N_CORNERS:
            return CubeDefect.DUPLICATE_CORNER
        if any(not 0 <= edge < N_EDGES for edge in self.ep):
            return CubeDefect.MISSING_EDGE
        if len(set(self.ep)) != N_EDGES:
            return CubeDefect.DUPLICATE_EDGE
        if sum(self.co) % 3 != 0:
            return CubeDefect.CORNER_TWIST
        if sum(self.eo) % 2 != 0:
            return CubeDefect.EDGE_FLIP
        if self.corner_parity() != self.edge_parity():
            return CubeDefect.PARITY
        return None

    def is_solved(self) -> bool:
        clone = self.copy()
        clone.move(clone.upright())
        return clone == Cube()

    # Random states

    def randomize(self, rng: random.Random | None = None) -> Cube:
        rng = rng or random.Random()

        rng.shuffle(self.cp)
        rng.shuffle(self.ep)
        if _permutation_parity(self.cp) != _permutation_parity(self.ep):
            # Swapping two edges pairs every odd permutation with exactly one even one.
            self.ep[Edge.UR], self.ep[Edge.UF] = self.ep[Edge.UF], self.ep[Edge.UR]

        self.co = [rng.randrange(3) for _ in range(N_CORNERS - 1)]
        self.co.append((3 - sum(self.co) % 3) % 3)
        self.eo = [rng.randrange(2) for _ in range(N_EDGES - 1)]
        self.eo.append(sum(self.eo) % 2)
        return self

    @classmethod
    def random(cls, rng: random.Random | None = None) -> Cube:
        return cls().randomize(rng)

    @staticmethod
    def inverse(algorithm: str) -> str:
        return Notation.invert(algorithm)


# Face turns U R F D L B followed by the slice turns E M S, as raw cubie maps.
_BASE_MOVES: tuple[Cube, ...] = (
    Cube(
        cp=[3, 0, 1, 2, 4, 5, 6, 7],
        ep=[3, 0, 1, 2, 4, 5, 6, 7, 8, 9, 10, 11],
    ),
    Cube(
        cp=[4, 1, 2, 0, 7, 5, 6, 3],
        co=[2, 0, 0, 1, 1, 0, 0, 2],
        ep=[8, 1, 2, 3, 11, 5, 6, 7, 4, 9, 10, 0],
    ),
    Cube(
        cp=[1, 5, 2, 3, 0, 4, 6, 7],
        co=[1, 2, 0, 0, 2, 1, 0, 0],
        ep=[0, 9, 2, 3, 4, 8, 6, 7, 1, 5, 10, 11],
        eo=[0, 1, 0, 0, 0, 1, 0, 0, 1, 1, 0, 0],
    ),
    Cube(
        cp=[0, 1, 2, 3, 5, 6, 7, 4],
        ep=[0, 1, 2, 3, 5, 6, 7, 4, 8, 9, 10, 11],
    ),
    Cube(
        cp=[0, 2, 6, 3, 4, 1, 5, 7],
        co=[0, 1, 2, 0, 0, 2, 1, 0],
        ep=[0, 1, 10, 3, 4, 5, 9, 7, 8, 2, 6, 11],
    ),
    Cube(
        cp=[0, 1, 3, 7, 4, 5, 2, 6],
        co=[0, 0, 1, 2, 0, 0, 2, 1],
        ep=[0, 1, 2, 11, 4, 5, 6, 10, 8, 9, 3, 7],
        eo=[0, 0, 0, 1, 0, 0, 0, 1, 0, 0, 1, 1],
    ),
    Cube(
        center=[Center.U, Center.F, Center.L, Center.D, Center.B, Center.R],
        ep=[0, 1, 2, 3, 4, 5, 6, 7, Edge.FL, Edge.BL, Edge.BR, Edge.FR],
        eo=[0, 0, 0, 0, 0, 0, 0, 0, 1, 1, 1, 1],
    ),
    Cube(
        center=[Center.B, Center.R, Center.U, Center.F, Center.L, Center.D],
        ep=[0, Edge.UB, 2, Edge.DB, 4, Edge.UF, 6, Edge.DF, 8, 9, 10, 11],
        eo=[0, 1, 0, 1, 0, 1, 0, 1, 0, 0, 0, 0],
    ),
    Cube(
        center=[Center.L, Center.U, Center.F, Center.R, Center.D, Center.B],
        ep=[Edge.UL, 1, Edge.DL, 3, Edge.UR, 5, Edge.DR, 7, 8, 9, 10, 11],
        eo=[1, 0, 1, 0, 1, 0, 1, 0, 0, 0, 0, 0],
    ),
)

# Rotations x y z and wide turns u r f d l b, written with the base moves.
_COMPOUND_RECIPES: tuple[str, ...] = (
    "R M' L'",
    "U E' D'",
    "F S B'",
    "U E'",
    "R M'",
    "F S",
    "D E",
    "L M",
    "B S'",
)


def _build_moves() -> tuple[Cube, ...]:
    moves = list(_BASE_MOVES)
    for recipe in _COMPOUND_RECIPES:
        compound = Cube()
        for token in recipe.split():
            base = split_move(token)[0]
            for _ in range(move_power(token)):
                compound.multiply(moves[MOVE_INDEX[base]])
        moves.append(compound)
    return tuple(moves)


MOVES: tuple[Cube, ...] = _build_moves()
