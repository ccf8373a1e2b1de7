from __future__ import annotations

from enum import Enum, IntEnum


class Center(IntEnum):
    U = 0
    R = 1
    F = 2
    D = 3
    L = 4
    B = 5


class Corner(IntEnum):
    URF = 0
    UFL = 1
    ULB = 2
    UBR = 3
    DFR = 4
    DLF = 5
    DBL = 6
    DRB = 7


class Edge(IntEnum):
    UR = 0
    UF = 1
    UL = 2
    UB = 3
    DR = 4
    DF = 5
    DL = 6
    DB = 7
    FR = 8
    FL = 9
    BL = 10
    BR = 11


class CubeDefect(str, Enum):
    MISSING_CORNER = "Invalid cube: unrecognized or missing corners"
    DUPLICATE_CORNER = "Invalid cube: duplicate corner detected"
    MISSING_EDGE = "Invalid cube: unrecognized or missing edges"
    DUPLICATE_EDGE = "Invalid cube: duplicate edge detected"
    CORNER_TWIST = "Invalid cube: corner twist error (1 corner needs twisting)"
    EDGE_FLIP = "Invalid cube: edge flip error (1 edge needs flipping)"
    PARITY = "Invalid cube: parity error (2 edges or 2 corners need swapping)"


FACE_ORDER = "URFDLB"
