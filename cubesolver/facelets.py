from __future__ import annotations

from cubesolver.models import FACE_ORDER

FACELET_COUNT = 54

_VALID_FACE_COLORS = set(FACE_ORDER)


def _facelet(face: str, number: int) -> int:
    """Index of sticker `number` (1..9, reading order) on `face`."""
    return 9 * FACE_ORDER.index(face) + number - 1


CENTER_FACELETS: tuple[int, ...] = tuple(_facelet(face, 5) for face in FACE_ORDER)

# Stickers of each corner slot, starting from its U/D sticker and going clockwise.
CORNER_FACELETS: tuple[tuple[int, int, int], ...] = (
    (_facelet("U", 9), _facelet("R", 1), _facelet("F", 3)),
    (_facelet("U", 7), _facelet("F", 1), _facelet("L", 3)),
    (_facelet("U", 1), _facelet("L", 1), _facelet("B", 3)),
    (_facelet("U", 3), _facelet("B", 1), _facelet("R", 3)),
    (_facelet("D", 3), _facelet("F", 9), _facelet("R", 7)),
    (_facelet("D", 1), _facelet("L", 9), _facelet("F", 7)),
    (_facelet("D", 7), _facelet("B", 9), _facelet("L", 7)),
    (_facelet("D", 9), _facelet("R", 9), _facelet("B", 7)),
)

EDGE_FACELETS: tuple[tuple[int, int], ...] = (
    (_facelet("U", 6), _facelet("R", 2)),
    (_facelet("U", 8), _facelet("F", 2)),
    (_facelet("U", 4), _facelet("L", 2)),
    (_facelet("U", 2), _facelet("B", 2)),
    (_facelet("D", 6), _facelet("R", 8)),
    (_facelet("D", 2), _facelet("F", 8)),
    (_facelet("D", 4), _facelet("L", 8)),
    (_facelet("D", 8), _facelet("B", 8)),
    (_facelet("F", 6), _facelet("R", 4)),
    (_facelet("F", 4), _facelet("L", 6)),
    (_facelet("B", 6), _facelet("L", 4)),
    (_facelet("B", 4), _facelet("R", 6)),
)

CORNER_COLORS: tuple[str, ...] = ("URF", "UFL", "ULB", "UBR", "DFR", "DLF", "DBL", "DRB")
EDGE_COLORS: tuple[str, ...] = ("UR", "UF", "UL", "UB", "DR", "DF", "DL", "DB", "FR", "FL", "BL", "BR")


def solved_facelets() -> str:
    return "".join(face * 9 for face in FACE_ORDER)


def validate_facelets(facelets: str) -> None:
    if len(facelets) != FACELET_COUNT:
        raise ValueError(f"Facelet string must contain exactly {FACELET_COUNT} symbols, got {len(facelets)}")
    if not set(facelets) <= _VALID_FACE_COLORS:
        raise ValueError(
            "Facelet string must contain only face symbols URFDLB "
            f"(got: {''.join(sorted(set(facelets)))})"
        )
