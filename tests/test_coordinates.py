from __future__ import annotations

import pytest

from cubesolver.coordinates import (
    COORDINATE_FAMILIES,
    FLIP,
    N_MERGE,
    N_SLICE2,
    TWIST,
    UB_TO_DF,
    UR_TO_UL,
    CoordinateFamily,
    get_fr_to_br,
    get_slice,
    get_ub_to_df,
    get_ur_to_df,
    get_ur_to_ul,
    merge_ur_to_df,
)
from cubesolver.cube import Cube


@pytest.mark.parametrize("family", COORDINATE_FAMILIES, ids=lambda family: family.name)
def test_decode_then_encode_is_identity(family: CoordinateFamily) -> None:
    cube = Cube()
    for value in range(family.size):
        family.decode(cube, value)
        assert family.encode(cube) == value


@pytest.mark.parametrize("family", COORDINATE_FAMILIES, ids=lambda family: family.name)
def test_coordinates_stay_in_range_for_scrambled_cube(family: CoordinateFamily) -> None:
    cube = Cube().move("U2 D' R2 F2 L2 B2 U")
    assert 0 <= family.encode(cube) < family.size


def test_solved_cube_coordinates() -> None:
    cube = Cube()
    for family in COORDINATE_FAMILIES:
        if family is UB_TO_DF:
            continue
        assert family.encode(cube) == 0
    assert get_slice(cube) == 0


def test_orientation_decode_keeps_sum_invariant() -> None:
    cube = Cube()
    for value in range(TWIST.size):
        TWIST.decode(cube, value)
        assert sum(cube.co) % 3 == 0
    for value in range(FLIP.size):
        FLIP.decode(cube, value)
        assert sum(cube.eo) % 2 == 0


def test_slice_ignores_order_of_slice_edges() -> None:
    cube = Cube().move("R2 L2 F2 B2")
    assert get_slice(cube) == 0
    assert get_fr_to_br(cube) < N_SLICE2
    assert get_fr_to_br(cube) != 0


def test_merge_matches_direct_encoding_inside_subgroup() -> None:
    for algorithm in ("", "U", "R2 D'", "U F2 L2 D R2 B2 U'"):
        cube = Cube().move(algorithm)
        merged = merge_ur_to_df(get_ur_to_ul(cube), get_ub_to_df(cube))
        assert merged == get_ur_to_df(cube)


def test_merge_reports_collisions_with_sentinel() -> None:
    # Both first coordinates place their edges in slots 0..2.
    assert merge_ur_to_df(0, 0) == -1


def test_merge_domain_keeps_edges_in_ud_layers() -> None:
    cube = Cube()
    for value in range(N_MERGE):
        UR_TO_UL.decode(cube, value)
        assert all(slot < 8 for slot, edge in enumerate(cube.ep) if edge != -1)
