from __future__ import annotations

from math import comb

from cubesolver.combinatorics import cnk, factorial, rotate_left, rotate_right


def test_cnk_matches_binomial_coefficients() -> None:
    for n in range(13):
        for k in range(13):
            assert cnk(n, k) == (comb(n, k) if k <= n else 0)


def test_factorial_small_values() -> None:
    assert [factorial(n) for n in range(6)] == [1, 1, 2, 6, 24, 120]
    assert factorial(8) == 40320


def test_rotations_only_touch_the_given_range() -> None:
    values = [0, 1, 2, 3, 4]
    rotate_left(values, 1, 3)
    assert values == [0, 2, 3, 1, 4]
    rotate_right(values, 1, 3)
    assert values == [0, 1, 2, 3, 4]
