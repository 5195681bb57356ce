from __future__ import annotations

import math

import pytest

from nmr_splitting.numerics.combinatorics import normalized_pascals_triangle, pascals_triangle


EXPECTED_ROWS = [
    [1],
    [1, 1],
    [1, 2, 1],
    [1, 3, 3, 1],
    [1, 4, 6, 4, 1],
    [1, 5, 10, 10, 5, 1],
    [1, 6, 15, 20, 15, 6, 1],
]


@pytest.mark.parametrize("n, expected", list(enumerate(EXPECTED_ROWS)))
def test_pascals_triangle_matches_known_rows(n: int, expected: list[int]) -> None:
    assert pascals_triangle(n) == expected


@pytest.mark.parametrize("n", range(0, 13))
def test_pascals_triangle_matches_binomial_coefficients(n: int) -> None:
    assert pascals_triangle(n) == [math.comb(n, k) for k in range(n + 1)]


@pytest.mark.parametrize("n", range(0, 13))
def test_normalized_row_sums_to_unity(n: int) -> None:
    row = normalized_pascals_triangle(n)

    assert len(row) == n + 1
    assert sum(row) == pytest.approx(1.0)
    assert row == pytest.approx(row[::-1])


def test_normalized_triplet_weights() -> None:
    assert normalized_pascals_triangle(2) == pytest.approx([0.25, 0.5, 0.25])


def test_large_rows_remain_exact() -> None:
    row = pascals_triangle(60)

    assert row[30] == math.comb(60, 30)
    assert sum(normalized_pascals_triangle(60)) == pytest.approx(1.0)


def test_negative_row_is_rejected() -> None:
    with pytest.raises(ValueError):
        pascals_triangle(-1)
    with pytest.raises(ValueError):
        normalized_pascals_triangle(-3)
