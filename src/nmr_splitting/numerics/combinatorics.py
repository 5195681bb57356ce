"""Binomial rows used to weight the peaklets produced by a splitter."""

from __future__ import annotations

from typing import List

__all__ = ["pascals_triangle", "normalized_pascals_triangle"]


def pascals_triangle(n: int) -> List[int]:
    """Return the ``n``-th (0-indexed) row of Pascal's triangle.

    Terms are produced with the multiplicative recurrence
    ``C(n, k) = C(n, k - 1) * (n + 1 - k) / k``.  The product is formed before
    the integer division so every intermediate division is exact.
    """

    if n < 0:
        raise ValueError(f"Pascal's triangle row must be non-negative, got {n}")

    row: List[int] = []
    term = 1
    for k in range(n + 1):
        if k > 0:
            term = term * (n + 1 - k) // k
        row.append(term)
    return row


def normalized_pascals_triangle(n: int) -> List[float]:
    """Return the ``n``-th row of Pascal's triangle scaled to sum to unity."""

    row = pascals_triangle(n)
    # The n-th row sums to 2**n.
    row_sum = 1 << n
    return [term / row_sum for term in row]
