"""Numerical building blocks: binomial rows, line shapes and their sums."""

from nmr_splitting.numerics.combinatorics import (
    normalized_pascals_triangle,
    pascals_triangle,
)
from nmr_splitting.numerics.distribution import (
    DISTRIBUTION_KINDS,
    DistributionKind,
    Gaussian,
    Lorentzian,
    RenormalizedDistribution,
    resolve_distribution,
)
from nmr_splitting.numerics.distribution_sum import DistributionSum
from nmr_splitting.numerics.easing import (
    ease_transition,
    ease_transition_inverse,
)

__all__ = [
    "pascals_triangle",
    "normalized_pascals_triangle",
    "DistributionKind",
    "DISTRIBUTION_KINDS",
    "RenormalizedDistribution",
    "Gaussian",
    "Lorentzian",
    "resolve_distribution",
    "DistributionSum",
    "ease_transition",
    "ease_transition_inverse",
]
