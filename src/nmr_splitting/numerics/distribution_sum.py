"""Linear combinations of renormalised distributions."""

from __future__ import annotations

from typing import Iterable, Iterator, Sequence, Tuple

import numpy as np

from nmr_splitting.numerics.distribution import RenormalizedDistribution

__all__ = ["DistributionSum"]


class DistributionSum:
    """Sum of distributions of a single variant, ordered by center.

    The components are sorted once on construction (stable, so ties keep
    their input order) and never mutated afterwards.
    """

    __slots__ = ("_components",)

    def __init__(self, distributions: Iterable[RenormalizedDistribution] = ()) -> None:
        self._components: Tuple[RenormalizedDistribution, ...] = tuple(
            sorted(distributions, key=lambda distribution: distribution.center)
        )

    @classmethod
    def from_iterable(
        cls, distributions: Iterable[RenormalizedDistribution]
    ) -> "DistributionSum":
        return cls(distributions)

    @property
    def components(self) -> Tuple[RenormalizedDistribution, ...]:
        return self._components

    def __iter__(self) -> Iterator[RenormalizedDistribution]:
        return iter(self._components)

    def __len__(self) -> int:
        return len(self._components)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DistributionSum):
            return NotImplemented
        return self._components == other._components

    def __repr__(self) -> str:
        return f"DistributionSum({list(self._components)!r})"

    def evaluate(self, x: float) -> float:
        return sum((component.evaluate(x) for component in self._components), 0.0)

    def evaluate_cdf(self, x: float) -> float:
        return sum((component.evaluate_cdf(x) for component in self._components), 0.0)

    def evaluate_array(self, xs: Sequence[float] | np.ndarray) -> np.ndarray:
        values = np.asarray(xs, dtype=float)
        total = np.zeros_like(values)
        for component in self._components:
            total += component.evaluate_array(values)
        return total

    def evaluate_cdf_array(self, xs: Sequence[float] | np.ndarray) -> np.ndarray:
        values = np.asarray(xs, dtype=float)
        total = np.zeros_like(values)
        for component in self._components:
            total += component.evaluate_cdf_array(values)
        return total

    def extent(self, n: float) -> Tuple[float, float]:
        """Union of the component extents, each ``n`` FWHMs out from its center."""

        if not self._components:
            return (0.0, 0.0)
        left, right = self._components[0].extent_by_fwhm(n)
        for component in self._components[1:]:
            component_left, component_right = component.extent_by_fwhm(n)
            left = min(left, component_left)
            right = max(right, component_right)
        return (left, right)

    def max(self) -> float:
        """Estimate the maximum by evaluating the sum at each component center."""

        if not self._components:
            return 0.0
        return max(self.evaluate(component.center) for component in self._components)

    def _domain(
        self, n_fwhm: float | None, domain: Tuple[float, float] | None
    ) -> Tuple[float, float]:
        if domain is not None:
            return (float(domain[0]), float(domain[1]))
        if n_fwhm is None:
            raise ValueError("Either 'n_fwhm' or 'domain' must be provided")
        return self.extent(n_fwhm)

    def sample(
        self,
        count: int,
        *,
        n_fwhm: float | None = None,
        domain: Tuple[float, float] | None = None,
    ) -> Tuple[np.ndarray, np.ndarray]:
        """Evaluate the sum at ``count`` evenly spaced points."""

        if count < 2:
            raise ValueError(f"At least two samples are required, got {count}")
        left, right = self._domain(n_fwhm, domain)
        xs = np.linspace(left, right, int(count))
        return xs, self.evaluate_array(xs)

    def sample_cdf(
        self,
        count: int,
        *,
        n_fwhm: float | None = None,
        domain: Tuple[float, float] | None = None,
    ) -> Tuple[np.ndarray, np.ndarray]:
        """Evaluate the cumulative sum at ``count`` evenly spaced points."""

        if count < 2:
            raise ValueError(f"At least two samples are required, got {count}")
        left, right = self._domain(n_fwhm, domain)
        xs = np.linspace(left, right, int(count))
        return xs, self.evaluate_cdf_array(xs)
