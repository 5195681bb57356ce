"""Renormalised line shapes used to render individual peaklets.

Two variants are supported, :class:`Gaussian` and :class:`Lorentzian`.  Both
are parameterised by a center, a full width at half maximum (FWHM) and a
normalisation weight, and both satisfy the :class:`RenormalizedDistribution`
protocol.  The variant set is closed: :func:`resolve_distribution` maps a
:data:`DistributionKind` onto the concrete class.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Literal, Mapping, Protocol, Tuple, Type, runtime_checkable

import numpy as np
from scipy.special import erfc as _erfc_array

__all__ = [
    "DistributionKind",
    "DISTRIBUTION_KINDS",
    "RenormalizedDistribution",
    "Gaussian",
    "Lorentzian",
    "resolve_distribution",
]

DistributionKind = Literal["gaussian", "lorentzian"]

FRAC_1_SQRT_2PI = 1.0 / math.sqrt(2.0 * math.pi)
FRAC_1_SQRT_2 = 1.0 / math.sqrt(2.0)
FRAC_1_PI = 1.0 / math.pi

# 2 sqrt(2 ln 2), the ratio between a Gaussian's FWHM and its σ.
FWHM_PER_SIGMA = 2.0 * math.sqrt(2.0 * math.log(2.0))


@runtime_checkable
class RenormalizedDistribution(Protocol):
    """Probability density renormalised by an arbitrary weight."""

    @property
    def center(self) -> float: ...

    @property
    def fwhm(self) -> float: ...

    @property
    def normalization(self) -> float: ...

    def evaluate(self, x: float) -> float: ...

    def evaluate_cdf(self, x: float) -> float: ...

    def evaluate_array(self, xs: np.ndarray) -> np.ndarray: ...

    def evaluate_cdf_array(self, xs: np.ndarray) -> np.ndarray: ...

    def extent_by_fwhm(self, n: float) -> Tuple[float, float]: ...


def _extent(center: float, fwhm: float, n: float) -> Tuple[float, float]:
    return (center - fwhm * n, center + fwhm * n)


@dataclass(frozen=True, slots=True)
class Gaussian:
    """Normal distribution scaled by ``normalization``."""

    mu: float
    sigma: float
    normalization: float = 1.0

    @classmethod
    def with_fwhm_normalized(
        cls, center: float, fwhm: float, normalization: float
    ) -> "Gaussian":
        return cls(mu=center, sigma=fwhm / FWHM_PER_SIGMA, normalization=normalization)

    @property
    def center(self) -> float:
        return self.mu

    @property
    def fwhm(self) -> float:
        return self.sigma * FWHM_PER_SIGMA

    def evaluate(self, x: float) -> float:
        sigma_inv = 1.0 / self.sigma
        offset = x - self.mu
        return (
            self.normalization
            * FRAC_1_SQRT_2PI
            * sigma_inv
            * math.exp(-0.5 * sigma_inv * sigma_inv * offset * offset)
        )

    def evaluate_cdf(self, x: float) -> float:
        return 0.5 * math.erfc(-(x - self.mu) / self.sigma * FRAC_1_SQRT_2) * self.normalization

    def evaluate_array(self, xs: np.ndarray) -> np.ndarray:
        values = np.asarray(xs, dtype=float)
        sigma_inv = 1.0 / self.sigma
        offset = values - self.mu
        return (
            self.normalization
            * FRAC_1_SQRT_2PI
            * sigma_inv
            * np.exp(-0.5 * sigma_inv * sigma_inv * offset * offset)
        )

    def evaluate_cdf_array(self, xs: np.ndarray) -> np.ndarray:
        values = np.asarray(xs, dtype=float)
        return 0.5 * _erfc_array(-(values - self.mu) / self.sigma * FRAC_1_SQRT_2) * self.normalization

    def extent_by_fwhm(self, n: float) -> Tuple[float, float]:
        return _extent(self.mu, self.fwhm, n)


@dataclass(frozen=True, slots=True)
class Lorentzian:
    """Cauchy distribution scaled by ``normalization``."""

    x0: float
    gamma: float
    normalization: float = 1.0

    @classmethod
    def with_fwhm_normalized(
        cls, center: float, fwhm: float, normalization: float
    ) -> "Lorentzian":
        return cls(x0=center, gamma=fwhm / 2.0, normalization=normalization)

    @property
    def center(self) -> float:
        return self.x0

    @property
    def fwhm(self) -> float:
        return self.gamma * 2.0

    def evaluate(self, x: float) -> float:
        offset = x - self.x0
        return FRAC_1_PI * self.gamma / (offset * offset + self.gamma * self.gamma) * self.normalization

    def evaluate_cdf(self, x: float) -> float:
        return (FRAC_1_PI * math.atan((x - self.x0) / self.gamma) + 0.5) * self.normalization

    def evaluate_array(self, xs: np.ndarray) -> np.ndarray:
        offset = np.asarray(xs, dtype=float) - self.x0
        return FRAC_1_PI * self.gamma / (offset * offset + self.gamma * self.gamma) * self.normalization

    def evaluate_cdf_array(self, xs: np.ndarray) -> np.ndarray:
        offset = np.asarray(xs, dtype=float) - self.x0
        return (FRAC_1_PI * np.arctan(offset / self.gamma) + 0.5) * self.normalization

    def extent_by_fwhm(self, n: float) -> Tuple[float, float]:
        return _extent(self.x0, self.fwhm, n)


DISTRIBUTION_KINDS: Mapping[str, Type[Gaussian] | Type[Lorentzian]] = {
    "gaussian": Gaussian,
    "lorentzian": Lorentzian,
}


def resolve_distribution(kind: str) -> Type[Gaussian] | Type[Lorentzian]:
    """Return the distribution class registered under ``kind``."""

    try:
        return DISTRIBUTION_KINDS[kind.strip().lower()]
    except (AttributeError, KeyError):
        raise ValueError(
            f"Unknown distribution {kind!r}; expected one of {sorted(DISTRIBUTION_KINDS)}"
        ) from None
