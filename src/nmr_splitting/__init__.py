"""Simulation of ¹H-NMR multiplet splitting.

The package expands a chain of coupled proton groups into a cascade of
binomially weighted peaklets and renders any stage of that cascade as a sum
of Gaussian or Lorentzian line shapes.
"""

from ._version import __version__
from .core.cascade import MultipletCascade, SplittingRelationship, build_multiplet_cascade
from .core.diagram import SplittingDiagram, build_splitting_diagram
from .core.errors import CascadeInvariantError
from .core.peak import FractionalStageIndex, Peak, Peaklet, Splitter
from .core.units import j_to_ppm, mhz_to_tesla
from .numerics.combinatorics import normalized_pascals_triangle, pascals_triangle
from .numerics.distribution import Gaussian, Lorentzian, resolve_distribution
from .numerics.distribution_sum import DistributionSum
from .presets import get_preset, load_presets
from .session import SplittingSession
from .settings import SessionSettings

__all__ = [
    "Splitter",
    "Peaklet",
    "Peak",
    "FractionalStageIndex",
    "MultipletCascade",
    "SplittingRelationship",
    "build_multiplet_cascade",
    "SplittingDiagram",
    "build_splitting_diagram",
    "CascadeInvariantError",
    "j_to_ppm",
    "mhz_to_tesla",
    "pascals_triangle",
    "normalized_pascals_triangle",
    "Gaussian",
    "Lorentzian",
    "resolve_distribution",
    "DistributionSum",
    "load_presets",
    "get_preset",
    "SplittingSession",
    "SessionSettings",
    "__version__",
]
