"""Domain model and cascade algorithms for multiplet splitting."""

from nmr_splitting.core.cascade import (
    MultipletCascade,
    SplittingRelationship,
    build_multiplet_cascade,
)
from nmr_splitting.core.diagram import SplittingDiagram, build_splitting_diagram
from nmr_splitting.core.errors import CascadeInvariantError
from nmr_splitting.core.peak import (
    RESOLUTION_MARGIN,
    FractionalStageIndex,
    Peak,
    Peaklet,
    Splitter,
)
from nmr_splitting.core.units import j_to_ppm, mhz_to_tesla

__all__ = [
    "Splitter",
    "Peaklet",
    "Peak",
    "FractionalStageIndex",
    "RESOLUTION_MARGIN",
    "MultipletCascade",
    "SplittingRelationship",
    "build_multiplet_cascade",
    "SplittingDiagram",
    "build_splitting_diagram",
    "CascadeInvariantError",
    "j_to_ppm",
    "mhz_to_tesla",
]
