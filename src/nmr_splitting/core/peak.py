"""Peak, splitter and peaklet vocabulary for multiplet simulation."""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, ClassVar, List, Optional, Sequence, Tuple

from nmr_splitting.numerics.combinatorics import pascals_triangle

if TYPE_CHECKING:  # pragma: no cover - import cycle guard
    from nmr_splitting.core.cascade import MultipletCascade

__all__ = [
    "RESOLUTION_MARGIN",
    "Splitter",
    "Peaklet",
    "Peak",
    "FractionalStageIndex",
]

# Adjacent peaklets closer than this many FWHMs are considered visually merged.
RESOLUTION_MARGIN = 1.1


@dataclass(frozen=True, slots=True)
class Splitter:
    """A group of ``n`` chemically equivalent protons coupled with constant ``j`` (Hz)."""

    PATTERN_ABBREVIATIONS: ClassVar[Tuple[str, ...]] = ("s", "d", "t", "q", "p", "h", "hept")
    PATTERN_NAMES: ClassVar[Tuple[str, ...]] = (
        "singlet",
        "doublet",
        "triplet",
        "quartet",
        "pentet",
        "hextet",
        "heptet",
    )

    n: int = 1
    j: float = 5.0

    def __post_init__(self) -> None:
        if self.n < 0:
            raise ValueError(f"Splitter proton count must be non-negative, got {self.n}")
        if not self.j >= 0.0:
            raise ValueError(f"Splitter coupling constant must be non-negative, got {self.j}")

    def resultant_peaklet_count(self) -> int:
        return self.n + 1

    def abbreviate_pattern(self) -> str:
        """Return the conventional abbreviation, or the peaklet count as digits."""

        # Peaklet count is n + 1, and the table is 0-indexed.
        if self.n < len(self.PATTERN_ABBREVIATIONS):
            return self.PATTERN_ABBREVIATIONS[self.n]
        return str(self.resultant_peaklet_count())

    def has_simple_abbreviation(self) -> bool:
        return self.n < len(self.PATTERN_ABBREVIATIONS) and len(self.abbreviate_pattern()) == 1

    def name_pattern(self) -> Optional[str]:
        if self.n < len(self.PATTERN_NAMES):
            return self.PATTERN_NAMES[self.n]
        return None

    def peak_ratios(self) -> List[int]:
        return pascals_triangle(self.n)


@dataclass(frozen=True, slots=True)
class Peaklet:
    """An atomic component of a multiplet.

    ``delta`` is the shift relative to the root peak center (Hz) and
    ``integration`` the fraction of the whole multiplet carried by this
    peaklet.
    """

    delta: float
    integration: float

    def overlaps_with(self, other: "Peaklet", fwhm: float) -> bool:
        return abs(self.delta - other.delta) < fwhm * RESOLUTION_MARGIN


Peaklet.PARENT_SINGLET = Peaklet(delta=0.0, integration=1.0)  # type: ignore[attr-defined]


@dataclass(frozen=True, slots=True, order=True)
class FractionalStageIndex:
    """Continuous position within the stage sequence of a cascade."""

    value: float

    def __post_init__(self) -> None:
        if not self.value >= 0.0:
            raise ValueError(f"Stage index must be non-negative, got {self.value}")

    @property
    def fractional_part(self) -> float:
        return self.value - math.floor(self.value)

    def full(self) -> int:
        return int(math.floor(self.value))

    def has_significant_partial(self) -> bool:
        return abs(self.fractional_part) > sys.float_info.epsilon

    def partial_and_index(self) -> Optional[Tuple[int, float]]:
        if self.has_significant_partial():
            return (self.full() + 1, self.fractional_part)
        return None

    def total_stage_count(self) -> int:
        return self.full() + int(self.has_significant_partial())


@dataclass
class Peak:
    """A single proton type coupled to an ordered chain of :class:`Splitter`.

    ``fwhm`` is the full width at half maximum of every peaklet, in Hz.
    """

    splitters: List[Splitter] = field(default_factory=list)
    fwhm: float = 0.5

    def __post_init__(self) -> None:
        self.splitters = list(self.splitters)
        if not self.fwhm > 0.0:
            raise ValueError(f"Peak FWHM must be positive, got {self.fwhm}")

    @classmethod
    def from_pairs(cls, pairs: Sequence[Tuple[int, float]], fwhm: float = 0.5) -> "Peak":
        return cls([Splitter(n=int(n), j=float(j)) for n, j in pairs], fwhm=fwhm)

    def total_peaklet_count(self) -> int:
        count = 1
        for splitter in self.splitters:
            count *= splitter.resultant_peaklet_count()
        return count

    def stage_count(self) -> int:
        return len(self.splitters) + 1

    def name(self) -> Optional[str]:
        """Concatenated pattern abbreviation, or ``None`` for complex patterns.

        Naming is all-or-nothing: numeric or multi-character abbreviations
        would make the concatenation ambiguous, so any such splitter collapses
        the whole name.
        """

        if not self.splitters:
            return Splitter.PATTERN_ABBREVIATIONS[0]
        if not all(splitter.has_simple_abbreviation() for splitter in self.splitters):
            return None
        return "".join(splitter.abbreviate_pattern() for splitter in self.splitters)

    def sort_by_j(self) -> None:
        """Order splitters by descending coupling constant (stable)."""

        self.splitters.sort(key=lambda splitter: splitter.j, reverse=True)

    def nth_partial_peak(self, index: FractionalStageIndex) -> "Peak":
        """Return a copy with splitting applied up to the fractional ``index``.

        The splitter list is truncated to ``index.total_stage_count()`` and,
        when the index carries a partial component, the coupling constant of
        the last remaining splitter is scaled by that fraction.
        """

        splitters = list(self.splitters[: index.total_stage_count()])
        partial = index.partial_and_index()
        if partial is not None:
            stage, part = partial
            # Splitters do not include the base stage.
            position = stage - 1
            if position >= len(splitters):
                raise IndexError(
                    f"Partial stage {stage} exceeds the {len(self.splitters)} available splitters"
                )
            splitters[position] = replace(splitters[position], j=splitters[position].j * part)
        return Peak(splitters=splitters, fwhm=self.fwhm)

    def build_multiplet_cascade(self) -> "MultipletCascade":
        from nmr_splitting.core.cascade import build_multiplet_cascade

        return build_multiplet_cascade(self)
