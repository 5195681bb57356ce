"""Breadth-first expansion of a splitter chain into a multiplet cascade.

A cascade holds one list of peaklets per stage: stage ``k`` is the multiplet
obtained after applying the first ``k`` splitters to the parent singlet
(*e.g.* s → q → qd → qdd).  Ordering inside a stage is meaningful: the
children of one parent are contiguous, and these groups follow the order of
their parents in the previous stage.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Deque, Iterator, List, Sequence, Tuple

from nmr_splitting.core.errors import CascadeInvariantError
from nmr_splitting.core.peak import Peak, Peaklet
from nmr_splitting.core.units import j_to_ppm
from nmr_splitting.numerics.combinatorics import normalized_pascals_triangle
from nmr_splitting.numerics.distribution import DistributionKind, resolve_distribution
from nmr_splitting.numerics.distribution_sum import DistributionSum

__all__ = [
    "SplittingRelationship",
    "MultipletCascade",
    "build_multiplet_cascade",
]

logger = logging.getLogger(__name__)

Stage = Tuple[Peaklet, ...]


@dataclass(frozen=True, slots=True)
class SplittingRelationship:
    """A parent peaklet together with the children it splits into."""

    parent: Peaklet
    children: Tuple[Peaklet, ...]

    def children_count(self) -> int:
        return len(self.children)


@dataclass(frozen=True, slots=True)
class MultipletCascade:
    """Splitting patterns from the cumulative contributions of each splitter.

    ``stages[k]`` contains the peaklets produced by the first ``k`` splitters
    and ``fwhm`` is the width (Hz) applied uniformly to every peaklet when a
    stage is rendered.
    """

    stages: Tuple[Stage, ...]
    fwhm: float

    def stage_count(self) -> int:
        return len(self.stages)

    def child_stages_count(self) -> int:
        return len(self.stages) - 1

    def stage(self, n: int) -> Stage:
        if not 0 <= n < len(self.stages):
            raise IndexError(f"Stage {n} is outside 0..{len(self.stages) - 1}")
        return self.stages[n]

    def final_stage(self) -> Stage:
        return self.stages[-1]

    def base_peaklet(self) -> Peaklet:
        base_stage = self.stages[0]
        if len(base_stage) != 1:
            raise CascadeInvariantError(
                "The base stage must contain exactly the parent singlet",
                stage=0,
                parent_count=1,
                children_count=len(base_stage),
            )
        return base_stage[0]

    def nth_waveform(
        self,
        n: int,
        field_strength: float,
        kind: DistributionKind = "gaussian",
    ) -> DistributionSum:
        """Render stage ``n`` as a sum of line shapes in ppm.

        ``field_strength`` is the instrument frequency in MHz used to convert
        both peaklet shifts and the line width from Hz.
        """

        if not field_strength > 0.0:
            raise ValueError(f"Field strength must be positive, got {field_strength}")
        distribution = resolve_distribution(kind)
        fwhm_ppm = j_to_ppm(self.fwhm, field_strength)
        return DistributionSum(
            distribution.with_fwhm_normalized(
                j_to_ppm(peaklet.delta, field_strength),
                fwhm_ppm,
                peaklet.integration,
            )
            for peaklet in self.stage(n)
        )

    def final_waveform(
        self, field_strength: float, kind: DistributionKind = "gaussian"
    ) -> DistributionSum:
        return self.nth_waveform(len(self.stages) - 1, field_strength, kind)

    def iter_nth_stage(self, n: int) -> Iterator[SplittingRelationship]:
        """Yield each parent of stage ``n - 1`` with its children in stage ``n``.

        Only child stages can be grouped; the base stage has no parent.
        """

        if n == 0:
            raise ValueError("iter_nth_stage() cannot be called on the base stage")
        children = self.stage(n)
        parents = self.stages[n - 1]
        if len(children) % len(parents) != 0:
            raise CascadeInvariantError(
                "The number of child peaklets should be an integer multiple of the "
                "number of parents",
                stage=n,
                parent_count=len(parents),
                children_count=len(children),
            )
        group_size = len(children) // len(parents)
        for index, parent in enumerate(parents):
            start = index * group_size
            yield SplittingRelationship(parent=parent, children=children[start : start + group_size])

    def max_integration_of_stage(self, n: int) -> float:
        return max(peaklet.integration for peaklet in self.stage(n))

    def total_integration(self, n: int) -> float:
        return sum(peaklet.integration for peaklet in self.stage(n))

    def is_stage_resolved(self, n: int) -> bool:
        """Estimate whether the splitting introduced at stage ``n`` is visible.

        Every group experiences the same splitting, so only the first one is
        checked.  Overlap between different groups is not considered.
        """

        if n == 0:
            return True
        group = next(self.iter_nth_stage(n))
        return all(
            not left.overlaps_with(right, self.fwhm)
            for left, right in zip(group.children, group.children[1:])
        )


def build_multiplet_cascade(peak: Peak) -> MultipletCascade:
    """Expand ``peak`` into its multiplet cascade.

    The queue holds ``(peaklet, offset)`` pairs where ``offset`` indexes the
    first splitter still to be applied to ``peaklet``.  Processing in FIFO
    order fills stage ``k`` completely, parent by parent, before stage
    ``k + 1`` starts.
    """

    splitters = peak.splitters
    total = len(splitters)
    stages: List[List[Peaklet]] = [[] for _ in range(total + 1)]
    weights: Sequence[Sequence[float]] = [
        normalized_pascals_triangle(splitter.n) for splitter in splitters
    ]

    queue: Deque[Tuple[Peaklet, int]] = deque()
    queue.append((Peaklet.PARENT_SINGLET, 0))  # type: ignore[attr-defined]

    while queue:
        peaklet, offset = queue.popleft()
        stages[offset].append(peaklet)
        if offset == total:
            continue

        splitter = splitters[offset]
        peak_count = splitter.resultant_peaklet_count()
        delta = peaklet.delta - (peak_count - 1) * splitter.j / 2.0
        for weight in weights[offset]:
            queue.append(
                (Peaklet(delta=delta, integration=peaklet.integration * weight), offset + 1)
            )
            delta += splitter.j

    cascade = MultipletCascade(stages=tuple(tuple(stage) for stage in stages), fwhm=peak.fwhm)
    logger.debug(
        "Multiplet cascade built.",
        extra={
            "event": "cascade.built",
            "splitters": total,
            "peaklets": len(cascade.final_stage()),
        },
    )
    return cascade
