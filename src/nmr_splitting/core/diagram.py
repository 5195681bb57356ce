"""Geometry of the tree-style splitting diagram.

Stage ``k`` is drawn on the baseline ``y = -k``.  Each peaklet is a vertical
marker whose height is proportional to its integration relative to the
largest peaklet of its stage, and each child is joined to its parent's base
by a dashed connector bending at the top of the stage band.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from nmr_splitting.core.cascade import MultipletCascade, SplittingRelationship
from nmr_splitting.core.peak import FractionalStageIndex, Peaklet

__all__ = [
    "STAGE_ORIGIN",
    "MAX_PEAKLET_HEIGHT",
    "PARTIAL_ENABLE_THRESHOLD",
    "PeakletMarker",
    "Connector",
    "DiagramStage",
    "SplittingDiagram",
    "base_height_of",
    "tip_height_of",
    "build_splitting_diagram",
]

STAGE_ORIGIN = 0.0
MAX_PEAKLET_HEIGHT = 0.7
# A partially applied stage is drawn enabled once it is this far along.
PARTIAL_ENABLE_THRESHOLD = 0.9

Point = Tuple[float, float]


def base_height_of(stage: int) -> float:
    return STAGE_ORIGIN - stage


def tip_height_of(peaklet: Peaklet, stage: int, max_integration: float) -> float:
    return base_height_of(stage) + (peaklet.integration / max_integration) * MAX_PEAKLET_HEIGHT


@dataclass(frozen=True, slots=True)
class PeakletMarker:
    delta: float
    base: float
    tip: float
    enabled: bool


@dataclass(frozen=True, slots=True)
class Connector:
    points: Tuple[Point, Point, Point]
    enabled: bool


@dataclass(frozen=True, slots=True)
class DiagramStage:
    index: int
    enabled: bool
    max_integration: float
    markers: Tuple[PeakletMarker, ...]
    connectors: Tuple[Connector, ...]


@dataclass(frozen=True, slots=True)
class SplittingDiagram:
    base: PeakletMarker
    stages: Tuple[DiagramStage, ...]

    def as_dict(self) -> dict:
        def _marker(marker: PeakletMarker) -> dict:
            return {
                "delta": marker.delta,
                "base": marker.base,
                "tip": marker.tip,
                "enabled": marker.enabled,
            }

        return {
            "base": _marker(self.base),
            "stages": [
                {
                    "index": stage.index,
                    "enabled": stage.enabled,
                    "max_integration": stage.max_integration,
                    "markers": [_marker(marker) for marker in stage.markers],
                    "connectors": [
                        {"points": [list(point) for point in connector.points], "enabled": connector.enabled}
                        for connector in stage.connectors
                    ],
                }
                for stage in self.stages
            ],
        }


def _marker_for(peaklet: Peaklet, stage: int, max_integration: float, enabled: bool) -> PeakletMarker:
    return PeakletMarker(
        delta=peaklet.delta,
        base=base_height_of(stage),
        tip=tip_height_of(peaklet, stage, max_integration),
        enabled=enabled,
    )


def _group_geometry(
    group: SplittingRelationship, stage: int, max_integration: float, enabled: bool
) -> Tuple[List[PeakletMarker], List[Connector]]:
    markers: List[PeakletMarker] = []
    connectors: List[Connector] = []
    parent_base = (group.parent.delta, base_height_of(stage - 1))
    for child in group.children:
        marker = _marker_for(child, stage, max_integration, enabled)
        markers.append(marker)
        corner = (child.delta, base_height_of(stage) + MAX_PEAKLET_HEIGHT)
        connectors.append(
            Connector(points=((child.delta, marker.tip), corner, parent_base), enabled=enabled)
        )
    return markers, connectors


def _is_stage_enabled(
    stage: int, partial_cascade: MultipletCascade, view_stage: FractionalStageIndex
) -> bool:
    if stage <= view_stage.full():
        return True
    partial = view_stage.partial_and_index()
    if partial is None:
        return False
    partial_index, part = partial
    if stage != partial_index:
        return False
    return part > PARTIAL_ENABLE_THRESHOLD or partial_cascade.is_stage_resolved(partial_index)


def build_splitting_diagram(
    full_cascade: MultipletCascade,
    partial_cascade: MultipletCascade,
    view_stage: FractionalStageIndex,
) -> SplittingDiagram:
    """Lay out ``full_cascade`` with stages enabled up to ``view_stage``.

    ``partial_cascade`` is the cascade of the peak truncated at
    ``view_stage``; it decides whether a partially applied stage is already
    resolved enough to be drawn as enabled.
    """

    base = _marker_for(full_cascade.base_peaklet(), 0, 1.0, True)
    stages: List[DiagramStage] = []
    for stage in range(1, full_cascade.child_stages_count() + 1):
        max_integration = full_cascade.max_integration_of_stage(stage)
        enabled = _is_stage_enabled(stage, partial_cascade, view_stage)
        markers: List[PeakletMarker] = []
        connectors: List[Connector] = []
        for group in full_cascade.iter_nth_stage(stage):
            group_markers, group_connectors = _group_geometry(group, stage, max_integration, enabled)
            markers.extend(group_markers)
            connectors.extend(group_connectors)
        stages.append(
            DiagramStage(
                index=stage,
                enabled=enabled,
                max_integration=max_integration,
                markers=tuple(markers),
                connectors=tuple(connectors),
            )
        )
    return SplittingDiagram(base=base, stages=tuple(stages))
