"""Mutable simulation state owned by an interactive front end.

:class:`SplittingSession` keeps the peak configuration, the instrument
frequency and the requested (possibly fractional) view stage.  The full and
partial cascades are derived views rebuilt after every edit.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Mapping, Optional, Tuple

from nmr_splitting.animation import CyclicStageAnimation
from nmr_splitting.core.cascade import MultipletCascade
from nmr_splitting.core.diagram import SplittingDiagram, build_splitting_diagram
from nmr_splitting.core.peak import FractionalStageIndex, Peak, Splitter
from nmr_splitting.core.units import mhz_to_tesla
from nmr_splitting.numerics.distribution import resolve_distribution
from nmr_splitting.numerics.distribution_sum import DistributionSum
from nmr_splitting.presets import Preset, get_preset, load_presets
from nmr_splitting.settings import FIELD_STRENGTH_RANGE, FWHM_RANGE, J_RANGE, SessionSettings

__all__ = ["ANIMATION_TIME_PER_STAGE", "COMPLEX_PATTERN_LABEL", "SessionLockedError", "SplittingSession"]

logger = logging.getLogger(__name__)

ANIMATION_TIME_PER_STAGE = 2.0
COMPLEX_PATTERN_LABEL = "<complex>"


class SessionLockedError(RuntimeError):
    """Raised when the configuration is edited while the view stage is animating."""


def _clamp(value: float, bounds: Tuple[float, float]) -> float:
    return min(max(value, bounds[0]), bounds[1])


class SplittingSession:
    """Peak configuration plus its cached cascades."""

    def __init__(
        self,
        settings: SessionSettings | None = None,
        *,
        presets: Mapping[str, Preset] | None = None,
    ) -> None:
        self.settings = settings or SessionSettings()
        self._presets = presets if presets is not None else load_presets()
        self.selected_preset = self.settings.preset
        splitters = get_preset(self.selected_preset, self._presets)
        self.field_strength = _clamp(self.settings.field_strength, FIELD_STRENGTH_RANGE)
        self.distribution = self.settings.distribution
        self.peak = Peak(splitters=list(splitters), fwhm=_clamp(self.settings.fwhm, FWHM_RANGE))
        self.animation = CyclicStageAnimation(
            float(len(self.peak.splitters)),
            (0.0, float(len(self.peak.splitters))),
            ANIMATION_TIME_PER_STAGE * self.peak.stage_count(),
        )
        self._full_cascade: MultipletCascade
        self._partial_cascade: MultipletCascade
        self._refresh()

    # -- derived views -------------------------------------------------

    @property
    def view_stage(self) -> float:
        return self.animation.value

    def stage_index(self) -> FractionalStageIndex:
        return FractionalStageIndex(self.view_stage)

    def full_cascade(self) -> MultipletCascade:
        return self._full_cascade

    def partial_cascade(self) -> MultipletCascade:
        return self._partial_cascade

    def _refresh(self) -> None:
        self._full_cascade = self.peak.build_multiplet_cascade()
        self._partial_cascade = self.peak.nth_partial_peak(self.stage_index()).build_multiplet_cascade()

    def _update_animation_parameters(self) -> None:
        self.animation.set_bounds((0.0, float(len(self.peak.splitters))))
        self.animation.set_duration(ANIMATION_TIME_PER_STAGE * self.peak.stage_count())

    def _ensure_modifiable(self) -> None:
        if not self.can_modify_configuration():
            raise SessionLockedError("The configuration cannot change while the view stage animates")

    def _after_splitters_changed(self) -> None:
        self._refresh()
        count = self.peak.total_peaklet_count()
        if self.is_too_complex():
            logger.warning(
                "Requested splitting pattern is highly complex; rendering may degrade.",
                extra={
                    "event": "session.too_complex",
                    "peaklets": count,
                    "threshold": self.settings.too_complex_threshold,
                },
            )

    def can_modify_configuration(self) -> bool:
        return not self.animation.is_animating()

    def field_strength_tesla(self) -> float:
        return mhz_to_tesla(self.field_strength)

    def waveform(self) -> DistributionSum:
        return self._partial_cascade.final_waveform(self.field_strength, self.distribution)

    def diagram(self) -> SplittingDiagram:
        return build_splitting_diagram(self._full_cascade, self._partial_cascade, self.stage_index())

    def is_too_complex(self) -> bool:
        return self.peak.total_peaklet_count() > self.settings.too_complex_threshold

    def pattern_label(self) -> str:
        return self.peak.name() or COMPLEX_PATTERN_LABEL

    def is_preset_modified(self) -> bool:
        return tuple(self.peak.splitters) != get_preset(self.selected_preset, self._presets)

    def presets(self) -> Mapping[str, Preset]:
        return self._presets

    # -- edits ---------------------------------------------------------

    def set_field_strength(self, frequency: float) -> None:
        self._ensure_modifiable()
        self.field_strength = _clamp(float(frequency), FIELD_STRENGTH_RANGE)

    def set_distribution(self, kind: str) -> None:
        resolve_distribution(kind)
        self.distribution = kind.strip().lower()  # type: ignore[assignment]

    def set_fwhm(self, fwhm: float) -> None:
        self._ensure_modifiable()
        self.peak.fwhm = _clamp(float(fwhm), FWHM_RANGE)
        self._refresh()

    def set_view_stage(self, value: float) -> None:
        self.animation.set_value(value)
        self._refresh()

    def add_splitter(self, splitter: Optional[Splitter] = None) -> bool:
        """Append ``splitter`` (default ``Splitter()``), advancing the view stage."""

        self._ensure_modifiable()
        if len(self.peak.splitters) >= self.settings.max_splitters:
            return False
        self.peak.splitters.append(self._bounded(splitter if splitter is not None else Splitter()))
        self._update_animation_parameters()
        self.animation.set_value(self.view_stage + 1.0)
        self._after_splitters_changed()
        return True

    def remove_splitter(self, index: int) -> bool:
        """Remove the splitter at ``index``; the last remaining one is kept."""

        self._ensure_modifiable()
        if len(self.peak.splitters) <= 1:
            return False
        del self.peak.splitters[index]
        self.animation.set_value(self.view_stage - 1.0)
        self._update_animation_parameters()
        self._after_splitters_changed()
        return True

    def _bounded(self, splitter: Splitter) -> Splitter:
        return Splitter(
            n=int(min(max(splitter.n, 1), self.settings.max_proton_count)),
            j=_clamp(float(splitter.j), J_RANGE),
        )

    def update_splitter(self, index: int, *, n: Optional[int] = None, j: Optional[float] = None) -> Splitter:
        self._ensure_modifiable()
        current = self.peak.splitters[index]
        updated = self._bounded(
            replace(
                current,
                n=current.n if n is None else max(int(n), 0),
                j=current.j if j is None else max(float(j), 0.0),
            )
        )
        self.peak.splitters[index] = updated
        self._after_splitters_changed()
        return updated

    def move_splitter_up(self, index: int) -> bool:
        self._ensure_modifiable()
        if not 0 < index < len(self.peak.splitters):
            return False
        splitters = self.peak.splitters
        splitters[index - 1], splitters[index] = splitters[index], splitters[index - 1]
        self._refresh()
        return True

    def move_splitter_down(self, index: int) -> bool:
        self._ensure_modifiable()
        if not 0 <= index < len(self.peak.splitters) - 1:
            return False
        splitters = self.peak.splitters
        splitters[index], splitters[index + 1] = splitters[index + 1], splitters[index]
        self._refresh()
        return True

    def sort_by_j(self) -> None:
        self._ensure_modifiable()
        self.peak.sort_by_j()
        self._refresh()

    def select_preset(self, name: str) -> None:
        get_preset(name, self._presets)
        self.selected_preset = name

    def apply_preset(self, name: Optional[str] = None) -> None:
        """Load the selected preset and show its fully split pattern."""

        self._ensure_modifiable()
        if name is not None:
            self.select_preset(name)
        self.peak.splitters = list(get_preset(self.selected_preset, self._presets))
        self._update_animation_parameters()
        self.animation.set_value(float("inf"))
        self._after_splitters_changed()
        logger.info(
            "Preset applied.",
            extra={"event": "session.preset_applied", "preset": self.selected_preset},
        )

    # -- animation -----------------------------------------------------

    def toggle_animation(self, now: float) -> None:
        self.animation.toggle(now)

    def tick(self, now: float) -> float:
        value = self.animation.tick(now)
        if self.animation.is_animating():
            self._refresh()
        return value

    def summary(self) -> Mapping[str, Any]:
        cascade = self._full_cascade
        return {
            "pattern": self.pattern_label(),
            "preset": self.selected_preset,
            "preset_modified": self.is_preset_modified(),
            "field_strength_mhz": self.field_strength,
            "field_strength_tesla": self.field_strength_tesla(),
            "fwhm_hz": self.peak.fwhm,
            "view_stage": self.view_stage,
            "total_peaklets": self.peak.total_peaklet_count(),
            "too_complex": self.is_too_complex(),
            "stages_resolved": [cascade.is_stage_resolved(stage) for stage in range(cascade.stage_count())],
        }
