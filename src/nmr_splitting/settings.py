"""Session configuration models."""

from __future__ import annotations

import logging
from collections.abc import Mapping as ABCMapping
from dataclasses import dataclass
from typing import Any, Mapping

from nmr_splitting.numerics.distribution import DISTRIBUTION_KINDS, DistributionKind
from nmr_splitting.presets import DEFAULT_PRESET, load_presets

__all__ = [
    "DEFAULT_FIELD_STRENGTH",
    "DEFAULT_FWHM",
    "SessionSettings",
]

logger = logging.getLogger(__name__)

DEFAULT_FIELD_STRENGTH = 600.0
DEFAULT_FWHM = 1.0
DEFAULT_SAMPLES = 5000
DEFAULT_EXTENT_FWHM = 10.0
DEFAULT_MAX_SPLITTERS = 4
DEFAULT_MAX_PROTON_COUNT = 9
DEFAULT_TOO_COMPLEX_THRESHOLD = 100

FIELD_STRENGTH_RANGE = (40.0, 1200.0)
FWHM_RANGE = (0.5, 4.0)
J_RANGE = (0.2, 20.0)


def _coerce_float(value: Any, fallback: float, *, minimum: float | None = None) -> float:
    try:
        numeric = float(value)
    except (TypeError, ValueError):
        return fallback
    if numeric != numeric:  # NaN
        return fallback
    if minimum is not None and numeric < minimum:
        return fallback
    return numeric


def _coerce_int(value: Any, fallback: int, *, minimum: int = 0) -> int:
    if isinstance(value, bool):
        return fallback
    try:
        numeric = int(value)
    except (TypeError, ValueError):
        return fallback
    if numeric < minimum:
        return fallback
    return numeric


@dataclass(frozen=True, slots=True)
class SessionSettings:
    """Immutable session configuration parsed from TOML sources."""

    field_strength: float = DEFAULT_FIELD_STRENGTH
    fwhm: float = DEFAULT_FWHM
    distribution: DistributionKind = "gaussian"
    preset: str = DEFAULT_PRESET
    samples: int = DEFAULT_SAMPLES
    extent_fwhm: float = DEFAULT_EXTENT_FWHM
    max_splitters: int = DEFAULT_MAX_SPLITTERS
    max_proton_count: int = DEFAULT_MAX_PROTON_COUNT
    too_complex_threshold: int = DEFAULT_TOO_COMPLEX_THRESHOLD

    @classmethod
    def from_config(cls, config: Mapping[str, Any] | None = None) -> "SessionSettings":
        """Coerce the ``[session]`` table of ``config`` into settings.

        Unknown or invalid values fall back to the defaults rather than
        failing, mirroring how the rest of the configuration is parsed.
        """

        raw = config.get("session") if config else None
        section: Mapping[str, Any] = raw if isinstance(raw, ABCMapping) else {}
        defaults = cls()

        distribution = str(section.get("distribution", defaults.distribution)).strip().lower()
        if distribution not in DISTRIBUTION_KINDS:
            distribution = defaults.distribution

        preset = section.get("preset", defaults.preset)
        if not isinstance(preset, str) or preset not in load_presets():
            logger.warning(
                "Unknown preset in configuration; using the default.",
                extra={"event": "settings.unknown_preset", "preset": preset, "default": defaults.preset},
            )
            preset = defaults.preset

        return cls(
            field_strength=_coerce_float(
                section.get("field_strength"), defaults.field_strength, minimum=1e-9
            ),
            fwhm=_coerce_float(section.get("fwhm"), defaults.fwhm, minimum=1e-9),
            distribution=distribution,  # type: ignore[arg-type]
            preset=preset,
            samples=_coerce_int(section.get("samples"), defaults.samples, minimum=2),
            extent_fwhm=_coerce_float(section.get("extent_fwhm"), defaults.extent_fwhm, minimum=0.0),
            max_splitters=_coerce_int(section.get("max_splitters"), defaults.max_splitters, minimum=1),
            max_proton_count=_coerce_int(
                section.get("max_proton_count"), defaults.max_proton_count, minimum=1
            ),
            too_complex_threshold=_coerce_int(
                section.get("too_complex_threshold"), defaults.too_complex_threshold, minimum=1
            ),
        )

    def as_dict(self) -> dict[str, Any]:
        return {
            "field_strength": self.field_strength,
            "fwhm": self.fwhm,
            "distribution": self.distribution,
            "preset": self.preset,
            "samples": self.samples,
            "extent_fwhm": self.extent_fwhm,
            "max_splitters": self.max_splitters,
            "max_proton_count": self.max_proton_count,
            "too_complex_threshold": self.too_complex_threshold,
        }
