"""Command handlers for the nmr-splitting CLI."""

from __future__ import annotations

import argparse
import logging
from typing import Any, Dict, List, Mapping

from nmr_splitting.cli.common import render_payload, resolve_exports, resolve_peak, resolve_stage
from nmr_splitting.cli.errors import CliError
from nmr_splitting.core.cascade import MultipletCascade
from nmr_splitting.core.diagram import build_splitting_diagram
from nmr_splitting.core.peak import Peak
from nmr_splitting.core.units import mhz_to_tesla
from nmr_splitting.presets import load_presets
from nmr_splitting.session import COMPLEX_PATTERN_LABEL
from nmr_splitting.settings import SessionSettings
from nmr_splitting.visualization.sparkline import render_waveform

__all__ = [
    "build_describe_payload",
    "build_waveform_payload",
    "build_diagram_payload",
    "build_presets_payload",
]

logger = logging.getLogger(__name__)


def _settings(config: Mapping[str, Any]) -> SessionSettings:
    return SessionSettings.from_config(config)


def _warn_if_complex(peak: Peak, settings: SessionSettings) -> bool:
    count = peak.total_peaklet_count()
    if count <= settings.too_complex_threshold:
        return False
    logger.warning(
        "Requested splitting pattern is highly complex; rendering may degrade.",
        extra={
            "event": "cli.too_complex",
            "peaklets": count,
            "threshold": settings.too_complex_threshold,
        },
    )
    return True


def _check_field_strength(namespace: argparse.Namespace) -> float:
    field_strength = float(namespace.field_strength)
    if not field_strength > 0.0:
        raise CliError(
            "Field strength must be positive.",
            category="usage",
            context={"field_strength": field_strength},
        )
    return field_strength


def _stage_rows(peak: Peak, cascade: MultipletCascade) -> List[Dict[str, Any]]:
    rows: List[Dict[str, Any]] = []
    for stage in range(cascade.stage_count()):
        splitter = peak.splitters[stage - 1] if stage > 0 else None
        rows.append(
            {
                "stage": stage,
                "splitter": splitter.abbreviate_pattern() if splitter else "s",
                "n": splitter.n if splitter else 0,
                "j_hz": splitter.j if splitter else 0.0,
                "peaklets": len(cascade.stage(stage)),
                "resolved": cascade.is_stage_resolved(stage),
                "total_integration": cascade.total_integration(stage),
                "max_integration": cascade.max_integration_of_stage(stage),
            }
        )
    return rows


def build_describe_payload(namespace: argparse.Namespace, settings: SessionSettings) -> Dict[str, Any]:
    peak = resolve_peak(namespace, settings)
    field_strength = _check_field_strength(namespace)
    cascade = peak.build_multiplet_cascade()
    too_complex = _warn_if_complex(peak, settings)
    return {
        "title": "Multiplet cascade",
        "summary": {
            "pattern": peak.name() or COMPLEX_PATTERN_LABEL,
            "splitters": len(peak.splitters),
            "fwhm_hz": peak.fwhm,
            "field_strength_mhz": field_strength,
            "field_strength_tesla": mhz_to_tesla(field_strength),
            "total_peaklets": peak.total_peaklet_count(),
            "too_complex": too_complex,
        },
        "rows": _stage_rows(peak, cascade),
        "stages": [
            [{"delta_hz": peaklet.delta, "integration": peaklet.integration} for peaklet in stage]
            for stage in cascade.stages
        ],
    }


def build_waveform_payload(namespace: argparse.Namespace, settings: SessionSettings) -> Dict[str, Any]:
    peak = resolve_peak(namespace, settings)
    field_strength = _check_field_strength(namespace)
    stage = resolve_stage(namespace, peak)
    _warn_if_complex(peak, settings)
    partial = peak.nth_partial_peak(stage).build_multiplet_cascade()
    waveform = partial.final_waveform(field_strength, namespace.distribution)
    samples = int(namespace.samples)
    extent_fwhm = float(namespace.extent_fwhm)
    if samples < 2:
        raise CliError("At least two samples are required.", category="usage", context={"samples": samples})
    if not extent_fwhm > 0.0:
        raise CliError(
            "The sampled extent must be positive.",
            category="usage",
            context={"extent_fwhm": extent_fwhm},
        )
    xs, ys = waveform.sample(samples, n_fwhm=extent_fwhm)
    integral = waveform.evaluate_cdf_array(xs)
    left, right = waveform.extent(extent_fwhm)
    return {
        "title": "Multiplet waveform",
        "summary": {
            "pattern": peak.name() or COMPLEX_PATTERN_LABEL,
            "stage": stage.value,
            "distribution": namespace.distribution,
            "components": len(waveform),
            "extent_ppm": f"{left:.6g}..{right:.6g}",
            "max_estimate": waveform.max(),
            "stage_resolved": partial.is_stage_resolved(partial.child_stages_count()),
        },
        "sparkline": render_waveform(waveform),
        "rows": [
            {"x_ppm": float(x), "intensity": float(y), "integral": float(area)}
            for x, y, area in zip(xs, ys, integral)
        ],
    }


def build_diagram_payload(namespace: argparse.Namespace, settings: SessionSettings) -> Dict[str, Any]:
    peak = resolve_peak(namespace, settings)
    stage = resolve_stage(namespace, peak)
    _warn_if_complex(peak, settings)
    full = peak.build_multiplet_cascade()
    partial = peak.nth_partial_peak(stage).build_multiplet_cascade()
    diagram = build_splitting_diagram(full, partial, stage)
    rows: List[Dict[str, Any]] = []
    for diagram_stage in diagram.stages:
        for marker in diagram_stage.markers:
            rows.append(
                {
                    "stage": diagram_stage.index,
                    "delta_hz": marker.delta,
                    "base": marker.base,
                    "tip": marker.tip,
                    "enabled": marker.enabled,
                }
            )
    return {
        "title": "Splitting diagram",
        "summary": {"pattern": peak.name() or COMPLEX_PATTERN_LABEL, "stage": stage.value},
        "diagram": diagram.as_dict(),
        "rows": rows,
    }


def build_presets_payload() -> Dict[str, Any]:
    rows = []
    for name, splitters in sorted(load_presets().items()):
        peak = Peak(splitters=list(splitters))
        rows.append(
            {
                "name": name,
                "pattern": peak.name() or COMPLEX_PATTERN_LABEL,
                "splitters": " ".join(f"{splitter.n}:{splitter.j:g}" for splitter in splitters),
            }
        )
    return {"title": "Presets", "rows": rows}


def _handle_describe(namespace: argparse.Namespace, *, config: Mapping[str, Any]) -> str:
    payload = build_describe_payload(namespace, _settings(config))
    return render_payload(payload, resolve_exports(namespace))


def _handle_waveform(namespace: argparse.Namespace, *, config: Mapping[str, Any]) -> str:
    payload = build_waveform_payload(namespace, _settings(config))
    return render_payload(payload, resolve_exports(namespace))


def _handle_diagram(namespace: argparse.Namespace, *, config: Mapping[str, Any]) -> str:
    payload = build_diagram_payload(namespace, _settings(config))
    return render_payload(payload, resolve_exports(namespace))


def _handle_presets(namespace: argparse.Namespace, *, config: Mapping[str, Any]) -> str:
    return render_payload(build_presets_payload(), resolve_exports(namespace))
