"""Shared helpers for nmr-splitting CLI commands."""

from __future__ import annotations

import argparse
from typing import Any, List, Mapping, Sequence

from nmr_splitting.cli.errors import CliError
from nmr_splitting.core.peak import FractionalStageIndex, Peak, Splitter
from nmr_splitting.exporters import exporters_registry
from nmr_splitting.presets import get_preset
from nmr_splitting.settings import SessionSettings

__all__ = [
    "parse_splitter",
    "add_export_argument",
    "add_peak_arguments",
    "resolve_exports",
    "resolve_peak",
    "resolve_stage",
    "render_payload",
]


def parse_splitter(value: str) -> Splitter:
    """Parse ``N:J`` (proton count and coupling constant in Hz)."""

    count, sep, coupling = value.partition(":")
    if not sep:
        raise argparse.ArgumentTypeError(f"expected N:J, got {value!r}")
    try:
        return Splitter(n=int(count), j=float(coupling))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid splitter {value!r}: {exc}") from None


def add_export_argument(parser: argparse.ArgumentParser, *, default: str, help_text: str) -> None:
    """Register the ``--export`` flag on ``parser`` with standard semantics."""

    parser.add_argument(
        "--export",
        dest="exports",
        choices=sorted(exporters_registry.keys()),
        action="append",
        help=f"{help_text} Repeat the flag to combine exporters.",
    )
    parser.set_defaults(exports=None, export_default=default)


def add_peak_arguments(parser: argparse.ArgumentParser, settings: SessionSettings) -> None:
    parser.add_argument(
        "--preset",
        default=None,
        help=f"Start from a bundled preset (default: {settings.preset!r} when no --splitter is given).",
    )
    parser.add_argument(
        "--splitter",
        dest="splitters",
        type=parse_splitter,
        action="append",
        default=None,
        metavar="N:J",
        help="Coupled proton group: N equivalent protons with coupling J (Hz). Repeatable.",
    )
    parser.add_argument(
        "--fwhm",
        type=float,
        default=settings.fwhm,
        help="Peaklet full width at half maximum in Hz.",
    )
    parser.add_argument(
        "--field-strength",
        dest="field_strength",
        type=float,
        default=settings.field_strength,
        help="Instrument frequency in MHz.",
    )
    parser.add_argument(
        "--stage",
        type=float,
        default=None,
        help="Apply splitting up to this (possibly fractional) stage (default: all).",
    )
    parser.add_argument(
        "--distribution",
        choices=("gaussian", "lorentzian"),
        default=settings.distribution,
        help="Line shape used to render each peaklet.",
    )


def _unique_export_list(values: Sequence[str]) -> List[str]:
    seen: set[str] = set()
    ordered: List[str] = []
    for value in values:
        if value not in seen:
            seen.add(value)
            ordered.append(value)
    return ordered


def resolve_exports(namespace: argparse.Namespace) -> List[str]:
    """Return the exporters requested by ``namespace`` or raise :class:`CliError`."""

    exports = getattr(namespace, "exports", None)
    if exports:
        return _unique_export_list(exports)
    default = getattr(namespace, "export_default", None)
    if isinstance(default, str):
        return [default]
    raise CliError("No exporter configured for this command.", category="usage")


def resolve_peak(namespace: argparse.Namespace, settings: SessionSettings) -> Peak:
    """Build the :class:`Peak` described by ``--preset``/``--splitter``/``--fwhm``.

    Explicit splitters are appended to the preset when both are given; with
    neither, the configured default preset is used.
    """

    preset_name = getattr(namespace, "preset", None)
    explicit: Sequence[Splitter] = getattr(namespace, "splitters", None) or ()
    splitters: List[Splitter] = []
    if preset_name is not None or not explicit:
        name = preset_name or settings.preset
        try:
            splitters.extend(get_preset(name))
        except KeyError:
            raise CliError(
                f"Unknown preset {name!r}.",
                category="not_found",
                context={"preset": name},
            ) from None
    splitters.extend(explicit)
    try:
        return Peak(splitters=splitters, fwhm=float(namespace.fwhm))
    except ValueError as exc:
        raise CliError(str(exc), category="usage", context={"fwhm": namespace.fwhm}) from exc


def resolve_stage(namespace: argparse.Namespace, peak: Peak) -> FractionalStageIndex:
    raw = getattr(namespace, "stage", None)
    value = float(len(peak.splitters)) if raw is None else float(raw)
    if not 0.0 <= value <= len(peak.splitters):
        raise CliError(
            f"Stage {value} is outside 0..{len(peak.splitters)}.",
            category="usage",
            context={"stage": value, "splitters": len(peak.splitters)},
        )
    return FractionalStageIndex(value)


def render_payload(payload: Mapping[str, Any], exporters: Sequence[str] | str) -> str:
    """Render ``payload`` using each exporter named in ``exporters``."""

    selected = [exporters] if isinstance(exporters, str) else _unique_export_list(exporters)
    rendered_outputs: List[str] = []
    for exporter_name in selected:
        try:
            exporter = exporters_registry[exporter_name]
        except KeyError:
            raise CliError(
                f"Unknown exporter {exporter_name!r}.",
                category="usage",
                context={"exporter": exporter_name},
            ) from None
        rendered_outputs.append(exporter(payload).rstrip("\n"))
    return "\n\n".join(rendered_outputs)
