"""Argument parsing for the nmr-splitting CLI."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Mapping, Optional

from nmr_splitting.cli.common import add_export_argument, add_peak_arguments
from nmr_splitting.cli.workflows import (
    _handle_describe,
    _handle_diagram,
    _handle_presets,
    _handle_waveform,
)
from nmr_splitting.settings import SessionSettings

__all__ = ["build_parser"]


def build_parser(config: Optional[Mapping[str, Any]] = None) -> argparse.ArgumentParser:
    config = dict(config or {})
    logging_cfg_raw = config.get("logging", {})
    logging_cfg = dict(logging_cfg_raw) if isinstance(logging_cfg_raw, Mapping) else {}
    settings = SessionSettings.from_config(config)

    parser = argparse.ArgumentParser(
        prog="nmr-splitting",
        description="Simulate ¹H-NMR multiplet splitting cascades.",
    )
    parser.add_argument(
        "--config",
        dest="config_path",
        type=Path,
        default=None,
        help="Path to the pyproject.toml (or its directory) holding [tool.nmr_splitting].",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        default=logging_cfg.get("level", "info"),
        help="Logging level (e.g. debug, info, warning).",
    )
    parser.add_argument(
        "--log-output",
        dest="log_output",
        default=logging_cfg.get("output", "stderr"),
        help="Logging destination (stdout, stderr or a file path).",
    )
    parser.add_argument(
        "--log-format",
        dest="log_format",
        choices=("json", "text"),
        default=logging_cfg.get("format", "json"),
        help="Logging formatter (json or text).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    describe_parser = subparsers.add_parser(
        "describe",
        help="Summarise every stage of the multiplet cascade.",
    )
    add_peak_arguments(describe_parser, settings)
    add_export_argument(describe_parser, default="markdown", help_text="Output format.")
    describe_parser.set_defaults(handler=_handle_describe)

    waveform_parser = subparsers.add_parser(
        "waveform",
        help="Sample the rendered multiplet and its integral.",
    )
    add_peak_arguments(waveform_parser, settings)
    waveform_parser.add_argument(
        "--samples",
        type=int,
        default=settings.samples,
        help="Number of evenly spaced sample points.",
    )
    waveform_parser.add_argument(
        "--extent-fwhm",
        dest="extent_fwhm",
        type=float,
        default=settings.extent_fwhm,
        help="Sample this many FWHMs beyond the outermost peaklets.",
    )
    add_export_argument(waveform_parser, default="csv", help_text="Output format.")
    waveform_parser.set_defaults(handler=_handle_waveform)

    diagram_parser = subparsers.add_parser(
        "diagram",
        help="Emit the geometry of the splitting diagram.",
    )
    add_peak_arguments(diagram_parser, settings)
    add_export_argument(diagram_parser, default="json", help_text="Output format.")
    diagram_parser.set_defaults(handler=_handle_diagram)

    presets_parser = subparsers.add_parser("presets", help="List bundled presets.")
    add_export_argument(presets_parser, default="markdown", help_text="Output format.")
    presets_parser.set_defaults(handler=_handle_presets)

    return parser
