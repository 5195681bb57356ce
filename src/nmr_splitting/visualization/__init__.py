"""Text-mode visualisation helpers for nmr_splitting."""

from nmr_splitting.visualization.sparkline import render_sparkline, render_waveform

__all__ = ["render_sparkline", "render_waveform"]
