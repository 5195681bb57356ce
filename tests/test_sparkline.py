from __future__ import annotations

from nmr_splitting.core.peak import Peak
from nmr_splitting.numerics.distribution_sum import DistributionSum
from nmr_splitting.visualization import render_sparkline, render_waveform


def test_render_sparkline_scales_between_extremes() -> None:
    assert render_sparkline([0.0, 0.5, 1.0]) == "▁▅█"
    assert render_sparkline([2.0, 2.0]) == "▁▁"
    assert render_sparkline([]) == ""


def test_render_sparkline_with_floor() -> None:
    assert render_sparkline([1.0, 1.0], floor=0.0) == "██"
    assert render_sparkline([0.0, 2.0], blocks="._-") == ".-"


def test_render_waveform_of_triplet() -> None:
    waveform = Peak.from_pairs([(2, 7.0)], fwhm=1.0).build_multiplet_cascade().final_waveform(400.0)

    line = render_waveform(waveform, width=41)

    assert len(line) == 41
    assert line[0] == "▁"
    assert line[-1] == "▁"
    assert line[20] == "█"


def test_render_cumulative_waveform_is_monotonic() -> None:
    waveform = Peak.from_pairs([(1, 5.0)]).build_multiplet_cascade().final_waveform(600.0)
    palette = "▁▂▃▄▅▆▇█"

    line = render_waveform(waveform, width=30, cumulative=True)

    heights = [palette.index(char) for char in line]
    assert heights == sorted(heights)
    assert heights[-1] == len(palette) - 1


def test_render_empty_waveform() -> None:
    assert render_waveform(DistributionSum()) == ""
