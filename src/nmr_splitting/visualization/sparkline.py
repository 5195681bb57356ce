"""Unicode block sparklines of sampled line shapes."""

from __future__ import annotations

import math
from typing import Iterable, Sequence

from nmr_splitting.numerics.distribution_sum import DistributionSum

DEFAULT_SPARKLINE_BLOCKS: Sequence[str] = "▁▂▃▄▅▆▇█"

__all__ = ["DEFAULT_SPARKLINE_BLOCKS", "render_sparkline", "render_waveform"]


def render_sparkline(
    values: Iterable[float],
    *,
    blocks: Sequence[str] = DEFAULT_SPARKLINE_BLOCKS,
    floor: float | None = None,
) -> str:
    """Render ``values`` as a row of block characters.

    Heights are scaled between ``floor`` (default: the smallest value) and
    the largest value.  Spectra are drawn with ``floor=0`` so the baseline
    stays at the lowest block.
    """

    data = [float(value) for value in values]
    palette = tuple(blocks)
    if not data or not palette:
        return ""

    minimum = min(data) if floor is None else float(floor)
    maximum = max(data)
    span = maximum - minimum
    if span <= 0.0 or math.isclose(maximum, minimum):
        return palette[0] * len(data)

    buckets = len(palette) - 1
    rendered: list[str] = []
    for value in data:
        ratio = (value - minimum) / span
        index = max(0, min(buckets, int(round(ratio * buckets))))
        rendered.append(palette[index])
    return "".join(rendered)


def render_waveform(
    waveform: DistributionSum,
    *,
    width: int = 72,
    n_fwhm: float = 3.0,
    cumulative: bool = False,
) -> str:
    """Sample ``waveform`` across its extent and render it as a sparkline."""

    if width < 2 or not len(waveform):
        return ""
    if cumulative:
        _, ys = waveform.sample_cdf(width, n_fwhm=n_fwhm)
    else:
        _, ys = waveform.sample(width, n_fwhm=n_fwhm)
    return render_sparkline(ys.tolist(), floor=0.0)
