from __future__ import annotations

import numpy as np
import pytest

from nmr_splitting.core.peak import FractionalStageIndex, Peak

pytestmark = pytest.mark.benchmark(group="cascade")


def _crowded_peak() -> Peak:
    return Peak.from_pairs([(9, 7.2), (9, 3.1), (6, 1.4), (2, 0.6)], fwhm=0.8)


def test_build_crowded_cascade(benchmark: pytest.BenchmarkFixture) -> None:
    peak = _crowded_peak()

    cascade = benchmark(peak.build_multiplet_cascade)

    assert len(cascade.final_stage()) == peak.total_peaklet_count()


def test_partial_cascade_sweep(benchmark: pytest.BenchmarkFixture) -> None:
    peak = _crowded_peak()
    stages = [FractionalStageIndex(value) for value in np.linspace(0.0, 4.0, 33)]

    def sweep() -> int:
        total = 0
        for stage in stages:
            total += len(peak.nth_partial_peak(stage).build_multiplet_cascade().final_stage())
        return total

    assert benchmark(sweep) > 0


@pytest.mark.parametrize("kind", ["gaussian", "lorentzian"])
def test_sample_final_waveform(benchmark: pytest.BenchmarkFixture, kind: str) -> None:
    waveform = _crowded_peak().build_multiplet_cascade().final_waveform(600.0, kind)

    xs, ys = benchmark(waveform.sample, 5000, n_fwhm=10.0)

    assert xs.shape == ys.shape == (5000,)
