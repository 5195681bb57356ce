"""Example that exports the rendered waveform of a preset to CSV."""

from __future__ import annotations

from nmr_splitting.core.peak import Peak
from nmr_splitting.exporters import csv_exporter
from nmr_splitting.presets import get_preset

FIELD_STRENGTH_MHZ = 400.0


def main() -> None:
    peak = Peak(splitters=list(get_preset("1-Propanol (CH₂)")), fwhm=0.8)
    waveform = peak.build_multiplet_cascade().final_waveform(FIELD_STRENGTH_MHZ, "lorentzian")
    xs, ys = waveform.sample(200, n_fwhm=5.0)
    rows = [{"x_ppm": float(x), "intensity": float(y)} for x, y in zip(xs, ys)]
    print(csv_exporter({"rows": rows}))


if __name__ == "__main__":
    main()
