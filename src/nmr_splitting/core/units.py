"""Unit conversions between frequency and chemical-shift domains."""

from __future__ import annotations

__all__ = ["PROTON_GYROMAGNETIC_RATIO", "mhz_to_tesla", "j_to_ppm"]

# MHz/T
PROTON_GYROMAGNETIC_RATIO = 42.577_478_518


def mhz_to_tesla(frequency: float) -> float:
    """Convert an instrument frequency (MHz) to the field strength (T)."""

    return frequency / PROTON_GYROMAGNETIC_RATIO


def j_to_ppm(j: float, frequency: float) -> float:
    """Convert an absolute shift in Hz to ppm at ``frequency`` (MHz)."""

    return j / frequency
