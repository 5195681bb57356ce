"""Easing helpers for interpolating between splitting stages."""

from __future__ import annotations

import math

__all__ = ["ease_transition", "ease_transition_inverse"]


def ease_transition(factor: float) -> float:
    """Map ``factor`` in ``[0, 1]`` onto a cosine ease-in/ease-out curve."""

    return 0.5 * (1.0 - math.cos(math.pi * factor))


def ease_transition_inverse(value: float) -> float:
    """Inverse of :func:`ease_transition` for ``value`` in ``[0, 1]``."""

    clamped = min(max(value, 0.0), 1.0)
    return math.acos(1.0 - 2.0 * clamped) / math.pi

