"""Cyclic, eased animation of a value between two bounds.

The animation never reads a clock: callers pass the current time (in
seconds, from any monotonic source) to :meth:`CyclicStageAnimation.start`
and :meth:`CyclicStageAnimation.tick`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from nmr_splitting.numerics.easing import ease_transition, ease_transition_inverse

__all__ = ["CyclicStageAnimation"]


@dataclass(frozen=True, slots=True)
class _AnimationState:
    started_at: float
    phase: float


class CyclicStageAnimation:
    """Oscillate a value between ``lower`` and ``upper`` with cosine easing.

    One sweep from one bound to the other takes ``duration`` seconds.  The
    motion starts from the current value, heading towards ``upper`` unless
    the value already sits there.
    """

    __slots__ = ("_value", "_lower", "_upper", "_duration", "_state")

    def __init__(self, value: float, bounds: Tuple[float, float], duration: float) -> None:
        if not duration > 0.0:
            raise ValueError(f"Animation duration must be positive, got {duration}")
        self._lower, self._upper = float(bounds[0]), float(bounds[1])
        if self._upper < self._lower:
            raise ValueError(f"Invalid animation bounds {bounds!r}")
        self._duration = float(duration)
        self._state: Optional[_AnimationState] = None
        self._value = self._clamp(value)

    @property
    def value(self) -> float:
        return self._value

    @property
    def bounds(self) -> Tuple[float, float]:
        return (self._lower, self._upper)

    @property
    def duration(self) -> float:
        return self._duration

    def _clamp(self, value: float) -> float:
        return min(max(float(value), self._lower), self._upper)

    def is_animating(self) -> bool:
        return self._state is not None

    def set_value(self, value: float) -> None:
        """Set ``value`` (clamped to the bounds) and stop any running animation."""

        self._value = self._clamp(value)
        self.stop()

    def set_bounds(self, bounds: Tuple[float, float]) -> None:
        lower, upper = float(bounds[0]), float(bounds[1])
        if upper < lower:
            raise ValueError(f"Invalid animation bounds {bounds!r}")
        self._lower, self._upper = lower, upper
        self._value = self._clamp(self._value)

    def set_duration(self, duration: float) -> None:
        if not duration > 0.0:
            raise ValueError(f"Animation duration must be positive, got {duration}")
        self._duration = float(duration)

    def _normalised(self) -> float:
        span = self._upper - self._lower
        if span <= 0.0:
            return 0.0
        return (self._value - self._lower) / span

    def start(self, now: float) -> None:
        normalised = self._normalised()
        offset = ease_transition_inverse(normalised)
        # At the top, start on the descending half of the cosine cycle.
        phase = offset if self._value < self._upper else 2.0 - offset
        self._state = _AnimationState(started_at=float(now), phase=phase)

    def stop(self) -> None:
        self._state = None

    def toggle(self, now: float) -> None:
        if self.is_animating():
            self.stop()
        else:
            self.start(now)

    def tick(self, now: float) -> float:
        """Advance the animation to ``now`` and return the current value."""

        state = self._state
        if state is None:
            return self._value
        elapsed = max(0.0, float(now) - state.started_at)
        factor = state.phase + elapsed / self._duration
        normalised = min(max(ease_transition(factor), 0.0), 1.0)
        self._value = self._lower + normalised * (self._upper - self._lower)
        return self._value
