from __future__ import annotations

import pytest

from nmr_splitting.animation import CyclicStageAnimation
from nmr_splitting.numerics.easing import ease_transition, ease_transition_inverse


def test_ease_transition_endpoints() -> None:
    assert ease_transition(0.0) == pytest.approx(0.0)
    assert ease_transition(0.5) == pytest.approx(0.5)
    assert ease_transition(1.0) == pytest.approx(1.0)
    assert ease_transition(2.0) == pytest.approx(0.0, abs=1e-12)


@pytest.mark.parametrize("factor", [0.0, 0.1, 0.33, 0.5, 0.8, 1.0])
def test_ease_transition_inverse(factor: float) -> None:
    assert ease_transition_inverse(ease_transition(factor)) == pytest.approx(factor, abs=1e-7)


def test_animation_sweeps_back_and_forth() -> None:
    animation = CyclicStageAnimation(0.0, (0.0, 2.0), duration=4.0)

    animation.start(10.0)

    assert animation.is_animating()
    assert animation.tick(10.0) == pytest.approx(0.0)
    assert animation.tick(12.0) == pytest.approx(1.0)
    assert animation.tick(14.0) == pytest.approx(2.0)
    assert animation.tick(16.0) == pytest.approx(1.0)
    assert animation.tick(18.0) == pytest.approx(0.0, abs=1e-12)


def test_animation_resumes_from_current_value() -> None:
    animation = CyclicStageAnimation(0.5, (0.0, 2.0), duration=4.0)

    animation.start(0.0)

    assert animation.tick(0.0) == pytest.approx(0.5)
    assert animation.tick(0.1) > 0.5


def test_animation_reverses_from_upper_bound() -> None:
    animation = CyclicStageAnimation(3.0, (0.0, 3.0), duration=2.0)

    animation.start(0.0)

    assert animation.tick(0.0) == pytest.approx(3.0)
    assert animation.tick(1.0) == pytest.approx(1.5)
    assert animation.tick(2.0) == pytest.approx(0.0, abs=1e-12)


def test_tick_without_animation_returns_value() -> None:
    animation = CyclicStageAnimation(1.0, (0.0, 2.0), duration=4.0)

    assert animation.tick(100.0) == 1.0
    assert not animation.is_animating()


def test_set_value_clamps_and_stops() -> None:
    animation = CyclicStageAnimation(1.0, (0.0, 2.0), duration=4.0)
    animation.start(0.0)

    animation.set_value(5.0)

    assert animation.value == 2.0
    assert not animation.is_animating()


def test_toggle_and_bounds() -> None:
    animation = CyclicStageAnimation(4.0, (0.0, 4.0), duration=1.0)

    animation.toggle(0.0)
    assert animation.is_animating()
    animation.toggle(0.5)
    assert not animation.is_animating()

    animation.set_bounds((0.0, 2.0))
    assert animation.bounds == (0.0, 2.0)
    assert animation.value == 2.0


def test_invalid_animation_parameters() -> None:
    with pytest.raises(ValueError):
        CyclicStageAnimation(0.0, (0.0, 1.0), duration=0.0)
    with pytest.raises(ValueError):
        CyclicStageAnimation(0.0, (2.0, 1.0), duration=1.0)
    animation = CyclicStageAnimation(0.0, (0.0, 1.0), duration=1.0)
    with pytest.raises(ValueError):
        animation.set_duration(-1.0)


def test_start_phase_sets_heading() -> None:
    below_top = CyclicStageAnimation(1.9, (0.0, 2.0), duration=4.0)
    at_top = CyclicStageAnimation(2.0, (0.0, 2.0), duration=4.0)

    below_top.start(0.0)
    at_top.start(0.0)

    assert below_top.tick(0.05) > 1.9
    assert at_top.tick(0.05) < 2.0
