from __future__ import annotations

from cardsort.engine.timing import Timing


def test_laps_measure_since_previous_resolution() -> None:
    t = Timing.start(1_000)
    t = t.lap(1_800)
    t = t.lap(2_100)
    t = t.lap(4_100)
    assert t.durations == (800, 300, 2_000)
    assert t.average_ms == 1_100


def test_empty_average_is_zero() -> None:
    assert Timing().average_ms == 0.0
    assert Timing.start(5).average_ms == 0.0


def test_total_is_wall_clock_not_sum_of_laps() -> None:
    t = Timing.start(0).lap(1_000).lap(2_000).finish(2_750)
    assert sum(t.durations) == 2_000
    assert t.total_ms() == 2_750
    # Once finished, later clocks do not change the total.
    assert t.total_ms(now=99_999) == 2_750


def test_running_total_uses_now() -> None:
    t = Timing.start(500)
    assert t.total_ms(now=1_500) == 1_000
    assert t.total_ms() == 0
    assert Timing().total_ms(now=10) == 0


def test_timing_is_immutable() -> None:
    t = Timing.start(0)
    t2 = t.lap(100)
    assert t.durations == ()
    assert t2.durations == (100,)
