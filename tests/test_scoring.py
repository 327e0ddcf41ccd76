from __future__ import annotations

import pytest

from cardsort.engine.scoring import accuracy, is_passed, is_perfect, score


def test_accuracy() -> None:
    assert accuracy(0, 0) == 0.0
    assert accuracy(15, 15) == 100.0
    assert accuracy(10, 15) == pytest.approx(66.6666, rel=1e-4)
    assert f"{accuracy(10, 15):.1f}" == "66.7"


def test_pass_threshold_is_inclusive() -> None:
    assert is_passed(90.0)
    assert is_passed(100.0)
    assert not is_passed(89.99)
    assert not is_passed(0.0)


@pytest.mark.parametrize("total_ms", [0, 1, 500, 10_000, 3_600_000])
def test_failed_games_score_zero(total_ms: int) -> None:
    assert score(89.9, total_ms) == 0
    assert score(66.7, total_ms) == 0


def test_score_formula() -> None:
    assert score(100.0, 30_000) == round(100.0 * 1_000_000 / 30_000) == 3_333
    assert score(93.33333333333333, 20_000) == round(93.33333333333333 * 1_000_000 / 20_000)
    assert score(90.0, 45_000) == 2_000


def test_zero_time_does_not_divide_by_zero() -> None:
    assert score(100.0, 0) == 100_000_000
    assert score(100.0, 0) == score(100.0, 1)


def test_perfect() -> None:
    assert is_perfect(100.0)
    assert not is_perfect(99.9)
