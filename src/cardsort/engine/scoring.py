from __future__ import annotations

from dataclasses import dataclass

from .types import Move

PASS_THRESHOLD = 90.0


@dataclass(frozen=True)
class GameResult:
    passed: bool
    perfect: bool
    score: int
    accuracy: float
    total_time_ms: int
    average_time_ms: float
    correct_moves: int
    total_moves: int
    wrong_moves: tuple[Move, ...]

    @property
    def wrong_count(self) -> int:
        return self.total_moves - self.correct_moves


def accuracy(correct_moves: int, total_moves: int) -> float:
    if total_moves <= 0:
        return 0.0
    return correct_moves / total_moves * 100


def is_passed(acc: float, threshold: float = PASS_THRESHOLD) -> bool:
    return acc >= threshold


def is_perfect(acc: float) -> bool:
    return acc == 100.0


def score(acc: float, total_time_ms: int, threshold: float = PASS_THRESHOLD) -> int:
    if not is_passed(acc, threshold):
        return 0
    # Nobody finishes in 0ms; floor at 1ms so the division is always defined.
    return round(acc * 1_000_000 / max(total_time_ms, 1))
