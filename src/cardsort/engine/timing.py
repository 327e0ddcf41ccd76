from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Timing:
    """Per-card and whole-session timing, all in milliseconds.

    `durations` holds one entry per resolved card in move order. The total is
    measured on the wall clock from start to finish and is not the sum of the
    durations.
    """

    started_at: int | None = None
    card_started_at: int | None = None
    finished_at: int | None = None
    durations: tuple[int, ...] = ()

    @staticmethod
    def start(now: int) -> "Timing":
        return Timing(started_at=now, card_started_at=now)

    def lap(self, now: int) -> "Timing":
        if self.card_started_at is None:
            return self
        elapsed = max(0, now - self.card_started_at)
        return Timing(
            started_at=self.started_at,
            card_started_at=now,
            finished_at=self.finished_at,
            durations=self.durations + (elapsed,),
        )

    def finish(self, now: int) -> "Timing":
        return Timing(
            started_at=self.started_at,
            card_started_at=self.card_started_at,
            finished_at=now,
            durations=self.durations,
        )

    def total_ms(self, now: int | None = None) -> int:
        if self.started_at is None:
            return 0
        end = self.finished_at if self.finished_at is not None else now
        if end is None:
            return 0
        return max(0, end - self.started_at)

    @property
    def average_ms(self) -> float:
        if not self.durations:
            return 0.0
        return sum(self.durations) / len(self.durations)
