from __future__ import annotations

import random
import time
from typing import Callable

from cardsort.engine.actions import (
    Action,
    DropCardAction,
    NextCardAction,
    ResolveCurrentAction,
    RestartAction,
    StartGameAction,
)
from cardsort.engine.game import GameState, StepResult, evaluate, initial_state, step
from cardsort.engine.scoring import GameResult
from cardsort.engine.serialize import results_snapshot, snapshot
from cardsort.engine.types import Category, GameConfig
from cardsort.services.leaderboard import LeaderboardEntry, LeaderboardStore
from cardsort.services.telemetry import TelemetryService

Clock = Callable[[], int]
Listener = Callable[[GameState, GameState], None]


def wall_clock_ms() -> int:
    return int(time.time() * 1000)


class GameSession:
    """The input surface a host UI talks to.

    Holds the current engine snapshot, feeds player actions through `step`,
    and notifies listeners with (previous, current) after every accepted
    action. Leaderboard recording is one such listener.
    """

    def __init__(
        self,
        leaderboard: LeaderboardStore,
        telemetry: TelemetryService | None = None,
        config: GameConfig | None = None,
        rng: random.Random | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.leaderboard = leaderboard
        self.telemetry = telemetry
        self.rng = rng or random.Random()
        self.clock = clock or wall_clock_ms
        self.state = initial_state(config)

        self.result: GameResult | None = None
        self.latest_entry: LeaderboardEntry | None = None
        self.leaderboard_entries: tuple[LeaderboardEntry, ...] = ()

        self._listeners: list[Listener] = []
        self.subscribe(self._on_state_changed)

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def _log(self, event_type: str, payload: dict[str, object]) -> None:
        if self.telemetry is not None:
            self.telemetry.log(event_type, payload)

    def apply(self, action: Action) -> StepResult:
        res = step(self.state, action, now=self.clock(), rng=self.rng)
        if not res.ok:
            if res.validation:
                self._log("validation_failed", {"error": res.error or ""})
            return res

        previous, self.state = self.state, res.state
        for listener in list(self._listeners):
            listener(previous, self.state)
        return res

    def _on_state_changed(self, previous: GameState, current: GameState) -> None:
        if current.phase == "playing" and previous.deck is not current.deck:
            self.result = None
            self.latest_entry = None
            self._log("game_started", {"player_name": current.player_name, "deck_size": len(current.deck)})
            return

        if len(current.moves) > len(previous.moves):
            move = current.moves[-1]
            self._log(
                "card_dropped",
                {"card_id": move.card.id, "target": move.target, "correct": move.correct},
            )

        if previous.phase == "playing" and current.phase == "completed":
            self._on_completed(current)

    def _on_completed(self, state: GameState) -> None:
        self.result = evaluate(state)
        entry = LeaderboardEntry.from_result(state.player_name, self.result)
        if entry.name:
            self.latest_entry = entry
            self.leaderboard_entries = self.leaderboard.record(entry)
        else:
            self.leaderboard_entries = self.leaderboard.load()
        self._log(
            "game_completed",
            {
                "player_name": state.player_name,
                "score": self.result.score,
                "accuracy": self.result.accuracy,
                "total_time_ms": self.result.total_time_ms,
                "passed": self.result.passed,
            },
        )

    # -------- Player actions --------
    def start_game(self, player_name: str) -> StepResult:
        return self.apply(StartGameAction(player_name=player_name))

    def drop_card(self, card_id: str, target: Category) -> StepResult:
        return self.apply(DropCardAction(card_id=card_id, target=target))

    def resolve_current_card(self, target: Category) -> StepResult:
        return self.apply(ResolveCurrentAction(target=target))

    def view_next_card(self) -> StepResult:
        return self.apply(NextCardAction())

    def restart(self) -> StepResult:
        return self.apply(RestartAction())

    # -------- Views --------
    def view(self) -> dict[str, object]:
        return snapshot(self.state, now=self.clock())

    def results(self) -> dict[str, object] | None:
        if self.result is None:
            return None
        return results_snapshot(self.result, [e.to_dict() for e in self.leaderboard_entries])

    def load_leaderboard(self) -> tuple[LeaderboardEntry, ...]:
        self.leaderboard_entries = self.leaderboard.load()
        return self.leaderboard_entries
