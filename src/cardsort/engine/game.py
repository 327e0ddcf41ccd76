from __future__ import annotations

import random
from dataclasses import dataclass, field, replace
from typing import Mapping

from .actions import (
    Action,
    DropCardAction,
    NextCardAction,
    ResolveCurrentAction,
    RestartAction,
    StartGameAction,
)
from .classify import classify
from .deck import build_deck
from .scoring import GameResult, accuracy, is_passed, is_perfect, score
from .timing import Timing
from .types import CATEGORIES, Card, Category, GameConfig, Move, Phase

Event = dict[str, object]

NAME_REQUIRED = "Please enter your name to start."


def _empty_piles() -> dict[Category, tuple[Card, ...]]:
    return {c: () for c in CATEGORIES}


@dataclass(frozen=True)
class SessionStats:
    correct_moves: int = 0
    total_moves: int = 0
    timing: Timing = field(default_factory=Timing)

    @property
    def accuracy(self) -> float:
        return accuracy(self.correct_moves, self.total_moves)


@dataclass(frozen=True)
class GameState:
    """Immutable snapshot of one sorting session.

    Every transition below returns a new GameState; a snapshot handed to the
    UI is never changed underneath it.
    """

    config: GameConfig = field(default_factory=GameConfig)
    phase: Phase = "setup"
    player_name: str = ""
    deck: tuple[Card, ...] = ()
    current_index: int = 0
    piles: Mapping[Category, tuple[Card, ...]] = field(default_factory=_empty_piles)
    stats: SessionStats = field(default_factory=SessionStats)
    moves: tuple[Move, ...] = ()
    wrong_moves: tuple[Move, ...] = ()

    @property
    def current_card(self) -> Card | None:
        if 0 <= self.current_index < len(self.deck):
            return self.deck[self.current_index]
        return None

    @property
    def sorted_count(self) -> int:
        return sum(len(pile) for pile in self.piles.values())

    @property
    def sorted_ids(self) -> frozenset[str]:
        return frozenset(card.id for pile in self.piles.values() for card in pile)

    def unresolved_cards(self) -> tuple[Card, ...]:
        done = self.sorted_ids
        return tuple(c for c in self.deck if c.id not in done)

    def skipped_cards(self) -> tuple[Card, ...]:
        """Unsorted cards behind the cursor."""
        done = self.sorted_ids
        return tuple(c for c in self.deck[: self.current_index] if c.id not in done)

    def find_card(self, card_id: str) -> Card | None:
        for c in self.deck:
            if c.id == card_id:
                return c
        return None

    def position(self, card_id: str) -> int:
        for i, c in enumerate(self.deck):
            if c.id == card_id:
                return i
        return -1


@dataclass(frozen=True)
class StepResult:
    state: GameState
    ok: bool
    events: list[Event]
    error: str | None = None
    validation: bool = False


def _reject(state: GameState, error: str, *, validation: bool = False) -> StepResult:
    return StepResult(state=state, ok=False, events=[], error=error, validation=validation)


def is_complete(state: GameState) -> bool:
    return bool(state.deck) and state.sorted_count == len(state.deck)


def initial_state(config: GameConfig | None = None) -> GameState:
    return GameState(config=config or GameConfig())


def _deal(state: GameState, name: str, *, now: int, rng: random.Random) -> StepResult:
    deck = build_deck(rng, state.config)
    new_state = GameState(
        config=state.config,
        phase="playing",
        player_name=name,
        deck=deck,
        stats=SessionStats(timing=Timing.start(now)),
    )
    return StepResult(
        state=new_state,
        ok=True,
        events=[{"type": "GAME_STARTED", "player_name": name, "deck": [c.id for c in deck]}],
    )


def start_game(state: GameState, player_name: str, *, now: int, rng: random.Random) -> StepResult:
    """Deal a new game for `player_name`. Allowed from any phase."""
    name = player_name.strip()
    if not name:
        return _reject(state, NAME_REQUIRED, validation=True)
    return _deal(state, name, now=now, rng=rng)


def restart(state: GameState, *, now: int, rng: random.Random) -> StepResult:
    if not state.player_name:
        return _reject(state, NAME_REQUIRED, validation=True)
    return _deal(state, state.player_name, now=now, rng=rng)


def _check_completed(state: GameState, now: int) -> tuple[GameState, list[Event]]:
    if state.phase != "playing" or not is_complete(state):
        return state, []
    timing = state.stats.timing.finish(now)
    done = replace(state, phase="completed", stats=replace(state.stats, timing=timing))
    return done, [
        {
            "type": "GAME_COMPLETED",
            "player_name": done.player_name,
            "total_time_ms": timing.total_ms(),
            "accuracy": done.stats.accuracy,
        }
    ]


def _not_playing_error(state: GameState) -> str | None:
    if state.phase == "completed":
        return "Game already completed."
    if state.phase != "playing":
        return "Game not started."
    return None


def drop_card(state: GameState, card_id: str, target: Category, *, now: int) -> StepResult:
    """Place a card on a pile. Wrong placements are accepted and counted."""
    err = _not_playing_error(state)
    if err:
        return _reject(state, err)
    if target not in CATEGORIES:
        return _reject(state, f"Unknown pile: {target}.")
    card = state.find_card(card_id)
    if card is None:
        return _reject(state, f"Card not in deck: {card_id}.")
    if card_id in state.sorted_ids:
        return _reject(state, "Card already sorted.")
    # Only the current card and skipped ones are in hand.
    if state.position(card_id) > state.current_index:
        return _reject(state, "Card not reached yet.")

    correct = classify(card, target)
    move = Move(card=card, target=target, correct=correct, timestamp=now)

    piles = dict(state.piles)
    piles[target] = piles[target] + (card,)

    stats = SessionStats(
        correct_moves=state.stats.correct_moves + (1 if correct else 0),
        total_moves=state.stats.total_moves + 1,
        timing=state.stats.timing.lap(now),
    )

    index = state.current_index
    current = state.current_card
    if current is not None and current.id == card_id and index < len(state.deck) - 1:
        index += 1

    new_state = replace(
        state,
        piles=piles,
        stats=stats,
        current_index=index,
        moves=state.moves + (move,),
        wrong_moves=state.wrong_moves if correct else state.wrong_moves + (move,),
    )
    events: list[Event] = [
        {"type": "CARD_SORTED", "card_id": card_id, "target": target, "correct": correct}
    ]

    new_state, done_events = _check_completed(new_state, now)
    events.extend(done_events)
    return StepResult(state=new_state, ok=True, events=events)


def resolve_current_card(state: GameState, target: Category, *, now: int) -> StepResult:
    err = _not_playing_error(state)
    if err:
        return _reject(state, err)
    card = state.current_card
    if card is None:
        return _reject(state, "No current card.")
    return drop_card(state, card.id, target, now=now)


def view_next_card(state: GameState) -> StepResult:
    """Move the cursor forward without sorting the current card."""
    err = _not_playing_error(state)
    if err:
        return _reject(state, err)
    if state.current_index >= len(state.deck) - 1:
        return _reject(state, "Already at the last card.")
    new_state = replace(state, current_index=state.current_index + 1)
    return StepResult(
        state=new_state,
        ok=True,
        events=[{"type": "CARD_VIEWED", "index": new_state.current_index}],
    )


def evaluate(state: GameState) -> GameResult:
    stats = state.stats
    acc = stats.accuracy
    total = stats.timing.total_ms()
    return GameResult(
        passed=is_passed(acc, state.config.pass_threshold),
        perfect=is_perfect(acc),
        score=score(acc, total, state.config.pass_threshold),
        accuracy=acc,
        total_time_ms=total,
        average_time_ms=stats.timing.average_ms,
        correct_moves=stats.correct_moves,
        total_moves=stats.total_moves,
        wrong_moves=state.wrong_moves,
    )


def step(state: GameState, action: Action, *, now: int, rng: random.Random) -> StepResult:
    """Apply a single player action and return the next snapshot."""
    if isinstance(action, StartGameAction):
        return start_game(state, action.player_name, now=now, rng=rng)
    if isinstance(action, RestartAction):
        return restart(state, now=now, rng=rng)
    if isinstance(action, DropCardAction):
        return drop_card(state, action.card_id, action.target, now=now)
    if isinstance(action, ResolveCurrentAction):
        return resolve_current_card(state, action.target, now=now)
    if isinstance(action, NextCardAction):
        return view_next_card(state)
    return _reject(state, "Unknown action.")


def replay(
    actions: list[tuple[Action, int]],
    seed: int,
    config: GameConfig | None = None,
) -> GameState:
    """Rebuild a session from timestamped actions and the shuffle seed."""
    rng = random.Random(seed)
    state = initial_state(config)
    for action, now in actions:
        state = step(state, action, now=now, rng=rng).state
    return state
