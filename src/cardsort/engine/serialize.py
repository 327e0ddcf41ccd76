from __future__ import annotations

from typing import Iterable, Mapping

from .game import GameState
from .scoring import GameResult
from .types import CATEGORIES, Card, Move


def format_time(ms: float) -> str:
    seconds = int(ms // 1000)
    minutes = seconds // 60
    return f"{minutes}m {seconds % 60}s" if minutes > 0 else f"{seconds}s"


def describe_move(move: Move) -> str:
    card = move.card
    what = f"{card.value} of {card.suit}" if card.is_valid else f"Invalid card {card.value}"
    return f"{what} → {move.target}"


def card_to_dict(c: Card | None) -> dict[str, object] | None:
    if c is None:
        return None
    return {"id": c.id, "suit": c.suit, "value": c.value, "color": c.color, "is_valid": c.is_valid}


def move_to_dict(m: Move) -> dict[str, object]:
    return {
        "card": card_to_dict(m.card),
        "target": m.target,
        "correct": m.correct,
        "timestamp": m.timestamp,
        "text": describe_move(m),
    }


def snapshot(state: GameState, now: int | None = None) -> dict[str, object]:
    """Return a JSON-serializable view of the state for the host UI."""
    timing = state.stats.timing
    return {
        "phase": state.phase,
        "player_name": state.player_name,
        "current_card": card_to_dict(state.current_card),
        "current_index": state.current_index,
        "deck_size": len(state.deck),
        "piles": {c: [card_to_dict(card) for card in state.piles[c]] for c in CATEGORIES},
        "pile_counts": {c: len(state.piles[c]) for c in CATEGORIES},
        "sorted_count": state.sorted_count,
        "correct_moves": state.stats.correct_moves,
        "total_moves": state.stats.total_moves,
        "accuracy": state.stats.accuracy,
        "average_time_ms": timing.average_ms,
        "elapsed_ms": timing.total_ms(now),
        "unresolved": [c.id for c in state.unresolved_cards()],
    }


def results_snapshot(
    result: GameResult, leaderboard: Iterable[Mapping[str, object]] = ()
) -> dict[str, object]:
    return {
        "passed": result.passed,
        "perfect": result.perfect,
        "score": result.score,
        "accuracy": result.accuracy,
        "total_time_ms": result.total_time_ms,
        "average_time_ms": result.average_time_ms,
        "correct_moves": result.correct_moves,
        "wrong_count": result.wrong_count,
        "total_moves": result.total_moves,
        "wrong_moves": [move_to_dict(m) for m in result.wrong_moves],
        "leaderboard": [dict(e) for e in leaderboard],
    }
