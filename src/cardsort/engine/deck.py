from __future__ import annotations

import random

from .types import DECOY_SYMBOLS, RANKS, SUIT_COLORS, SUITS, Card, GameConfig


def build_deck(rng: random.Random, config: GameConfig | None = None) -> tuple[Card, ...]:
    """Build a freshly shuffled deck: the first ranks of every suit plus decoys."""
    cfg = config or GameConfig()
    cards: list[Card] = []
    for suit in SUITS:
        for value in RANKS[: cfg.ranks_per_suit]:
            cards.append(
                Card(id=f"{suit}-{value}", suit=suit, value=value, color=SUIT_COLORS[suit], is_valid=True)
            )

    for i in range(cfg.invalid_count):
        cards.append(
            Card(id=f"invalid-{i}", suit="invalid", value=DECOY_SYMBOLS[i], color="purple", is_valid=False)
        )

    rng.shuffle(cards)
    return tuple(cards)
