from __future__ import annotations

import random
from collections import Counter

from cardsort.engine.deck import build_deck
from cardsort.engine.types import DECOY_SYMBOLS, RANKS, SUITS, GameConfig


def test_deck_composition_holds_for_many_seeds() -> None:
    for seed in range(50):
        deck = build_deck(random.Random(seed))
        assert len(deck) == 15
        assert len({c.id for c in deck}) == 15

        valid = [c for c in deck if c.is_valid]
        invalid = [c for c in deck if not c.is_valid]
        assert len(valid) == 12
        assert len(invalid) == 3

        per_suit = Counter(c.suit for c in valid)
        assert per_suit == {s: 3 for s in SUITS}
        assert {c.value for c in valid} == set(RANKS[:3])


def test_card_colors_and_decoys() -> None:
    deck = build_deck(random.Random(1))
    for c in deck:
        if c.suit in ("hearts", "diamonds"):
            assert c.color == "red"
        elif c.suit in ("clubs", "spades"):
            assert c.color == "black"
        else:
            assert c.suit == "invalid"
            assert c.color == "purple"
            assert not c.is_valid
    decoys = sorted(c.value for c in deck if not c.is_valid)
    assert decoys == sorted(DECOY_SYMBOLS[:3])


def test_same_seed_same_order() -> None:
    a = build_deck(random.Random(99))
    b = build_deck(random.Random(99))
    assert a == b


def test_shuffle_actually_reorders() -> None:
    orders = {tuple(c.id for c in build_deck(random.Random(seed))) for seed in range(5)}
    assert len(orders) > 1


def test_config_controls_deck_size() -> None:
    cfg = GameConfig(ranks_per_suit=5, invalid_count=1)
    deck = build_deck(random.Random(0), cfg)
    assert len(deck) == cfg.deck_size == 21
    assert {c.value for c in deck if c.is_valid} == set(RANKS[:5])
