from __future__ import annotations

from .types import Card, Category


def classify(card: Card, target: Category) -> bool:
    """A move is correct when the card lands on its own suit, or a decoy lands on `invalid`."""
    return card.suit == target or (not card.is_valid and target == "invalid")
