from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

Suit = Literal["hearts", "diamonds", "clubs", "spades"]
Category = Literal["hearts", "diamonds", "clubs", "spades", "invalid"]
CardColor = Literal["red", "black", "purple"]
Phase = Literal["setup", "playing", "completed"]

SUITS: tuple[Suit, ...] = ("hearts", "diamonds", "clubs", "spades")
CATEGORIES: tuple[Category, ...] = ("hearts", "diamonds", "clubs", "spades", "invalid")
RANKS: tuple[str, ...] = ("A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K")
DECOY_SYMBOLS: tuple[str, ...] = ("★", "◆", "●", "▲", "◊", "※")

SUIT_COLORS: dict[Category, CardColor] = {
    "hearts": "red",
    "diamonds": "red",
    "clubs": "black",
    "spades": "black",
    "invalid": "purple",
}

SUIT_GLYPHS: dict[Category, str] = {
    "hearts": "♥",
    "diamonds": "♦",
    "clubs": "♣",
    "spades": "♠",
    "invalid": "✗",
}


@dataclass(frozen=True)
class GameConfig:
    ranks_per_suit: int = 3
    invalid_count: int = 3
    pass_threshold: float = 90.0
    leaderboard_size: int = 10

    def __post_init__(self) -> None:
        if not 0 < self.ranks_per_suit <= len(RANKS):
            raise ValueError(f"ranks_per_suit must be between 1 and {len(RANKS)}.")
        if not 0 <= self.invalid_count <= len(DECOY_SYMBOLS):
            raise ValueError(f"invalid_count must be between 0 and {len(DECOY_SYMBOLS)}.")

    @property
    def deck_size(self) -> int:
        return self.ranks_per_suit * len(SUITS) + self.invalid_count


@dataclass(frozen=True)
class Card:
    id: str
    suit: Category
    value: str
    color: CardColor
    is_valid: bool

    @property
    def symbol(self) -> str:
        # Decoys carry their own symbol in `value`.
        if not self.is_valid:
            return self.value
        return SUIT_GLYPHS[self.suit]

    @property
    def label(self) -> str:
        return self.value if self.is_valid else "INVALID"


@dataclass(frozen=True)
class Move:
    card: Card
    target: Category
    correct: bool
    timestamp: int
