"""Deterministic, headless rules engine for the card sorting game.

IMPORTANT: This package must never import pygame.
"""

from .actions import DropCardAction, NextCardAction, ResolveCurrentAction, RestartAction, StartGameAction
from .classify import classify
from .deck import build_deck
from .game import GameState, StepResult, evaluate, initial_state, is_complete, step
from .scoring import GameResult
from .types import CATEGORIES, Card, Category, GameConfig, Move

__all__ = [
    "CATEGORIES",
    "Card",
    "Category",
    "DropCardAction",
    "GameConfig",
    "GameResult",
    "GameState",
    "Move",
    "NextCardAction",
    "ResolveCurrentAction",
    "RestartAction",
    "StartGameAction",
    "StepResult",
    "build_deck",
    "classify",
    "evaluate",
    "initial_state",
    "is_complete",
    "step",
]
