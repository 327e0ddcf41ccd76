from __future__ import annotations

from dataclasses import dataclass

from .types import Category


@dataclass(frozen=True)
class StartGameAction:
    player_name: str


@dataclass(frozen=True)
class DropCardAction:
    card_id: str
    target: Category


@dataclass(frozen=True)
class ResolveCurrentAction:
    target: Category


@dataclass(frozen=True)
class NextCardAction:
    pass


@dataclass(frozen=True)
class RestartAction:
    pass


Action = StartGameAction | DropCardAction | ResolveCurrentAction | NextCardAction | RestartAction
