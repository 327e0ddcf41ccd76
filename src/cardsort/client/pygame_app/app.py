from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import pygame  # type: ignore[import-not-found]

from cardsort.engine.types import GameConfig
from cardsort.paths import Paths
from cardsort.services.leaderboard import LeaderboardStore
from cardsort.services.session import GameSession
from cardsort.services.telemetry import TelemetryService

from .asset_manager import AssetManager
from .scene_base import Scene


@dataclass
class GameContext:
    screen: pygame.Surface
    clock: pygame.time.Clock
    paths: Paths
    assets: AssetManager
    telemetry: TelemetryService
    config: GameConfig
    seed: Optional[int] = None

    # Set up at boot
    leaderboard: Optional[LeaderboardStore] = None
    session: Optional[GameSession] = None


class App:
    def __init__(self, ctx: GameContext, initial_scene: Scene) -> None:
        self.ctx = ctx
        self.scene: Scene = initial_scene
        self.running = True

    def run(self) -> int:
        while self.running:
            dt = self.ctx.clock.tick(60) / 1000.0
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                    break
                self.scene.handle_event(event)

            tr = self.scene.update(dt)
            if tr is not None:
                self.scene = tr.next_scene

            self.scene.render(self.ctx.screen)
            pygame.display.flip()

        self.ctx.telemetry.log("app_closed", {})
        return 0
