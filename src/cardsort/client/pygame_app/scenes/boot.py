from __future__ import annotations

import random
import traceback

import pygame  # type: ignore[import-not-found]

from cardsort.services.leaderboard import LeaderboardStore
from cardsort.services.session import GameSession
from ..app import GameContext
from ..scene_base import SceneTransition
from ..ui import BACKGROUND, ERROR, Button, draw_text
from .name_entry import NameEntryScene


class BootScene:
    def __init__(self, ctx: GameContext) -> None:
        self.ctx = ctx
        self._did_boot = False
        self._error: str | None = None
        self._quit_button: Button | None = None

    def handle_event(self, event: pygame.event.Event) -> None:
        if self._quit_button is not None:
            self._quit_button.handle_event(event)

    def update(self, dt: float) -> SceneTransition | None:
        if self._did_boot:
            return None
        self._did_boot = True
        try:
            paths = self.ctx.paths
            paths.userdata_dir.mkdir(parents=True, exist_ok=True)
            self.ctx.leaderboard = LeaderboardStore(
                path=paths.leaderboard_file,
                schema_path=paths.schema_dir / "leaderboard.schema.json",
                telemetry=self.ctx.telemetry,
                limit=self.ctx.config.leaderboard_size,
            )
            self.ctx.session = GameSession(
                leaderboard=self.ctx.leaderboard,
                telemetry=self.ctx.telemetry,
                config=self.ctx.config,
                rng=random.Random(self.ctx.seed),
            )
            self.ctx.telemetry.log("boot", {"ok": True, "seed": self.ctx.seed})
            return SceneTransition(NameEntryScene(self.ctx))
        except Exception as e:
            tb = traceback.format_exc(limit=8)
            self._error = f"{e}\n\n{tb}"
            self.ctx.telemetry.log("boot", {"ok": False, "error": str(e)})
            self._quit_button = Button(
                rect=pygame.Rect(20, self.ctx.screen.get_height() - 68, 140, 44),
                text="Quit",
                on_click=lambda: pygame.event.post(pygame.event.Event(pygame.QUIT)),
            )
            return None

    def render(self, screen: pygame.Surface) -> None:
        screen.fill(BACKGROUND)
        fonts = self.ctx.assets.fonts
        draw_text(screen, fonts.big, "Card Sorting Solitaire", (20, 20))

        if self._error is None:
            draw_text(screen, fonts.ui, "Loading leaderboard...", (20, 80))
            return
        draw_text(screen, fonts.ui, "BOOT ERROR", (20, 80), color=ERROR)
        y = 120
        for line in self._error.splitlines()[:22]:
            draw_text(screen, fonts.small, line[:120], (20, y), color=(40, 40, 40))
            y += 18
        if self._quit_button is not None:
            self._quit_button.draw(screen, fonts.ui)
