from __future__ import annotations

import pygame  # type: ignore[import-not-found]

from ..app import GameContext
from ..scene_base import SceneNav
from ..ui import BACKGROUND, ERROR, MUTED, Button, TextInput, draw_panel, draw_text

INTRO = (
    "Sort 15 cards into their correct suit piles.",
    "Watch out for invalid cards!",
    "You need 90% accuracy to pass.",
)


class NameEntryScene(SceneNav):
    def __init__(self, ctx: GameContext, name: str = "") -> None:
        self.ctx = ctx
        self._next = None
        self._error: str | None = None
        cx = ctx.screen.get_width() // 2
        self.panel = pygame.Rect(cx - 220, 160, 440, 360)
        self.input = TextInput(
            rect=pygame.Rect(cx - 180, 330, 360, 44),
            text=name,
            on_submit=self._on_submit,
            placeholder="Enter your name",
            active=True,
        )
        self.btn_start = Button(rect=pygame.Rect(cx - 180, 420, 360, 48), text="Start Game", on_click=self._on_start)

    def _on_submit(self, text: str) -> None:
        self._on_start()

    def _on_start(self) -> None:
        session = self.ctx.session
        if session is None:
            return
        res = session.start_game(self.input.text)
        if not res.ok:
            self.input.touched = True
            self._error = res.error
            return
        from .sorting import SortingScene

        self._go(SortingScene(self.ctx))

    def handle_event(self, event: pygame.event.Event) -> None:
        if self.input.handle_event(event):
            self._error = None
            return
        self.btn_start.handle_event(event)

    def render(self, screen: pygame.Surface) -> None:
        screen.fill(BACKGROUND)
        fonts = self.ctx.assets.fonts
        draw_panel(screen, self.panel)
        title = fonts.big.render("Card Sorting Solitaire", True, (22, 101, 52))
        screen.blit(title, title.get_rect(midtop=(self.panel.centerx, self.panel.y + 24)).topleft)

        y = self.panel.y + 80
        for line in INTRO:
            img = fonts.ui.render(line, True, MUTED)
            screen.blit(img, img.get_rect(midtop=(self.panel.centerx, y)).topleft)
            y += 26

        self.input.draw(screen, fonts.ui)
        if self.input.touched and not self.input.text.strip():
            draw_text(
                screen,
                fonts.small,
                self._error or "Please enter your name to start.",
                (self.input.rect.x, self.input.rect.bottom + 6),
                color=ERROR,
            )

        self.btn_start.enabled = bool(self.input.text.strip())
        self.btn_start.draw(screen, fonts.ui)
