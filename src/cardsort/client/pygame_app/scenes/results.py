from __future__ import annotations

import pygame  # type: ignore[import-not-found]

from cardsort.engine.serialize import describe_move, format_time
from cardsort.services.leaderboard import is_highlighted

from ..app import GameContext
from ..scene_base import SceneNav
from ..ui import ACCENT, BACKGROUND, ERROR, MUTED, TEXT, Button, draw_panel, draw_text

MAX_WRONG_SHOWN = 5


class ResultsScene(SceneNav):
    def __init__(self, ctx: GameContext) -> None:
        self.ctx = ctx
        self._next = None
        cx = ctx.screen.get_width() // 2
        self.panel = pygame.Rect(cx - 300, 20, 600, 728)
        self.btn_again = Button(
            rect=pygame.Rect(cx - 200, self.panel.bottom - 64, 400, 48),
            text="Play Again",
            on_click=self._on_again,
        )

    def _on_again(self) -> None:
        session = self.ctx.session
        if session is None:
            return
        res = session.restart()
        if res.ok:
            from .sorting import SortingScene

            self._go(SortingScene(self.ctx))
            return
        from .name_entry import NameEntryScene

        self._go(NameEntryScene(self.ctx))

    def handle_event(self, event: pygame.event.Event) -> None:
        self.btn_again.handle_event(event)

    def render(self, screen: pygame.Surface) -> None:
        screen.fill(BACKGROUND)
        fonts = self.ctx.assets.fonts
        session = self.ctx.session
        assert session is not None
        result = session.result
        draw_panel(screen, self.panel)
        if result is None:
            self.btn_again.draw(screen, fonts.ui)
            return

        x = self.panel.x + 30
        y = self.panel.y + 20
        if result.perfect:
            banner = pygame.Rect(x, y, self.panel.width - 60, 40)
            pygame.draw.rect(screen, (253, 224, 71), banner, border_radius=8)
            img = fonts.big.render("PERFECT!", True, (113, 63, 18))
            screen.blit(img, img.get_rect(center=banner.center).topleft)
            y += 52

        title = "Congratulations!" if result.passed else "Game Over"
        draw_text(screen, fonts.big, title, (x, y), color=TEXT if result.passed else ERROR)
        y += 40
        blurb = (
            "You've successfully completed the game!"
            if result.passed
            else f"You need {self.ctx.config.pass_threshold:.0f}% accuracy to pass. Try again!"
        )
        draw_text(screen, fonts.ui, blurb, (x, y), color=MUTED)
        y += 30
        draw_text(screen, fonts.ui, f"Player: {session.state.player_name}", (x, y))
        y += 34

        rows = (
            ("Total Time:", format_time(result.total_time_ms), "Accuracy:", f"{result.accuracy:.1f}%"),
            ("Average per Card:", format_time(result.average_time_ms), "Score:", str(result.score)),
        )
        for left, lval, right, rval in rows:
            draw_text(screen, fonts.ui, f"{left} {lval}", (x, y))
            draw_text(screen, fonts.ui, f"{right} {rval}", (x + 300, y))
            y += 28
        draw_text(
            screen,
            fonts.small,
            f"Correct: {result.correct_moves} | Wrong: {result.wrong_count} | Total: {result.total_moves}",
            (x, y),
            color=MUTED,
        )
        y += 28

        if result.wrong_moves:
            draw_text(screen, fonts.ui, "Wrong Moves:", (x, y))
            y += 24
            for move in result.wrong_moves[:MAX_WRONG_SHOWN]:
                draw_text(screen, fonts.small, f"✗ {describe_move(move)}", (x + 10, y), color=ERROR)
                y += 20
            hidden = len(result.wrong_moves) - MAX_WRONG_SHOWN
            if hidden > 0:
                draw_text(screen, fonts.small, f"... and {hidden} more", (x + 10, y), color=MUTED)
                y += 20
            y += 8

        self._render_leaderboard(screen, x, y)
        self.btn_again.draw(screen, fonts.ui)

    def _render_leaderboard(self, screen: pygame.Surface, x: int, y: int) -> None:
        fonts = self.ctx.assets.fonts
        session = self.ctx.session
        assert session is not None
        draw_text(screen, fonts.ui, "Leaderboard", (x, y))
        y += 28
        cols = (0, 40, 260, 360, 460)
        for cx, head in zip(cols, ("#", "Name", "Score", "Accuracy", "Time")):
            draw_text(screen, fonts.small, head, (x + cx, y), color=MUTED)
        y += 22
        for i, entry in enumerate(session.leaderboard_entries):
            if is_highlighted(entry, session.latest_entry):
                pygame.draw.rect(screen, (254, 249, 195), pygame.Rect(x - 6, y - 2, 540, 22))
            color = ACCENT if is_highlighted(entry, session.latest_entry) else TEXT
            cells = (str(i + 1), entry.name[:20], str(entry.score), f"{entry.accuracy:.1f}%", format_time(entry.time))
            for cx, cell in zip(cols, cells):
                draw_text(screen, fonts.small, cell, (x + cx, y), color=color)
            y += 22
