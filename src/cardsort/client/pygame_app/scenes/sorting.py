from __future__ import annotations

import pygame  # type: ignore[import-not-found]

from cardsort.engine.game import GameState
from cardsort.engine.serialize import format_time
from cardsort.engine.types import CATEGORIES, SUIT_GLYPHS, Card, Category

from ..app import GameContext
from ..asset_manager import INK
from ..scene_base import SceneNav, SceneTransition
from ..ui import BACKGROUND, ERROR, MUTED, TEXT, Button, draw_panel, draw_text

CARD_SIZE = (110, 150)
TRAY_CARD_SIZE = (84, 32)
PILE_ROW_SIZE = (112, 28)

GAME_OVER_DELAY = 0.4


class SortingScene(SceneNav):
    """Drag the current card (or a skipped one from the tray) onto a pile."""

    def __init__(self, ctx: GameContext) -> None:
        self.ctx = ctx
        self._next = None
        self._message = ""
        self._completed_for = 0.0

        # (card, grab offset, mouse position)
        self._drag: tuple[Card, tuple[int, int], tuple[int, int]] | None = None

        self.btn_reset = Button(
            rect=pygame.Rect(ctx.screen.get_width() - 130, 20, 110, 36),
            text="Reset",
            on_click=self._on_reset,
            outline=True,
        )
        self.btn_next = Button(rect=pygame.Rect(40, 390, 220, 44), text="Next Card", on_click=self._on_next)

    @property
    def _state(self) -> GameState:
        assert self.ctx.session is not None
        return self.ctx.session.state

    # -------- Layout --------
    def _current_rect(self) -> pygame.Rect:
        return pygame.Rect(95, 170, *CARD_SIZE)

    def _pile_rect(self, index: int) -> pygame.Rect:
        w, gap = 132, 10
        return pygame.Rect(300 + index * (w + gap), 100, w, 560)

    def _tray_rects(self) -> list[tuple[Card, pygame.Rect]]:
        out: list[tuple[Card, pygame.Rect]] = []
        for i, card in enumerate(self._state.skipped_cards()):
            col, row = i % 2, i // 2
            out.append((card, pygame.Rect(40 + col * (TRAY_CARD_SIZE[0] + 12), 490 + row * 40, *TRAY_CARD_SIZE)))
        return out

    def _pile_at(self, pos: tuple[int, int]) -> Category | None:
        for i, cat in enumerate(CATEGORIES):
            if self._pile_rect(i).collidepoint(pos):
                return cat
        return None

    # -------- Actions --------
    def _on_reset(self) -> None:
        session = self.ctx.session
        if session is None:
            return
        session.restart()
        self._drag = None
        self._message = ""
        self._completed_for = 0.0

    def _on_next(self) -> None:
        session = self.ctx.session
        if session is None:
            return
        res = session.view_next_card()
        self._message = "" if res.ok else (res.error or "")

    def _begin_drag(self, pos: tuple[int, int]) -> None:
        state = self._state
        current = state.current_card
        rect = self._current_rect()
        if current is not None and current.id not in state.sorted_ids and rect.collidepoint(pos):
            self._drag = (current, (pos[0] - rect.x, pos[1] - rect.y), pos)
            return
        for card, r in self._tray_rects():
            if r.collidepoint(pos):
                self._drag = (card, (pos[0] - r.x, pos[1] - r.y), pos)
                return

    def _end_drag(self, pos: tuple[int, int]) -> None:
        session = self.ctx.session
        drag, self._drag = self._drag, None
        if drag is None or session is None:
            return
        target = self._pile_at(pos)
        if target is None:
            return
        res = session.drop_card(drag[0].id, target)
        self._message = "" if res.ok else (res.error or "")

    def handle_event(self, event: pygame.event.Event) -> None:
        if self.btn_reset.handle_event(event):
            return
        if self.btn_next.handle_event(event):
            return
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self._begin_drag(event.pos)
        elif event.type == pygame.MOUSEMOTION and self._drag is not None:
            card, offset, _ = self._drag
            self._drag = (card, offset, event.pos)
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self._end_drag(event.pos)

    def update(self, dt: float) -> SceneTransition | None:
        if self._next is not None:
            return self._next
        if self._state.phase == "completed":
            # Let the last card land on its pile before switching screens.
            self._completed_for += dt
            if self._completed_for >= GAME_OVER_DELAY:
                from .results import ResultsScene

                self._go(ResultsScene(self.ctx))
        return self._next

    # -------- Rendering --------
    def render(self, screen: pygame.Surface) -> None:
        screen.fill(BACKGROUND)
        fonts = self.ctx.assets.fonts
        session = self.ctx.session
        assert session is not None
        view = session.view()

        draw_text(screen, fonts.big, "Card Sorting Solitaire", (20, 20))
        acc = float(view["accuracy"])  # type: ignore[arg-type]
        stats = (
            f"Avg: {format_time(float(view['average_time_ms']))}   "  # type: ignore[arg-type]
            f"Sorted: {view['sorted_count']}/{view['deck_size']}   "
            f"Accuracy: {acc:.1f}%"
        )
        draw_text(screen, fonts.ui, stats, (420, 28), color=TEXT if acc >= self.ctx.config.pass_threshold else ERROR)
        self.btn_reset.draw(screen, fonts.ui)

        self._render_current(screen, view)
        self._render_tray(screen)
        for i, cat in enumerate(CATEGORIES):
            self._render_pile(screen, i, cat)

        draw_text(
            screen,
            fonts.small,
            "Drag each card to its matching suit pile. Invalid cards (purple) go to the Invalid pile.",
            (300, 680),
            color=MUTED,
        )
        if self._message:
            draw_text(screen, fonts.small, self._message, (40, 450), color=ERROR)

        if self._drag is not None:
            card, (ox, oy), (mx, my) = self._drag
            screen.blit(self.ctx.assets.card_face(card, CARD_SIZE), (mx - ox, my - oy))

    def _render_current(self, screen: pygame.Surface, view: dict[str, object]) -> None:
        fonts = self.ctx.assets.fonts
        panel = pygame.Rect(20, 100, 260, 350)
        draw_panel(screen, panel)
        draw_text(screen, fonts.ui, "Current Card", (panel.x + 16, panel.y + 14))

        state = self._state
        current = state.current_card
        dragging = self._drag is not None and current is not None and self._drag[0].id == current.id
        if current is not None and current.id not in state.sorted_ids and not dragging:
            screen.blit(self.ctx.assets.card_face(current, CARD_SIZE), self._current_rect().topleft)

        counter = f"Card {int(view['current_index']) + 1} of {view['deck_size']}"  # type: ignore[call-overload]
        draw_text(screen, fonts.small, counter, (panel.x + 80, 334), color=MUTED)
        self.btn_next.enabled = state.phase == "playing" and state.current_index < len(state.deck) - 1
        self.btn_next.draw(screen, fonts.ui)

    def _render_tray(self, screen: pygame.Surface) -> None:
        tray = self._tray_rects()
        if not tray:
            return
        draw_text(screen, self.ctx.assets.fonts.small, "Skipped cards", (40, 468), color=MUTED)
        for card, rect in tray:
            if self._drag is not None and self._drag[0].id == card.id:
                continue
            screen.blit(self.ctx.assets.card_face(card, TRAY_CARD_SIZE), rect.topleft)

    def _render_pile(self, screen: pygame.Surface, index: int, cat: Category) -> None:
        fonts = self.ctx.assets.fonts
        rect = self._pile_rect(index)
        hovered = self._drag is not None and rect.collidepoint(self._drag[2])
        outline = (142, 68, 173) if cat == "invalid" else (150, 150, 150)
        draw_panel(screen, rect, dashed=not hovered, outline=outline)

        color = INK["purple"] if cat == "invalid" else INK["red"] if cat in ("hearts", "diamonds") else INK["black"]
        glyph = fonts.symbol.render(SUIT_GLYPHS[cat], True, color)
        screen.blit(glyph, glyph.get_rect(midtop=(rect.centerx, rect.y + 8)).topleft)
        name = fonts.small.render(cat.capitalize(), True, MUTED)
        screen.blit(name, name.get_rect(midtop=(rect.centerx, rect.y + 62)).topleft)

        pile = self._state.piles[cat]
        y = rect.y + 90
        for card in pile:
            if y + PILE_ROW_SIZE[1] > rect.bottom - 34:
                break
            screen.blit(self.ctx.assets.card_face(card, PILE_ROW_SIZE), (rect.x + 10, y))
            y += PILE_ROW_SIZE[1] + 4

        count = fonts.small.render(str(len(pile)), True, TEXT)
        screen.blit(count, count.get_rect(midbottom=(rect.centerx, rect.bottom - 10)).topleft)
