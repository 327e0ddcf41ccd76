from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import pygame  # type: ignore[import-not-found]


Color = tuple[int, int, int]

BACKGROUND: Color = (240, 253, 244)
PANEL: Color = (255, 255, 255)
OUTLINE: Color = (187, 205, 193)
TEXT: Color = (22, 101, 52)
MUTED: Color = (90, 90, 90)
ERROR: Color = (220, 38, 38)
ACCENT: Color = (22, 163, 74)


def draw_text(
    screen: pygame.Surface,
    font: pygame.font.Font,
    text: str,
    pos: tuple[int, int],
    color: Color = TEXT,
) -> None:
    img = font.render(text, True, color)
    screen.blit(img, pos)


def draw_panel(screen: pygame.Surface, rect: pygame.Rect, *, dashed: bool = False, outline: Color = OUTLINE) -> None:
    pygame.draw.rect(screen, PANEL, rect, border_radius=10)
    if not dashed:
        pygame.draw.rect(screen, outline, rect, width=2, border_radius=10)
        return
    # pygame has no dashed stroke; draw the edges in short segments.
    dash, gap = 10, 6
    for x in range(rect.left, rect.right, dash + gap):
        end = min(x + dash, rect.right)
        pygame.draw.line(screen, outline, (x, rect.top), (end, rect.top), 2)
        pygame.draw.line(screen, outline, (x, rect.bottom - 1), (end, rect.bottom - 1), 2)
    for y in range(rect.top, rect.bottom, dash + gap):
        end = min(y + dash, rect.bottom)
        pygame.draw.line(screen, outline, (rect.left, y), (rect.left, end), 2)
        pygame.draw.line(screen, outline, (rect.right - 1, y), (rect.right - 1, end), 2)


@dataclass
class Button:
    rect: pygame.Rect
    text: str
    on_click: Callable[[], None]
    enabled: bool = True
    outline: bool = False

    def handle_event(self, event: pygame.event.Event) -> bool:
        if not self.enabled:
            return False
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.on_click()
                return True
        return False

    def draw(self, screen: pygame.Surface, font: pygame.font.Font) -> None:
        if self.outline:
            bg, fg = PANEL, TEXT
        else:
            bg = ACCENT if self.enabled else (163, 196, 174)
            fg = (255, 255, 255)
        pygame.draw.rect(screen, bg, self.rect, border_radius=8)
        pygame.draw.rect(screen, OUTLINE if self.outline else bg, self.rect, width=2, border_radius=8)
        img = font.render(self.text, True, fg)
        r = img.get_rect(center=self.rect.center)
        screen.blit(img, r.topleft)


@dataclass
class TextInput:
    rect: pygame.Rect
    text: str
    on_submit: Callable[[str], None]
    placeholder: str = ""
    active: bool = False
    touched: bool = False
    max_len: int = 24

    def handle_event(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            was_active = self.active
            self.active = self.rect.collidepoint(event.pos)
            if was_active and not self.active:
                # Leaving the field counts as having tried it (blur).
                self.touched = True
            return self.active
        if not self.active:
            return False
        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_RETURN:
                self.touched = True
                self.on_submit(self.text)
                return True
            if event.key == pygame.K_BACKSPACE:
                self.text = self.text[:-1]
                return True
            if event.unicode and len(self.text) < self.max_len and event.unicode.isprintable():
                self.text += event.unicode
                return True
        return False

    def draw(self, screen: pygame.Surface, font: pygame.font.Font) -> None:
        pygame.draw.rect(screen, PANEL, self.rect, border_radius=6)
        edge = ACCENT if self.active else OUTLINE
        pygame.draw.rect(screen, edge, self.rect, width=2, border_radius=6)
        if self.text:
            img = font.render(self.text, True, (20, 20, 20))
        else:
            img = font.render(self.placeholder, True, (160, 160, 160))
        screen.blit(img, (self.rect.x + 10, self.rect.y + (self.rect.height - img.get_height()) // 2))
