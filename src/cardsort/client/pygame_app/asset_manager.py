from __future__ import annotations

from dataclasses import dataclass

import pygame  # type: ignore[import-not-found]

from cardsort.engine.types import Card, CardColor

# Default pygame font has no suit glyphs; prefer fonts that do.
SYMBOL_FONTS = "dejavusans,segoeuisymbol,arialunicodems,notosanssymbols2,symbola"

INK: dict[CardColor, tuple[int, int, int]] = {
    "red": (214, 48, 49),
    "black": (20, 20, 20),
    "purple": (142, 68, 173),
}


@dataclass
class Fonts:
    ui: pygame.font.Font
    small: pygame.font.Font
    big: pygame.font.Font
    symbol: pygame.font.Font
    symbol_small: pygame.font.Font


class AssetManager:
    """Fonts plus procedurally drawn card faces, cached by (card id, size)."""

    def __init__(self) -> None:
        self._cache: dict[tuple[str, int, int], pygame.Surface] = {}

        pygame.font.init()
        self.fonts = Fonts(
            ui=pygame.font.SysFont(SYMBOL_FONTS, 22),
            small=pygame.font.SysFont(SYMBOL_FONTS, 16),
            big=pygame.font.SysFont(SYMBOL_FONTS, 32, bold=True),
            symbol=pygame.font.SysFont(SYMBOL_FONTS, 44),
            symbol_small=pygame.font.SysFont(SYMBOL_FONTS, 18),
        )

    def card_face(self, card: Card, size: tuple[int, int]) -> pygame.Surface:
        w, h = size
        key = (card.id, w, h)
        if key in self._cache:
            return self._cache[key]

        surf = pygame.Surface(size, pygame.SRCALPHA)
        rect = surf.get_rect()
        pygame.draw.rect(surf, (255, 255, 255), rect, border_radius=8)
        border = (190, 190, 190) if card.is_valid else (187, 143, 206)
        pygame.draw.rect(surf, border, rect, width=2, border_radius=8)

        ink = INK[card.color]
        big = h >= 100
        glyph_font = self.fonts.symbol if big else self.fonts.symbol_small
        glyph = glyph_font.render(card.symbol, True, ink)
        label = self.fonts.ui.render(card.label, True, ink) if big else None

        if label is None:
            text = self.fonts.small.render(card.value, True, ink)
            surf.blit(text, text.get_rect(midleft=(8, h // 2)).topleft)
            surf.blit(glyph, glyph.get_rect(midright=(w - 8, h // 2)).topleft)
        else:
            surf.blit(glyph, glyph.get_rect(center=(w // 2, h // 2 - 14)).topleft)
            surf.blit(label, label.get_rect(center=(w // 2, h // 2 + 30)).topleft)

        self._cache[key] = surf
        return surf
