from __future__ import annotations

import argparse
from pathlib import Path

import pygame  # type: ignore[import-not-found]

from cardsort.engine.types import GameConfig
from cardsort.paths import get_paths
from cardsort.services.telemetry import TelemetryService

from .app import App, GameContext
from .asset_manager import AssetManager
from .scenes.boot import BootScene


def main() -> int:
    parser = argparse.ArgumentParser(prog="cardsort")
    parser.add_argument("--width", type=int, default=1024)
    parser.add_argument("--height", type=int, default=768)
    parser.add_argument("--seed", type=int, default=None, help="fixed shuffle seed")
    parser.add_argument("--userdata", type=Path, default=None, help="where the leaderboard is kept")
    args = parser.parse_args()

    pygame.init()
    screen = pygame.display.set_mode((args.width, args.height))
    pygame.display.set_caption("Card Sorting Solitaire")

    clock = pygame.time.Clock()
    paths = get_paths(args.userdata)

    ctx = GameContext(
        screen=screen,
        clock=clock,
        paths=paths,
        assets=AssetManager(),
        telemetry=TelemetryService(paths.telemetry_file),
        config=GameConfig(),
        seed=args.seed,
    )

    app = App(ctx, BootScene(ctx))
    return app.run()
