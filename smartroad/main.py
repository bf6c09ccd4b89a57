"""Command-line entry point: opens the window and runs the simulation loop."""

from __future__ import annotations

import argparse
import sys
import time
from typing import Sequence

import pygame

from .game import Game
from .renderer import WINDOW_HEIGHT, WINDOW_WIDTH, GameTextures

WINDOW_TITLE = "Smart Road"
FONT_SIZE = 24
FRAME_DELAY = 0.016  # seconds slept between frames, roughly 60 frames per second

FONT_PATHS = (
    "C:/Windows/Fonts/arial.ttf",
    "/System/Library/Fonts/Arial.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
)


def load_font(size: int) -> pygame.font.Font:
    """Load the first available system font from ``FONT_PATHS``."""
    if not pygame.font.get_init():
        pygame.font.init()
    last_error: Exception | None = None
    for path in FONT_PATHS:
        try:
            return pygame.font.Font(path, size)
        except (OSError, pygame.error) as exc:
            last_error = exc
    raise RuntimeError(f"Could not load font: {last_error}")


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="smartroad", description="Simulate autonomous cars crossing an intersection."
    )
    parser.add_argument(
        "--assets",
        default="assets",
        help="directory holding map.png and car.png (default: %(default)s)",
    )
    return parser.parse_args(argv)


def _run(assets_dir: str) -> None:
    pygame.init()
    font = load_font(FONT_SIZE)
    surface = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
    pygame.display.set_caption(WINDOW_TITLE)
    textures = GameTextures.load(assets_dir)

    game = Game()
    last_time = time.monotonic()
    while True:
        current_time = time.monotonic()
        delta_time = current_time - last_time
        last_time = current_time

        if not game.handle_events(pygame.event.get()):
            break
        game.update(delta_time)
        game.render(surface, textures, font)
        pygame.display.flip()
        time.sleep(FRAME_DELAY)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the simulation window until the user quits; return an exit status."""
    args = _parse_args(argv)
    try:
        _run(args.assets)
    except (OSError, RuntimeError, pygame.error) as exc:
        print(exc, file=sys.stderr)
        return 1
    finally:
        pygame.quit()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())