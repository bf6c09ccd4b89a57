"""Drawing of the intersection scene and of the end-of-run statistics screen."""

from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

import pygame

from .types import Car, Stats

WINDOW_WIDTH = 1024
WINDOW_HEIGHT = 682

CAR_WIDTH = 32
CAR_HEIGHT = 60

BACKGROUND_FILE = "map.png"
CAR_FILE = "car.png"

BLACK = (0, 0, 0)
WHITE = (255, 255, 255)

TITLE = "Simulation Statistics"
EXIT_HINT = "Press ESC again to exit"

_TITLE_POS = (300, 50)
_LINES_LEFT = 200
_LINES_TOP = 150
_LINE_SPACING = 50
_EXIT_POS = (350, 550)

# A minimum travel time still at its initial value means no car finished.
_UNSET_MIN_TIME = 1000.0


@dataclass
class GameTextures:
    """The images the scene is drawn from."""

    background: pygame.Surface
    car: pygame.Surface

    @classmethod
    def load(cls, assets_dir: str | Path = "assets") -> GameTextures:
        """Load the background and car images from ``assets_dir``."""
        directory = Path(assets_dir)
        images = []
        for name in (BACKGROUND_FILE, CAR_FILE):
            path = directory / name
            if not path.is_file():
                raise FileNotFoundError(f"missing texture: {path}")
            images.append(pygame.image.load(str(path)))
        background, car = images
        return cls(background=background, car=car)


def stats_lines(stats: Stats) -> list[str]:
    """The text lines shown on the statistics screen."""
    min_travel_time = 0.0 if stats.min_time == _UNSET_MIN_TIME else stats.min_time
    return [
        f"Total Cars: {stats.max_number_cars}",
        f"Maximum Speed: {stats.max_velocity:.2f} units/s",
        f"Minimum Speed: {stats.min_velocity:.2f} units/s",
        f"Maximum Travel Time: {stats.max_time:.2f} seconds",
        f"Minimum Travel Time: {min_travel_time:.2f} seconds",
        f"Close Calls: {stats.close_call}",
    ]


def _draw_car(scene: pygame.Surface, image: pygame.Surface, car: Car) -> None:
    left = int(car.x - CAR_WIDTH / 2.0)
    top = int(car.y - CAR_HEIGHT / 2.0)
    center = (left + CAR_WIDTH // 2, top + CAR_HEIGHT // 2)
    # Rotation is clockwise on screen, pygame rotates counter-clockwise.
    rotated = pygame.transform.rotate(image, -math.degrees(car.rotation))
    scene.blit(rotated, rotated.get_rect(center=center))


def render_game(surface: pygame.Surface, textures: GameTextures, cars: Iterable[Car]) -> None:
    """Draw the background and every car, then flip the scene vertically onto ``surface``."""
    size = (WINDOW_WIDTH, WINDOW_HEIGHT)
    scene = pygame.Surface(size)
    scene.fill(BLACK)
    scene.blit(pygame.transform.scale(textures.background, size), (0, 0))

    car_image = pygame.transform.scale(textures.car, (CAR_WIDTH, CAR_HEIGHT))
    for car in cars:
        _draw_car(scene, car_image, car)

    surface.fill(BLACK)
    surface.blit(pygame.transform.flip(scene, False, True), (0, 0))


def render_stats(surface: pygame.Surface, font: pygame.font.Font, stats: Stats) -> None:
    """Draw the statistics screen onto ``surface``."""
    surface.fill(BLACK)
    surface.blit(font.render(TITLE, True, WHITE), _TITLE_POS)
    for index, line in enumerate(stats_lines(stats)):
        surface.blit(
            font.render(line, True, WHITE),
            (_LINES_LEFT, _LINES_TOP + index * _LINE_SPACING),
        )
    surface.blit(font.render(EXIT_HINT, True, WHITE), _EXIT_POS)