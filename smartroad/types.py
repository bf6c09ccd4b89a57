"""Core value types shared by the simulation: enums, vectors, cars and statistics."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass, field
from enum import Enum, auto

SLOW = 50.0
MEDIUM = 100.0
FAST = 150.0
SUPER = 200.0


class AppState(Enum):
    """What the application is currently doing."""

    RUNNING = auto()
    PAUSED = auto()
    STATS_DISPLAY = auto()
    EXIT = auto()


class Direction(Enum):
    """The side of the intersection a car comes from."""

    NORTH = auto()
    SOUTH = auto()
    EAST = auto()
    WEST = auto()


class Route(Enum):
    """The turn a car takes through the intersection."""

    RIGHT = auto()
    STRAIGHT = auto()
    LEFT = auto()


class CollisionType(Enum):
    """Lane class used to decide which cars can conflict."""

    NS = auto()  # north, straight
    WS = auto()  # west, straight
    ES = auto()  # east, straight
    SS = auto()  # south, straight
    NL = auto()  # north, left
    WL = auto()  # west, left
    EL = auto()  # east, left
    SL = auto()  # south, left
    GG = auto()  # generic / right turns


@dataclass(frozen=True)
class Vec2:
    """A 2D vector."""

    x: float
    y: float

    def dot(self, other: Vec2) -> float:
        """Dot product with another vector."""
        return self.x * other.x + self.y * other.y

    def normalize(self) -> Vec2:
        """Unit vector in the same direction; the zero vector stays zero."""
        length = math.hypot(self.x, self.y)
        if length > 0.0:
            return Vec2(self.x / length, self.y / length)
        return Vec2(0.0, 0.0)


@dataclass
class Car:
    """A car travelling through the intersection."""

    id: int
    x: float
    y: float
    speed: float
    direction: Direction
    route: Route
    rotation: float = 0.0  # radians
    collision_types: list[CollisionType] = field(default_factory=list)
    spawn_time: float = field(default_factory=time.monotonic)
    moving: bool = True
    rotated: bool = False  # set once the car has turned
    entered: bool = False  # set once the car has entered the intersection
    max_speed: float | None = None
    min_speed: float | None = None

    def __post_init__(self) -> None:
        if self.max_speed is None:
            self.max_speed = self.speed
        if self.min_speed is None:
            self.min_speed = self.speed


@dataclass
class Stats:
    """Statistics gathered over a simulation run; times are in seconds."""

    max_number_cars: int = 0
    max_velocity: float = 0.0
    min_velocity: float = 0.0
    max_time: float = 0.0
    min_time: float = 1000.0
    close_call: int = 0