"""The simulation state: spawning cars, stepping them and switching screens."""

from __future__ import annotations

import math
import random
import time
from typing import Callable, Iterable

import pygame

from .collision import CarSnapshot, build_car_tracking, check_collision, check_spawn_collision
from .movement import move_left, move_right, move_straight
from .renderer import GameTextures, render_game, render_stats
from .types import FAST, SUPER, AppState, Car, CollisionType, Direction, Route, Stats

SPAWN_COOLDOWN = 0.8  # seconds between spawns

_CT = CollisionType

SPAWN_COORDS: dict[tuple[Route, Direction], tuple[float, float]] = {
    (Route.RIGHT, Direction.NORTH): (655.0, 0.0),
    (Route.RIGHT, Direction.WEST): (1024.0, 435.0),
    (Route.RIGHT, Direction.EAST): (0.0, 230.0),
    (Route.RIGHT, Direction.SOUTH): (360.0, 682.0),
    (Route.STRAIGHT, Direction.NORTH): (595.0, 45.0),
    (Route.STRAIGHT, Direction.WEST): (978.0, 390.0),
    (Route.STRAIGHT, Direction.EAST): (0.0, 278.0),
    (Route.STRAIGHT, Direction.SOUTH): (420.0, 682.0),
    (Route.LEFT, Direction.NORTH): (535.0, 45.0),
    (Route.LEFT, Direction.WEST): (978.0, 350.0),
    (Route.LEFT, Direction.EAST): (0.0, 315.0),
    (Route.LEFT, Direction.SOUTH): (480.0, 682.0),
}

# Every lane class a car on the given route and approach can conflict with;
# the first entry is the car's own lane class.
_COLLISION_TYPES: dict[tuple[Route, Direction], list[CollisionType]] = {
    (Route.STRAIGHT, Direction.NORTH): [_CT.NS, _CT.WS, _CT.ES, _CT.WL, _CT.SL],
    (Route.STRAIGHT, Direction.WEST): [_CT.WS, _CT.SS, _CT.NS, _CT.EL, _CT.SL],
    (Route.STRAIGHT, Direction.EAST): [_CT.ES, _CT.SS, _CT.NS, _CT.WL, _CT.NL],
    (Route.STRAIGHT, Direction.SOUTH): [_CT.SS, _CT.WS, _CT.ES, _CT.EL, _CT.NL],
    (Route.LEFT, Direction.NORTH): [_CT.NL, _CT.ES, _CT.SS],
    (Route.LEFT, Direction.WEST): [_CT.WL, _CT.NS, _CT.ES],
    (Route.LEFT, Direction.EAST): [_CT.EL, _CT.SS, _CT.WS],
    (Route.LEFT, Direction.SOUTH): [_CT.SL, _CT.NS, _CT.ES],
}

_INITIAL_ROTATION = {
    Direction.NORTH: 0.0,
    Direction.EAST: -math.pi / 2.0,
    Direction.SOUTH: math.pi,
    Direction.WEST: math.pi / 2.0,
}

_KEY_DIRECTIONS = {
    pygame.K_UP: Direction.NORTH,
    pygame.K_DOWN: Direction.SOUTH,
    pygame.K_RIGHT: Direction.EAST,
    pygame.K_LEFT: Direction.WEST,
}

_RANDOM_DIRECTIONS = (Direction.NORTH, Direction.SOUTH, Direction.EAST, Direction.WEST)
_RANDOM_ROUTES = (Route.RIGHT, Route.STRAIGHT, Route.LEFT)

_MOVERS = {
    Route.STRAIGHT: move_straight,
    Route.RIGHT: move_right,
    Route.LEFT: move_left,
}


class Game:
    """The intersection simulation and its application state."""

    def __init__(
        self,
        *,
        spawn_cooldown: float = SPAWN_COOLDOWN,
        clock: Callable[[], float] = time.monotonic,
        rng: random.Random | None = None,
    ) -> None:
        self._clock = clock
        self._rng = rng if rng is not None else random.Random()
        now = clock()
        self.app_state = AppState.RUNNING
        self.stats = Stats()
        self.start_time = now
        self.cars: list[Car] = []
        self.next_car_id = 1
        self.spawn_coords = dict(SPAWN_COORDS)
        self.priority_map: dict[tuple[int, int], int] = {}
        self.priority_ref: dict[tuple[int, int], int] = {}
        self.in_intersection: dict[CollisionType, list[int]] = {}
        self.last_spawn_time = now
        self.spawn_cooldown = spawn_cooldown

    def _snapshots(self) -> list[CarSnapshot]:
        return [CarSnapshot(c.id, c.x, c.y, c.collision_types, c.rotated) for c in self.cars]

    def handle_events(self, events: Iterable[pygame.event.Event]) -> bool:
        """Process input events; return False once the application should stop."""
        for event in events:
            if event.type == pygame.QUIT:
                return False
            if event.type != pygame.KEYDOWN:
                continue
            if event.key == pygame.K_ESCAPE:
                if self.app_state is AppState.RUNNING:
                    self.app_state = AppState.STATS_DISPLAY
                elif self.app_state is AppState.STATS_DISPLAY:
                    self.app_state = AppState.EXIT
            elif self.app_state is AppState.RUNNING:
                self.handle_key(event.key)
        return self.app_state is not AppState.EXIT

    def handle_key(self, key: int) -> Car | None:
        """Spawn a car for an arrow key or ``r``, honouring the spawn cooldown."""
        elapsed = self._clock() - self.last_spawn_time
        if elapsed < self.spawn_cooldown:
            print(
                f"Spawn on cooldown, please wait "
                f"{self.spawn_cooldown - elapsed:.1f} more seconds"
            )
            return None

        if key == pygame.K_r:
            direction = self._rng.choice(_RANDOM_DIRECTIONS)
        else:
            direction = _KEY_DIRECTIONS.get(key)
        if direction is None:
            return None
        return self.spawn_car(direction, self._rng.choice(_RANDOM_ROUTES))

    def spawn_car(self, direction: Direction, route: Route) -> Car | None:
        """Place a new car at its lane's entry, unless that spot is occupied."""
        x, y = self.spawn_coords[(route, direction)]
        collision_types = list(_COLLISION_TYPES.get((route, direction), [CollisionType.GG]))
        if check_spawn_collision(x, y, collision_types[0], self._snapshots()):
            print("Spawn blocked due to collision.")
            return None

        now = self._clock()
        car = Car(
            id=self.next_car_id,
            x=x,
            y=y,
            speed=SUPER if route is Route.STRAIGHT else FAST,
            direction=direction,
            route=route,
            rotation=_INITIAL_ROTATION[direction],
            collision_types=collision_types,
            spawn_time=now,
        )
        self.cars.append(car)
        self.next_car_id += 1
        self.stats.max_number_cars += 1
        self.last_spawn_time = now
        print(f"Spawned car {car.id} at ({x}, {y})")
        return car

    def update(self, delta_time: float) -> None:
        """Advance every car by ``delta_time`` seconds and retire finished cars."""
        if self.app_state is not AppState.RUNNING:
            return

        tracking = build_car_tracking(self._snapshots())
        for car in self.cars:
            if not car.moving:
                continue
            blocked = check_collision(
                tracking,
                car.id,
                car.x,
                car.y,
                car.collision_types,
                car.rotated,
                self.priority_map,
                self.priority_ref,
                self.stats,
            )
            if blocked:
                continue
            car.max_speed = max(car.max_speed, car.speed)
            car.min_speed = min(car.min_speed, car.speed)
            self.stats.max_velocity = max(self.stats.max_velocity, car.speed)
            self.stats.min_velocity = 0.0  # cars always come to a stop at some point
            _MOVERS[car.route](car, delta_time, self.in_intersection)

        finished = [car for car in self.cars if not car.moving]
        if not finished:
            return
        now = self._clock()
        for car in finished:
            travel_time = now - car.spawn_time
            self.stats.max_time = max(self.stats.max_time, travel_time)
            self.stats.min_time = min(self.stats.min_time, travel_time)
        self.cars = [car for car in self.cars if car.moving]

        for car in finished:
            self.priority_map = {
                pair: winner for pair, winner in self.priority_map.items() if car.id not in pair
            }
            self.priority_ref = {
                point: owner for point, owner in self.priority_ref.items() if owner != car.id
            }
            lane = self.in_intersection.get(car.collision_types[0])
            if lane is not None:
                lane[:] = [car_id for car_id in lane if car_id != car.id]

    def render(
        self, surface: pygame.Surface, textures: GameTextures, font: pygame.font.Font
    ) -> None:
        """Draw the screen that matches the current application state."""
        if self.app_state is AppState.RUNNING:
            render_game(surface, textures, self.cars)
        elif self.app_state is AppState.STATS_DISPLAY:
            render_stats(surface, font, self.stats)