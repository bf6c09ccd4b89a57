import random

import pygame
import pytest

from smartroad.game import SPAWN_COOLDOWN, Game
from smartroad.renderer import WINDOW_HEIGHT, WINDOW_WIDTH, GameTextures
from smartroad.types import FAST, SUPER, AppState, CollisionType, Direction, Route


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def game(clock):
    return Game(clock=clock, rng=random.Random(3))


def _key(key):
    return pygame.event.Event(pygame.KEYDOWN, key=key)


def test_new_game_state(game):
    assert game.app_state is AppState.RUNNING
    assert game.next_car_id == 1
    assert game.cars == []
    assert len(game.spawn_coords) == 12
    assert game.spawn_cooldown == SPAWN_COOLDOWN


def test_spawn_straight_north(game):
    car = game.spawn_car(Direction.NORTH, Route.STRAIGHT)
    assert (car.x, car.y) == (595.0, 45.0)
    assert car.speed == SUPER
    assert car.id == 1
    assert car.collision_types == [
        CollisionType.NS, CollisionType.WS, CollisionType.ES, CollisionType.WL, CollisionType.SL,
    ]
    assert game.next_car_id == 2
    assert game.stats.max_number_cars == 1


def test_spawn_right_turn_is_generic(game):
    car = game.spawn_car(Direction.EAST, Route.RIGHT)
    assert car.collision_types == [CollisionType.GG]
    assert car.speed == FAST
    assert (car.x, car.y) == (0.0, 230.0)


def test_spawn_blocked_on_occupied_entry(game, capsys):
    game.spawn_car(Direction.WEST, Route.LEFT)
    assert game.spawn_car(Direction.WEST, Route.LEFT) is None
    assert len(game.cars) == 1
    assert "Spawn blocked due to collision." in capsys.readouterr().out


def test_key_during_cooldown_does_not_spawn(game, clock):
    clock.now = SPAWN_COOLDOWN / 2
    assert game.handle_key(pygame.K_UP) is None
    assert game.cars == []


def test_arrow_key_after_cooldown_spawns(game, clock):
    clock.now = SPAWN_COOLDOWN + 0.1
    car = game.handle_key(pygame.K_DOWN)
    assert car.direction is Direction.SOUTH
    assert game.cars == [car]
    assert game.last_spawn_time == clock.now


def test_random_key_spawns(game, clock):
    clock.now = SPAWN_COOLDOWN + 0.1
    car = game.handle_key(pygame.K_r)
    assert car.direction in set(Direction)
    assert len(game.cars) == 1


def test_unmapped_key_spawns_nothing(game, clock):
    clock.now = SPAWN_COOLDOWN + 0.1
    assert game.handle_key(pygame.K_a) is None
    assert game.cars == []


def test_escape_moves_through_states(game):
    assert game.handle_events([_key(pygame.K_ESCAPE)]) is True
    assert game.app_state is AppState.STATS_DISPLAY
    assert game.handle_events([_key(pygame.K_ESCAPE)]) is False
    assert game.app_state is AppState.EXIT


def test_quit_event_stops(game):
    assert game.handle_events([pygame.event.Event(pygame.QUIT)]) is False


def test_keys_ignored_on_stats_screen(game, clock):
    clock.now = SPAWN_COOLDOWN + 0.1
    game.handle_events([_key(pygame.K_ESCAPE), _key(pygame.K_UP)])
    assert game.cars == []


def test_key_event_spawns_while_running(game, clock):
    clock.now = SPAWN_COOLDOWN + 0.1
    assert game.handle_events([_key(pygame.K_LEFT)]) is True
    assert [car.direction for car in game.cars] == [Direction.WEST]


def test_update_moves_car_forward(game):
    car = game.spawn_car(Direction.NORTH, Route.STRAIGHT)
    start_y = car.y
    game.update(0.1)
    assert car.y > start_y
    assert game.stats.max_velocity == SUPER


def test_update_retires_finished_car(game, clock):
    car = game.spawn_car(Direction.NORTH, Route.STRAIGHT)
    car.y = 700.0
    game.priority_map[(car.id, 99)] = car.id
    game.priority_ref[(600, 292)] = car.id
    game.in_intersection[CollisionType.NS] = [car.id, 42]
    clock.now = 2.0
    game.update(0.016)
    assert game.cars == []
    assert game.priority_map == {}
    assert game.priority_ref == {}
    assert game.in_intersection[CollisionType.NS] == [42]
    assert game.stats.max_time == clock.now - car.spawn_time
    assert game.stats.min_time == game.stats.max_time


def test_update_does_nothing_on_stats_screen(game):
    car = game.spawn_car(Direction.NORTH, Route.STRAIGHT)
    game.app_state = AppState.STATS_DISPLAY
    start = (car.x, car.y)
    game.update(0.5)
    assert (car.x, car.y) == start


def test_render_matches_state(game):
    pygame.font.init()
    background = pygame.Surface((4, 4))
    background.fill((0, 0, 255))
    textures = GameTextures(background=background, car=pygame.Surface((2, 2)))
    font = pygame.font.Font(None, 24)
    screen = pygame.Surface((WINDOW_WIDTH, WINDOW_HEIGHT))

    game.render(screen, textures, font)
    assert screen.get_at((0, 0))[:3] == (0, 0, 255)

    game.app_state = AppState.STATS_DISPLAY
    game.render(screen, textures, font)
    assert screen.get_at((0, 0))[:3] == (0, 0, 0)