"""Per-route car movement and admission of cars into the intersection."""

from __future__ import annotations

import math
from typing import NamedTuple

from .types import Car, CollisionType, Direction

# A car is admitted only while fewer than this many other lanes are occupied.
MAX_BUSY_LANES = 3

IntersectionLanes = dict[CollisionType, list[int]]

_LEFT_LANES = (CollisionType.NL, CollisionType.SL, CollisionType.EL, CollisionType.WL)


class _StraightLeg(NamedTuple):
    axis: str
    sign: int
    limit: float
    enter_at: float
    lane: CollisionType


class _RightTurn(NamedTuple):
    axis: str
    sign: int
    turn_end: float
    decel: float
    drift_from: float
    drift: float
    rotation: float
    exit_limit: float


class _LeftTurn(NamedTuple):
    axis: str
    sign: int
    turn_end: float
    rotate_at: float
    rotation: float
    enter_at: float
    lane: CollisionType
    exit_sign: int
    exit_limit: float


_STRAIGHT = {
    Direction.NORTH: _StraightLeg("y", 1, 682.0, 170.0, CollisionType.NS),
    Direction.SOUTH: _StraightLeg("y", -1, 0.0, 540.0, CollisionType.SS),
    Direction.EAST: _StraightLeg("x", 1, 1023.0, 270.0, CollisionType.ES),
    Direction.WEST: _StraightLeg("x", -1, 0.0, 760.0, CollisionType.WS),
}

_RIGHT = {
    Direction.NORTH: _RightTurn("y", 1, 230.0, 0.2, 180.0, 0.3, -math.pi / 2.0, 1200.0),
    Direction.WEST: _RightTurn("x", -1, 655.0, 0.1, 730.0, 0.3, 0.0, 720.0),
    Direction.SOUTH: _RightTurn("y", -1, 433.0, 0.2, 540.0, -0.2, math.pi / 2.0, -50.0),
    Direction.EAST: _RightTurn("x", 1, 360.0, 0.1, 285.0, -0.3, math.pi, -50.0),
}

_LEFT = {
    Direction.NORTH: _LeftTurn("y", 1, 350.0, 307.0, math.pi / 2.0, 170.0, CollisionType.NL, -1, 0.0),
    Direction.SOUTH: _LeftTurn("y", -1, 315.0, 388.0, -math.pi / 2.0, 540.0, CollisionType.SL, 1, 1200.0),
    Direction.EAST: _LeftTurn("x", 1, 538.0, 490.0, 0.0, 273.0, CollisionType.EL, 1, 700.0),
    Direction.WEST: _LeftTurn("x", -1, 477.0, 535.0, math.pi, 740.0, CollisionType.WL, -1, 0.0),
}


def _other_axis(axis: str) -> str:
    return "y" if axis == "x" else "x"


def _short_of(position: float, mark: float, sign: int) -> bool:
    """True while a car travelling in ``sign`` direction has not reached ``mark``."""
    return (mark - position) * sign > 0


def _past(position: float, mark: float, sign: int) -> bool:
    """True once a car travelling in ``sign`` direction has gone beyond ``mark``."""
    return (position - mark) * sign > 0


def _shift(car: Car, axis: str, amount: float) -> None:
    setattr(car, axis, getattr(car, axis) + amount)


def _busy_other_lanes(in_intersection: IntersectionLanes, lane: CollisionType) -> int:
    busy = sum(1 for cars in in_intersection.values() if cars)
    if in_intersection.get(lane):
        busy -= 1
    return busy


def _register(car: Car, in_intersection: IntersectionLanes, lane: CollisionType, admitted: bool) -> None:
    cars = in_intersection.setdefault(lane, [])
    if car.id not in cars:
        car.entered = True
        if admitted:
            cars.append(car.id)


def move_straight(car: Car, delta_time: float, in_intersection: IntersectionLanes) -> None:
    """Drive a straight-through car one frame, respecting the lane-occupancy limit."""
    leg = _STRAIGHT[car.direction]
    position = getattr(car, leg.axis)
    if not _short_of(position, leg.limit, leg.sign):
        car.moving = False
        return

    admitted = _busy_other_lanes(in_intersection, leg.lane) < MAX_BUSY_LANES
    if not car.entered or admitted:
        _shift(car, leg.axis, leg.sign * car.speed * delta_time)
    if _past(getattr(car, leg.axis), leg.enter_at, leg.sign):
        _register(car, in_intersection, leg.lane, admitted)


def move_right(car: Car, delta_time: float, in_intersection: IntersectionLanes) -> None:
    """Drive a right-turning car one frame; right turns never wait for other lanes."""
    turn = _RIGHT[car.direction]
    side = _other_axis(turn.axis)
    drift_sign = 1 if turn.drift > 0 else -1

    if _short_of(getattr(car, turn.axis), turn.turn_end, turn.sign):
        _shift(car, turn.axis, turn.sign * car.speed * delta_time)
        car.speed -= turn.decel
        if _past(getattr(car, turn.axis), turn.drift_from, turn.sign):
            _shift(car, side, turn.drift)
            if not car.rotated:
                car.rotation = turn.rotation
                car.rotated = True
    elif _short_of(getattr(car, side), turn.exit_limit, drift_sign):
        car.speed += 2.0
        _shift(car, side, drift_sign * car.speed * delta_time)
    else:
        car.moving = False


def move_left(car: Car, delta_time: float, in_intersection: IntersectionLanes) -> None:
    """Drive a left-turning car one frame; only one left-turn lane may be occupied at a time."""
    turn = _LEFT[car.direction]
    side = _other_axis(turn.axis)

    if _short_of(getattr(car, turn.axis), turn.turn_end, turn.sign):
        busy = _busy_other_lanes(in_intersection, turn.lane)
        other_left_busy = any(
            in_intersection.get(lane) for lane in _LEFT_LANES if lane is not turn.lane
        )
        admitted = busy < MAX_BUSY_LANES and not other_left_busy
        if not car.entered or admitted:
            _shift(car, turn.axis, turn.sign * car.speed * delta_time)
        position = getattr(car, turn.axis)
        if _past(position, turn.rotate_at, turn.sign) and not car.rotated:
            car.rotation = turn.rotation
            car.rotated = True
        if _past(position, turn.enter_at, turn.sign):
            _register(car, in_intersection, turn.lane, admitted)
    elif _short_of(getattr(car, side), turn.exit_limit, turn.exit_sign):
        car.rotated = True
        car.speed += 2.0
        _shift(car, side, turn.exit_sign * car.speed * delta_time)
    else:
        car.moving = False