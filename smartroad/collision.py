"""Hit boxes, separating-axis collision checks and right-of-way bookkeeping."""

from __future__ import annotations

from typing import NamedTuple, Sequence

from .types import CollisionType, Stats, Vec2

HITBOX_BUFFER = 2.0

_REFERENCE_POINTS = (
    (600.0, 292.0), (600.0, 410.0), (415.0, 410.0), (415.0, 292.0),
    (415.0, 365.0), (415.0, 292.0), (535.0, 292.0), (480.0, 410.0),
    (600.0, 330.0), (415.0, 330.0), (540.0, 415.0), (600.0, 365.0),
    (480.0, 292.0),
)

_FALLBACK_POINT = (500.0, 500.0)

_CT = CollisionType
_REFERENCE_TABLE = {
    frozenset((_CT.NS, _CT.ES)): (600.0, 292.0),
    frozenset((_CT.NS, _CT.WS)): (600.0, 410.0),
    frozenset((_CT.WS, _CT.SS)): (415.0, 410.0),
    frozenset((_CT.SS, _CT.ES)): (415.0, 292.0),
    frozenset((_CT.NL, _CT.SS)): (415.0, 365.0),
    frozenset((_CT.NL, _CT.ES)): (535.0, 292.0),
    frozenset((_CT.SL, _CT.WS)): (480.0, 410.0),
    frozenset((_CT.SL, _CT.NS)): (600.0, 330.0),
    frozenset((_CT.EL, _CT.SS)): (415.0, 330.0),
    frozenset((_CT.EL, _CT.WS)): (540.0, 415.0),
    frozenset((_CT.WL, _CT.NS)): (600.0, 365.0),
    frozenset((_CT.WL, _CT.ES)): (480.0, 292.0),
}

_VERTICAL = {_CT.NS, _CT.SS, _CT.NL, _CT.SL}
_HORIZONTAL = {_CT.ES, _CT.WS, _CT.WL, _CT.EL}

Corners = tuple[Vec2, Vec2, Vec2, Vec2]
Tracking = dict[int, list[tuple[float, float, int, CollisionType, bool]]]


class CarSnapshot(NamedTuple):
    """A car's position and lane classes at one moment."""

    id: int
    x: float
    y: float
    collision_types: Sequence[CollisionType]
    rotated: bool


def build_car_tracking(car_data: Sequence[CarSnapshot]) -> Tracking:
    """For each car, list the other cars sharing at least one non-generic lane class.

    Each entry is ``(x, y, other_id, other_primary_type, other_rotated)``.
    """
    tracking: Tracking = {}
    for car in car_data:
        types = [t for t in car.collision_types if t is not CollisionType.GG]
        neighbours = []
        for other in car_data:
            if other.id == car.id:
                continue
            other_types = [t for t in other.collision_types if t is not CollisionType.GG]
            if other_types and any(t in other_types for t in types):
                neighbours.append((other.x, other.y, other.id, other_types[0], other.rotated))
        tracking[car.id] = neighbours
    return tracking


def check_collision(
    car_tracking: Tracking,
    car_id: int,
    car_x: float,
    car_y: float,
    collision_types: Sequence[CollisionType],
    rotated: bool,
    priority_map: dict[tuple[int, int], int],
    priority_ref: dict[tuple[int, int], int],
    stats: Stats,
) -> bool:
    """Return True if the car must wait this frame.

    Records right-of-way winners in ``priority_map``, claims reached reference
    points in ``priority_ref`` and counts close calls in ``stats``.
    """
    primary = collision_types[0] if collision_types else CollisionType.GG
    corners = compute_rotated_corners(car_x, car_y, primary, rotated)
    temp_win = 0

    for x, y, other_id, other_type, other_rotated in car_tracking.get(car_id, ()):
        other_corners = compute_rotated_corners(x, y, other_type, other_rotated)
        if not sat_collision(corners, other_corners):
            continue

        pair = (min(car_id, other_id), max(car_id, other_id))
        winner = priority_map.get(pair)
        if winner is not None:
            temp_win = winner
            if winner != car_id:
                stats.close_call += 1
                return True

        ref_x, ref_y = get_reference_point(primary, other_type)
        owner = priority_ref.get((int(ref_x), int(ref_y)))
        if owner is not None:
            if owner == other_id:
                return True
            if owner == car_id:
                continue

        generic = ref_x == _FALLBACK_POINT[0]
        # Generic conflicts go to whichever car appeared first.
        if generic and car_id > other_id:
            return True

        this_distance = ((car_x - ref_x) ** 2 + (car_y - ref_y) ** 2) ** 0.5
        other_distance = ((x - ref_x) ** 2 + (y - ref_y) ** 2) ** 0.5

        if temp_win == 0 and not generic and primary != other_type:
            if this_distance > other_distance:
                stats.close_call += 1
                priority_map[pair] = other_id
                return True
            priority_map[pair] = car_id

    _update_reference_points(corners, car_id, priority_ref)
    return False


def check_spawn_collision(
    x: float,
    y: float,
    collision_type: CollisionType,
    car_data: Sequence[CarSnapshot],
) -> bool:
    """Return True if a new car at (x, y) would overlap a car of the same lane class."""
    corners = compute_rotated_corners(x, y, collision_type, False)
    for car in car_data:
        if not car.collision_types:
            continue
        other_type = car.collision_types[0]
        if other_type != collision_type:
            continue
        other = compute_rotated_corners(car.x, car.y, other_type, car.rotated)
        if sat_collision(corners, other):
            return True
    return False


def get_reference_point(type1: CollisionType, type2: CollisionType) -> tuple[float, float]:
    """The conflict point two lane classes share, or (500, 500) when there is none."""
    return _REFERENCE_TABLE.get(frozenset((type1, type2)), _FALLBACK_POINT)


def _update_reference_points(
    corners: Corners, car_id: int, priority_ref: dict[tuple[int, int], int]
) -> None:
    for ref_x, ref_y in _REFERENCE_POINTS:
        if contains_point(corners, ref_x, ref_y):
            priority_ref.setdefault((round(ref_x), round(ref_y)), car_id)


def compute_rotated_corners(
    x: float, y: float, collision_type: CollisionType, rotated: bool
) -> Corners:
    """Hit-box corners centred on (x, y), padded by the hit-box buffer."""
    if collision_type in _VERTICAL:
        width, height = 24.0, 100.0
    elif collision_type in _HORIZONTAL:
        width, height = 100.0, 24.0
    else:
        width, height = 100.0, 100.0
    if rotated:
        width, height = height, width
    hw = width / 2.0 + HITBOX_BUFFER
    hh = height / 2.0 + HITBOX_BUFFER
    return (
        Vec2(x - hw, y - hh),
        Vec2(x + hw, y - hh),
        Vec2(x + hw, y + hh),
        Vec2(x - hw, y + hh),
    )


def _edges(points: Corners):
    return zip(points, points[1:] + points[:1])


def _axes(points: Corners):
    for p1, p2 in _edges(points):
        yield Vec2(-(p2.y - p1.y), p2.x - p1.x).normalize()


def _project(points: Corners, axis: Vec2) -> tuple[float, float]:
    values = [axis.dot(p) for p in points]
    return min(values), max(values)


def sat_collision(a: Corners, b: Corners) -> bool:
    """True if two convex quadrilaterals overlap (touching counts)."""
    for axis in (*_axes(a), *_axes(b)):
        a_min, a_max = _project(a, axis)
        b_min, b_max = _project(b, axis)
        if a_max < b_min or b_max < a_min:
            return False
    return True


def contains_point(corners: Corners, px: float, py: float) -> bool:
    """Even-odd ray-casting test of a point against a polygon."""
    inside = False
    for p1, p2 in _edges(corners):
        if (p1.y > py) != (p2.y > py) and px < (p2.x - p1.x) * (py - p1.y) / (p2.y - p1.y) + p1.x:
            inside = not inside
    return inside