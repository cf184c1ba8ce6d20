"""Grid ray casting: wall hits, texture choice and fish-eye correction."""

from __future__ import annotations

import enum
import math
from collections.abc import Sequence
from dataclasses import dataclass

from raycube.player import PI, TILE, Player

MAX_DEPTH = 25
NO_HIT_DISTANCE = 100000.0
HALF_FIELD_OF_VIEW = 0.523598
RAY_STEP = 0.01745329 / 24
RAY_COUNT = 1440
DOOR_OPEN_DISTANCE = 80
_EPSILON = 0.001
_SOLID = frozenset("123")


class TextureKind(enum.Enum):
    """Which texture a wall slice is drawn with."""

    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"
    DOOR = "door"
    FIRE = "fire"
    BLACK_HOLE = "black_hole"


@dataclass(frozen=True)
class RayHit:
    """Result of marching a ray across one family of grid lines.

    ``x``/``y`` is the last recorded point, ``end_x``/``end_y`` the ray's
    position when the march stopped.
    """

    x: float = 0.0
    y: float = 0.0
    distance: float = NO_HIT_DISTANCE
    end_x: float = 0.0
    end_y: float = 0.0
    is_door: bool = False
    is_fire: bool = False


@dataclass(frozen=True)
class WallSlice:
    """The wall seen along one screen column."""

    distance: float
    x: float
    y: float
    vertical: bool
    texture: TextureKind
    is_flame: bool


def distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Euclidean distance between two points."""
    return math.hypot(x2 - x1, y2 - y1)


def _cell(value: float) -> int:
    return int(int(value) / TILE)


def _march(
    grid: Sequence[str],
    px: float,
    py: float,
    rx: float,
    ry: float,
    step_x: float,
    step_y: float,
) -> RayHit:
    hit_x = hit_y = 0.0
    dist = NO_HIT_DISTANCE
    door = fire = False
    for _ in range(MAX_DEPTH):
        col, row = _cell(rx), _cell(ry)
        hit_x, hit_y = rx, ry
        dist = distance(px, py, rx, ry)
        if not (0 <= col and 0 <= row < len(grid) and col < len(grid[row]) - 1):
            break
        ch = grid[row][col]
        if ch in _SOLID:
            door = ch == "2"
            fire = ch == "3"
            break
        rx += step_x
        ry += step_y
    return RayHit(hit_x, hit_y, dist, rx, ry, door, fire)


def cast_horizontal(
    grid: Sequence[str], px: float, py: float, angle: float
) -> RayHit:
    """March a ray across horizontal grid lines until it meets a solid cell."""
    sine = math.sin(angle)
    if sine < -_EPSILON:
        tangent = math.tan(angle)
        ry = _cell(py) * TILE - _EPSILON
        rx = px - (py - ry) / tangent
        return _march(grid, px, py, rx, ry, -TILE / tangent, -TILE)
    if sine > _EPSILON:
        tangent = math.tan(angle)
        ry = _cell(py) * TILE + TILE + _EPSILON
        rx = px - (py - ry) / tangent
        return _march(grid, px, py, rx, ry, TILE / tangent, TILE)
    return RayHit(end_x=px, end_y=py)


def cast_vertical(
    grid: Sequence[str], px: float, py: float, angle: float
) -> tuple[RayHit, bool]:
    """March a ray across vertical grid lines.

    Returns the hit and whether the ray points straight down the screen's
    south-facing range, which forces a south texture.
    """
    cosine = math.cos(angle)
    if cosine < -_EPSILON:
        tangent = math.tan(angle)
        rx = _cell(px) * TILE - _EPSILON
        ry = py - (px - rx) * tangent
        return _march(grid, px, py, rx, ry, -TILE, -TILE * tangent), False
    if cosine > _EPSILON:
        tangent = math.tan(angle)
        rx = _cell(px) * TILE + TILE + _EPSILON
        ry = py - (px - rx) * tangent
        return _march(grid, px, py, rx, ry, TILE, TILE * tangent), False
    degrees = angle * 180 / math.pi
    return RayHit(end_x=px, end_y=py), 45 < degrees <= 130


def fix_fisheye(wall_distance: float, player_angle: float, ray_angle: float) -> float:
    """Project a ray distance onto the view direction."""
    fish_eye = player_angle - ray_angle
    if fish_eye < 0:
        fish_eye += 2 * PI
    if fish_eye > 2 * PI:
        fish_eye -= 2 * PI
    return wall_distance * math.cos(fish_eye)


def _vertical_texture(hit: RayHit, px: float) -> TextureKind:
    open_door = hit.is_door and hit.distance < DOOR_OPEN_DISTANCE
    if hit.is_door and not open_door:
        return TextureKind.DOOR
    if hit.is_fire:
        return TextureKind.FIRE
    if not hit.is_door:
        return TextureKind.EAST if hit.end_x > px else TextureKind.WEST
    return TextureKind.BLACK_HOLE


def _horizontal_texture(hit: RayHit, ray_y: float, py: float) -> TextureKind:
    open_door = hit.is_door and hit.distance < DOOR_OPEN_DISTANCE
    if hit.is_door and not open_door:
        return TextureKind.DOOR
    if hit.is_fire:
        return TextureKind.FIRE
    if not hit.is_door:
        return TextureKind.SOUTH if ray_y > py else TextureKind.NORTH
    return TextureKind.BLACK_HOLE


def choose_wall(
    horizontal: RayHit,
    vertical: RayHit,
    flag: bool,
    px: float,
    py: float,
    player_angle: float,
    ray_angle: float,
) -> WallSlice:
    """Pick the nearer of two hits and decide which texture it shows."""
    is_vertical = vertical.distance < horizontal.distance
    if is_vertical:
        hit = vertical
        texture = _vertical_texture(vertical, px)
    else:
        hit = horizontal
        # The ray's last position is the one left by the vertical march.
        texture = _horizontal_texture(horizontal, vertical.end_y, py)
    if flag and not horizontal.is_door and not horizontal.is_fire:
        texture = TextureKind.SOUTH
    is_flame = (horizontal.is_fire and horizontal.distance < vertical.distance) or (
        vertical.is_fire and horizontal.distance > vertical.distance
    )
    return WallSlice(
        distance=fix_fisheye(hit.distance, player_angle, ray_angle),
        x=hit.x,
        y=hit.y,
        vertical=is_vertical,
        texture=texture,
        is_flame=is_flame,
    )


def cast_rays(
    grid: Sequence[str], player: Player, count: int = RAY_COUNT
) -> list[WallSlice]:
    """Cast one ray per screen column across the field of view."""
    slices = []
    ray_angle = player.angle - HALF_FIELD_OF_VIEW
    for _ in range(count):
        horizontal = cast_horizontal(grid, player.x, player.y, ray_angle)
        vertical, flag = cast_vertical(grid, player.x, player.y, ray_angle)
        slices.append(
            choose_wall(
                horizontal, vertical, flag, player.x, player.y, player.angle, ray_angle
            )
        )
        ray_angle += RAY_STEP
    return slices