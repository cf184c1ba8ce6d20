"""Drawing into a frame buffer: sky and floor, walls, minimap and overlays."""

from __future__ import annotations

import itertools
import math
from collections.abc import Sequence
from dataclasses import dataclass, field

import numpy as np

from raycube.color import pixel_color
from raycube.player import TILE, Player
from raycube.raycast import WallSlice

WINDOW_WIDTH = 1440
WINDOW_HEIGHT = 960
SKY_ALPHA = 180
FLOOR_ALPHA = 60
HORIZON_SHIFT = 30
STAR_CHANCE = 2
STAR_SCALE = 10000
MINI_TILE = 32
MINIMAP_TILES = 9
MINI_LINE_LENGTH = 41
HEALTH_X = 1020
HEALTH_Y = 20
HEALTH_STEP = 20
HEALTH_SLOTS = 20
HEALTH_PER_SLOT = 30
OVERLAY_THRESHOLD = 1_000_000_000
FIRE_ALPHA = 150

_MASK32 = 0xFFFFFFFF
_BLACK = pixel_color(0, 0, 0, 255)
_RED = pixel_color(255, 0, 0, 255)
_STAR = pixel_color(255, 255, 255, 255)
_TILE_COLORS = {
    "1": pixel_color(70, 250, 255, 100),
    "0": pixel_color(255, 255, 255, 150),
    "2": pixel_color(0, 150, 100, 255),
    "3": pixel_color(255, 0, 0, 100),
    " ": _BLACK,
    "\n": _BLACK,
}
_OTHER_TILE = pixel_color(255, 255, 255, 150)


@dataclass(eq=False)
class Frame:
    """A screen-sized buffer of packed RGBA pixels, indexed ``[y, x]``."""

    width: int = WINDOW_WIDTH
    height: int = WINDOW_HEIGHT
    pixels: np.ndarray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("frame dimensions must be positive")
        self.pixels = np.zeros((self.height, self.width), dtype=np.uint32)

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Set one pixel; coordinates outside the frame are ignored."""
        if 0 <= x < self.width and 0 <= y < self.height:
            self.pixels[y, x] = color & _MASK32


@dataclass(frozen=True, eq=False)
class Texture:
    """An image whose texels are RGBA bytes read as little-endian words."""

    pixels: np.ndarray

    def __post_init__(self) -> None:
        array = np.asarray(self.pixels, dtype=np.uint32)
        if array.ndim != 2 or array.size == 0:
            raise ValueError("texture must be a non-empty two-dimensional array")
        object.__setattr__(self, "pixels", array)

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @classmethod
    def from_rgba(cls, width: int, height: int, data: bytes) -> Texture:
        """Build a texture from raw row-major RGBA bytes."""
        if width <= 0 or height <= 0 or len(data) != width * height * 4:
            raise ValueError("RGBA data does not match the texture size")
        words = np.frombuffer(data, dtype="<u4").reshape(height, width)
        return cls(words.astype(np.uint32))


def _to_screen(texels: np.ndarray) -> np.ndarray:
    return np.asarray(texels, dtype=np.uint32).byteswap()


def _paint_column(frame: Frame, column: int, ys: np.ndarray, colors: np.ndarray) -> None:
    if not 0 <= column < frame.width:
        return
    inside = (ys >= 0) & (ys < frame.height)
    frame.pixels[ys[inside], column] = colors[inside]


def clean_window(
    frame: Frame,
    ceiling: Sequence[int],
    floor: Sequence[int],
    rng: np.random.Generator | None = None,
) -> None:
    """Fill the sky with the ceiling colour and scattered stars, the rest with floor."""
    if rng is None:
        rng = np.random.default_rng()
    sky_rows = max(0, min(frame.height, frame.height // 2 - HORIZON_SHIFT + 1))
    frame.pixels[:sky_rows] = pixel_color(*ceiling, SKY_ALPHA)
    frame.pixels[sky_rows:] = pixel_color(*floor, FLOOR_ALPHA)
    stars = rng.integers(0, STAR_SCALE, size=(sky_rows, frame.width)) < STAR_CHANCE
    frame.pixels[:sky_rows][stars] = _STAR


def draw_tile(frame: Frame, x: int, y: int, color: int) -> None:
    """Fill a minimap-sized square whose top-left corner is at (x, y)."""
    x0, y0 = max(x, 0), max(y, 0)
    x1, y1 = min(x + MINI_TILE, frame.width), min(y + MINI_TILE, frame.height)
    if x0 < x1 and y0 < y1:
        frame.pixels[y0:y1, x0:x1] = color & _MASK32


def draw_line(frame: Frame, x0: int, y0: int, x1: int, y1: int, color: int) -> None:
    """Draw a straight line between two points, endpoints included."""
    dx, dy = abs(x1 - x0), abs(y1 - y0)
    err = dx - dy
    x, y = x0, y0
    while True:
        frame.put_pixel(x, y, color)
        if x == x1 and y == y1:
            break
        doubled = err * 2
        if doubled > -dy:
            err -= dy
            x += 1 if x < x1 else -1
        if doubled < dx:
            err += dx
            y += 1 if y < y1 else -1


def tile_color(grid: Sequence[str], row: int, col: int) -> int:
    """Minimap colour of a map cell; cells outside the map are black."""
    if 0 <= row < len(grid) and 0 <= col < len(grid[row]):
        return _TILE_COLORS.get(grid[row][col], _OTHER_TILE)
    return _BLACK


def _map_origin(player: Player) -> tuple[int, int]:
    col = int((player.x - TILE / 2) / TILE - 4)
    row = int((player.y - TILE / 2) / TILE - 4)
    return max(col, 0), max(row, 0)


def draw_minimap(frame: Frame, grid: Sequence[str], player: Player) -> None:
    """Draw the cells around the player in the top-left corner."""
    col0, row0 = _map_origin(player)
    for y, x in itertools.product(range(MINIMAP_TILES), repeat=2):
        draw_tile(frame, x * MINI_TILE, y * MINI_TILE, tile_color(grid, row0 + y, col0 + x))


def draw_miniplayer(frame: Frame, player: Player) -> None:
    """Mark the player on the minimap with a square and a direction line."""
    col0, row0 = _map_origin(player)
    px = int(player.x / TILE - col0) * MINI_TILE
    py = int(player.y / TILE - row0) * MINI_TILE
    draw_tile(frame, px, py, _RED)
    px += MINI_TILE // 2
    py += MINI_TILE // 2
    draw_line(
        frame,
        px,
        py,
        int(px + MINI_LINE_LENGTH * math.cos(player.angle)),
        int(py + MINI_LINE_LENGTH * math.sin(player.angle)),
        _RED,
    )


def flame_index(frame_count: int) -> int:
    """Index of the fire animation image to show for a frame."""
    return int(5 + math.sin(frame_count * 0.6) * 5)


def draw_wall_slice(
    frame: Frame, column: int, wall: WallSlice, texture: Texture, unit: int = TILE
) -> None:
    """Draw one textured wall column, scaled by its distance."""
    wall_height = unit * frame.height / max(wall.distance, 1e-6)
    offset = int((wall_height - frame.height) / 2) if wall_height > frame.height else 0
    shift = int(frame.height // 2 - wall_height / 2)
    along = wall.y if wall.vertical else wall.x
    rate = math.fmod(along, unit) / unit
    texture_x = int(rate * texture.width) if 0 < rate <= 1 else 0
    texture_x = min(texture_x, texture.width - 1)
    step = texture.height / wall_height
    if wall_height <= frame.height:
        ys = np.arange(shift, shift + wall_height).astype(np.int64)
        texture_ys = (np.arange(len(ys)) * step).astype(np.int64)
    else:
        ys = np.arange(frame.height, dtype=np.int64)
        positions = offset * step + np.arange(frame.height) * step
        texture_ys = positions.astype(np.int64) % texture.height
    texture_ys = np.minimum(texture_ys, texture.height - 1)
    colors = _to_screen(texture.pixels[texture_ys, texture_x])
    _paint_column(frame, column, ys, colors)


def draw_overlay(frame: Frame, texture: Texture, x: int, y: int) -> None:
    """Draw a texture at (x, y), skipping texels below the opacity threshold."""
    rows, cols = np.nonzero(texture.pixels >= OVERLAY_THRESHOLD)
    xs, ys = cols + x, rows + y
    inside = (xs >= 0) & (xs < frame.width) & (ys >= 0) & (ys < frame.height)
    rows, cols = rows[inside], cols[inside]
    frame.pixels[ys[inside], xs[inside]] = _to_screen(texture.pixels[rows, cols])


def draw_health(frame: Frame, health: int, full: Texture, empty: Texture) -> None:
    """Draw the health bar: one full slot per thirty points, the rest empty."""
    full_slots = health // HEALTH_PER_SLOT
    for slot in range(full_slots):
        draw_overlay(frame, full, HEALTH_X + slot * HEALTH_STEP, HEALTH_Y)
    for slot in range(max(full_slots, 0), HEALTH_SLOTS):
        draw_overlay(frame, empty, HEALTH_X + slot * HEALTH_STEP, HEALTH_Y)


def apply_fire_tint(frame: Frame, frame_count: int) -> None:
    """Paint a pulsing red stripe pattern over the frame."""
    red = int(150 + math.sin(frame_count * 0.2) * 50)
    if frame.width > 1 and frame.height > 1:
        frame.pixels[1::2, 1:] = pixel_color(red, 0, 0, FIRE_ALPHA)