"""Game state and the per-frame update and drawing sequence."""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING

import numpy as np

from raycube.player import TILE, KeyState, Player
from raycube.raycast import cast_rays
from raycube.render import (
    Frame,
    Texture,
    apply_fire_tint,
    clean_window,
    draw_health,
    draw_minimap,
    draw_miniplayer,
    draw_overlay,
    draw_wall_slice,
    flame_index,
)
from raycube.scene import Scene

if TYPE_CHECKING:
    from raycube.app import TextureSet

DEATH_HEALTH = 30
CROSSHAIR_OFFSET = 30
WEAPON_RIGHT = 650
WEAPON_BOTTOM = 312
FIRE_CELL = "3"


class GameState(enum.Enum):
    """What the game is currently showing."""

    INTRO = "intro"
    PLAYING = "playing"
    DEAD = "dead"


def _blit(frame: Frame, texture: Texture, x: int, y: int) -> None:
    """Copy a whole texture into the frame with its top-left corner at (x, y)."""
    x0, y0 = max(x, 0), max(y, 0)
    x1 = min(x + texture.width, frame.width)
    y1 = min(y + texture.height, frame.height)
    if x0 < x1 and y0 < y1:
        texels = texture.pixels[y0 - y:y1 - y, x0 - x:x1 - x]
        frame.pixels[y0:y1, x0:x1] = texels.byteswap()


class Game:
    """A running game: the scene, the player and the frame counters."""

    def __init__(self, scene: Scene, rng: np.random.Generator | None = None) -> None:
        self.scene = scene
        self.player = Player.spawn(scene.start_row, scene.start_col, scene.orientation)
        self.intro = True
        self.closed = False
        self.fire_frame = 0
        self.animation_frame = 0
        self.rng = rng if rng is not None else np.random.default_rng()

    @property
    def state(self) -> GameState:
        """The screen the game is on."""
        if self.intro:
            return GameState.INTRO
        if self.player.dead:
            return GameState.DEAD
        return GameState.PLAYING

    @property
    def running(self) -> bool:
        """False once the player has asked to quit."""
        return not self.closed

    def step(self, keys: KeyState) -> None:
        """Apply one frame of keyboard input."""
        if keys.start:
            self.intro = False
        self.player.update(keys, self.scene.grid)
        if keys.escape:
            self.closed = True

    def _player_cell(self) -> str | None:
        row = int(int(self.player.y) / TILE)
        col = int(int(self.player.x) / TILE)
        grid = self.scene.grid
        if 0 <= row < len(grid) and 0 <= col < len(grid[row]):
            return grid[row][col]
        return None

    def check_fire(self) -> bool:
        """Burn the player standing in fire; return whether they are burning."""
        burning = self._player_cell() == FIRE_CELL
        if burning:
            self.player.health -= 1
            self.fire_frame += 1
        if self.player.health < DEATH_HEALTH:
            self.player.dead = True
        return burning

    def render(self, frame: Frame, textures: TextureSet) -> None:
        """Draw the current screen into ``frame``."""
        state = self.state
        if state is GameState.INTRO:
            _blit(frame, textures.intro, 0, 0)
            return
        if state is GameState.DEAD:
            frame.pixels[:] = 0
            _blit(frame, textures.gameover, 0, 0)
            return
        config = self.scene.config
        clean_window(frame, config.ceiling, config.floor, self.rng)
        flame = textures.flames[flame_index(self.animation_frame)]
        for column, wall in enumerate(cast_rays(self.scene.grid, self.player, frame.width)):
            texture = flame if wall.is_flame else textures.wall(wall.texture)
            draw_wall_slice(frame, column, wall, texture)
        draw_minimap(frame, self.scene.grid, self.player)
        draw_miniplayer(frame, self.player)
        draw_overlay(
            frame,
            textures.crosshair,
            frame.width // 2 - CROSSHAIR_OFFSET,
            frame.height // 2 - CROSSHAIR_OFFSET,
        )
        tint_count = self.fire_frame
        if self.check_fire():
            apply_fire_tint(frame, tint_count)
        draw_health(frame, self.player.health, textures.heal_full, textures.heal_empty)
        draw_overlay(
            frame, textures.weapon, frame.width - WEAPON_RIGHT, frame.height - WEAPON_BOTTOM
        )
        self.animation_frame += 1