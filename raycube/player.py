"""Player position, orientation and movement on the map grid."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

PI = 3.1415926535
TILE = 64
WALK_SPEED = 5
SPRINT_SPEED = 17
STRAFE_SPEED = 7
KEY_TURN = 0.05
MOUSE_TURN = 0.07
START_HEALTH = 600

_ORIENTATION_ANGLES = {
    "N": 3 * PI / 2,
    "S": PI / 2,
    "E": 0.0,
    "W": PI,
}


@dataclass
class KeyState:
    """Which controls are held down during a frame."""

    forward: bool = False
    backward: bool = False
    left: bool = False
    right: bool = False
    turn_left: bool = False
    turn_right: bool = False
    sprint: bool = False
    start: bool = False
    escape: bool = False


def _cell(value: float) -> int:
    return int(int(value) / TILE)


def _is_wall(grid: Sequence[str], x: float, y: float) -> bool:
    row, col = _cell(y), _cell(x)
    if 0 <= row < len(grid) and 0 <= col < len(grid[row]):
        return grid[row][col] == "1"
    return False


@dataclass
class Player:
    """The player's position in map units and viewing direction in radians."""

    x: float
    y: float
    angle: float
    dx: float = 0.0
    dy: float = 0.0
    health: int = START_HEALTH
    dead: bool = False

    @classmethod
    def spawn(cls, row: int, col: int, orientation: str) -> Player:
        """Place a player in the centre of a map cell, facing a compass direction."""
        try:
            angle = _ORIENTATION_ANGLES[orientation]
        except KeyError:
            raise ValueError(f"unknown orientation {orientation!r}") from None
        player = cls(x=col * TILE + TILE / 2, y=row * TILE + TILE / 2, angle=angle)
        player._set_speed(WALK_SPEED)
        return player

    def _set_speed(self, speed: float) -> None:
        self.dx = math.cos(self.angle) * speed
        self.dy = math.sin(self.angle) * speed

    def _blocked(self, grid: Sequence[str]) -> bool:
        return _is_wall(grid, self.x, self.y)

    def turn(self, delta: float) -> None:
        """Rotate by ``delta`` radians, wrapping the angle into one turn."""
        self.angle += delta
        if delta < 0 and self.angle < 0:
            self.angle += 2 * PI
        elif delta > 0 and self.angle > 2 * PI:
            self.angle -= 2 * PI
        self._set_speed(WALK_SPEED)

    def move_forward(self, grid: Sequence[str], sprint: bool = False) -> None:
        """Step along the view direction, undoing the step if it enters a wall."""
        self._set_speed(SPRINT_SPEED if sprint else WALK_SPEED)
        self.y += self.dy
        self.x += self.dx
        if self._blocked(grid):
            self.y -= self.dy
            self.x -= self.dx

    def move_backward(self, grid: Sequence[str], sprint: bool = False) -> None:
        """Step against the view direction, undoing the step if it enters a wall."""
        self._set_speed(SPRINT_SPEED if sprint else WALK_SPEED)
        self.y -= self.dy
        self.x -= self.dx
        if self._blocked(grid):
            self.y += self.dy
            self.x += self.dx

    def strafe_left(self, grid: Sequence[str]) -> None:
        """Side-step to the left, undoing the step if it enters a wall."""
        self.x += math.cos(self.angle - PI / 2) * STRAFE_SPEED
        self.y += math.sin(self.angle - PI / 2) * STRAFE_SPEED
        if self._blocked(grid):
            self.x += math.cos(self.angle + PI / 2) * STRAFE_SPEED
            self.y += math.sin(self.angle + PI / 2) * STRAFE_SPEED

    def strafe_right(self, grid: Sequence[str]) -> None:
        """Side-step to the right, undoing the step if it enters a wall."""
        self.x += math.cos(self.angle + PI / 2) * STRAFE_SPEED
        self.y += math.sin(self.angle + PI / 2) * STRAFE_SPEED
        if self._blocked(grid):
            self.x -= math.cos(self.angle + PI / 2) * STRAFE_SPEED
            self.y -= math.sin(self.angle + PI / 2) * STRAFE_SPEED

    def update(self, keys: KeyState, grid: Sequence[str]) -> None:
        """Apply one frame of keyboard movement and turning."""
        if keys.sprint:
            self._set_speed(SPRINT_SPEED)
        if keys.forward:
            self.move_forward(grid, keys.sprint)
        if keys.backward:
            self.move_backward(grid, keys.sprint)
        if keys.left:
            self.strafe_left(grid)
        if keys.right:
            self.strafe_right(grid)
        if keys.turn_left:
            self.turn(-KEY_TURN)
        if keys.turn_right:
            self.turn(KEY_TURN)

    def look(self, x: float, previous_x: float) -> None:
        """Turn according to the horizontal mouse motion since the last frame."""
        if x > previous_x:
            self.turn(MOUSE_TURN)
        elif x < previous_x:
            self.turn(-MOUSE_TURN)