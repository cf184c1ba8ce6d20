import math

import pytest

from raycube.player import (
    KEY_TURN,
    MOUSE_TURN,
    PI,
    SPRINT_SPEED,
    START_HEALTH,
    STRAFE_SPEED,
    TILE,
    WALK_SPEED,
    KeyState,
    Player,
)

GRID = (
    "11111111\n",
    "10000001\n",
    "10000001\n",
    "10000001\n",
    "11111111\n",
)


def test_spawn_centres_player_in_cell():
    player = Player.spawn(2, 3, "E")
    assert int(player.x) // TILE == 3
    assert int(player.y) // TILE == 2
    assert player.x % TILE == TILE / 2
    assert player.y % TILE == TILE / 2


@pytest.mark.parametrize(
    "orientation, angle",
    [("N", 3 * PI / 2), ("S", PI / 2), ("E", 0.0), ("W", PI)],
)
def test_spawn_angle(orientation, angle):
    assert Player.spawn(2, 3, orientation).angle == pytest.approx(angle)


def test_spawn_defaults():
    player = Player.spawn(2, 3, "S")
    assert math.hypot(player.dx, player.dy) == pytest.approx(WALK_SPEED)
    assert player.health == START_HEALTH
    assert player.dead is False


def test_spawn_rejects_unknown_orientation():
    with pytest.raises(ValueError):
        Player.spawn(2, 3, "Q")


def test_forward_moves_walk_speed():
    player = Player.spawn(2, 3, "E")
    start = (player.x, player.y)
    player.move_forward(GRID)
    assert math.dist(start, (player.x, player.y)) == pytest.approx(WALK_SPEED)
    assert player.x > start[0]


def test_forward_then_backward_returns():
    player = Player.spawn(2, 3, "N")
    start = (player.x, player.y)
    player.move_forward(GRID)
    player.move_backward(GRID)
    assert (player.x, player.y) == pytest.approx(start)


def test_sprint_moves_sprint_speed():
    player = Player.spawn(2, 3, "W")
    start = (player.x, player.y)
    player.move_forward(GRID, sprint=True)
    assert math.dist(start, (player.x, player.y)) == pytest.approx(SPRINT_SPEED)


def test_forward_into_wall_is_undone():
    player = Player(x=96, y=66, angle=3 * PI / 2)
    player.move_forward(GRID)
    assert (player.x, player.y) == pytest.approx((96, 66))


def test_backward_into_wall_is_undone():
    player = Player(x=96, y=66, angle=PI / 2)
    player.move_backward(GRID)
    assert (player.x, player.y) == pytest.approx((96, 66))


def test_strafe_left_then_right_returns():
    player = Player.spawn(2, 3, "E")
    start = (player.x, player.y)
    player.strafe_left(GRID)
    assert math.dist(start, (player.x, player.y)) == pytest.approx(STRAFE_SPEED)
    player.strafe_right(GRID)
    assert (player.x, player.y) == pytest.approx(start)


def test_strafe_into_wall_is_undone():
    player = Player(x=160, y=68, angle=0.0)
    player.strafe_left(GRID)
    assert (player.x, player.y) == pytest.approx((160, 68))


def test_turn_left_wraps_below_zero():
    player = Player(x=160, y=160, angle=0.01)
    player.turn(-KEY_TURN)
    assert player.angle == pytest.approx(0.01 - KEY_TURN + 2 * PI)
    assert 0 <= player.angle <= 2 * PI


def test_turn_right_wraps_above_full_turn():
    player = Player(x=160, y=160, angle=2 * PI - 0.01)
    player.turn(KEY_TURN)
    assert player.angle == pytest.approx(KEY_TURN - 0.01)
    assert math.hypot(player.dx, player.dy) == pytest.approx(WALK_SPEED)


def test_update_sprint_forward():
    player = Player.spawn(2, 3, "E")
    start = (player.x, player.y)
    player.update(KeyState(forward=True, sprint=True), GRID)
    assert math.dist(start, (player.x, player.y)) == pytest.approx(SPRINT_SPEED)
    assert math.hypot(player.dx, player.dy) == pytest.approx(SPRINT_SPEED)


def test_update_turns_right():
    player = Player.spawn(2, 3, "S")
    before = player.angle
    player.update(KeyState(turn_right=True), GRID)
    assert player.angle == pytest.approx(before + KEY_TURN)


def test_update_without_keys_keeps_position():
    player = Player.spawn(2, 3, "S")
    start = (player.x, player.y, player.angle)
    player.update(KeyState(), GRID)
    assert (player.x, player.y, player.angle) == start


@pytest.mark.parametrize(
    "x, previous_x, delta",
    [(800, 720, MOUSE_TURN), (600, 720, -MOUSE_TURN), (720, 720, 0.0)],
)
def test_look(x, previous_x, delta):
    player = Player.spawn(2, 3, "S")
    before = player.angle
    player.look(x, previous_x)
    assert player.angle == pytest.approx(before + delta)