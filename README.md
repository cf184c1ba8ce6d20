# raycube

A first-person raycasting maze game. Each level is a `.cub` scene file. The
file sets the wall textures, the floor and ceiling colours, and the map.

## Installing

```
pip install .
```

## Playing

```
raycube path/to/level.cub
```

The command takes exactly one argument. The file name must end in `.cub`.

These paths are resolved relative to the current directory:

- the texture paths in the scene file;
- the game's own images under `./textures/`:
  - `door.png`, `fire.png`, `intro.png`, `heal_0.png`, `heal_1.png`, `weapon.png`, `crosshair.png`, `gameover.png` and `blackhole.png`;
  - the fire animation `fire/fl1.png` to `fire/fl21.png`.

Controls:

- `W` / `S`: move forward or backward. Hold left `Shift` to sprint.
- `A` / `D`: strafe left or right.
- Left / Right arrows or the mouse: turn.
- `Space`: leave the intro screen.
- `Escape`: quit.

Standing on a fire tile (`3`) costs one health point per frame. The game is over when health drops below 30. A health bar in the top-right corner shows one full slot for each 30 points.

If the arguments, the scene file or an image are bad, the command prints `Error` and a line that names the problem. It then exits with status 1.

## Scene files

A scene file starts with six settings, in any order:

```
NO ./textures/north.png
SO ./textures/south.png
WE ./textures/west.png
EA ./textures/east.png
F 220,100,0
C 225,30,0
```

Each setting is recognised by its key appearing anywhere on the line. An upper-case `C` or `F` anywhere on a line also makes that line a colour setting, so keep those letters out of texture paths.

The four texture paths must differ: no path may be the start of another. A colour is three numbers from 0 to 255.

The map comes after the settings. It uses:

- `1` for walls;
- `0` for floor;
- `2` for doors;
- `3` for fire;
- exactly one of `N`, `S`, `E` or `W` for the player's start position and facing.

All of the map reachable from the start must be closed in by walls:

```
111111
100101
1020N1
100031
111111
```

## Using the library

The parts of the game also work on their own, without a window.

**Reading a scene and casting rays.** This example reads and checks a scene, then casts rays from the start position:

```python
from raycube.scene import load_scene
from raycube.player import Player
from raycube.raycast import cast_rays

scene = load_scene("level.cub")
player = Player.spawn(scene.start_row, scene.start_col, scene.orientation)
slices = cast_rays(scene.grid, player, 1440)
```

Each `WallSlice` gives the corrected distance, the hit point, whether the wall is vertical, and a `TextureKind`.

**Errors.** `raycube.config.parse_rgb`, `raycube.config.read_header`, `raycube.scene.parse_scene` and `raycube.scene.load_scene` raise `raycube.config.MapError` when they find a problem.

**Drawing.** `raycube.render` draws into a `Frame`, a numpy array of packed RGBA pixels. Its functions include:

- `clean_window`
- `draw_wall_slice`
- `draw_minimap`
- `draw_health`

**The game loop.** `raycube.game.Game` holds a scene and a player. Each frame uses two methods:

- `step(keys)` applies a `KeyState`.
- `render(frame, textures)` draws the current screen from a `raycube.app.TextureSet`.

## Running the tests

```
pip install .[test]
pytest
```