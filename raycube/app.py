"""Texture loading and the windowed main loop."""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

import pygame

from raycube.config import MapError, SceneConfig, check_arguments
from raycube.game import Game
from raycube.player import KeyState
from raycube.raycast import TextureKind
from raycube.render import WINDOW_HEIGHT, WINDOW_WIDTH, Frame, Texture
from raycube.scene import load_scene

WINDOW_TITLE = "CUB3D"
FLAME_FRAMES = 21
FRAMES_PER_SECOND = 60

_to_bytes = getattr(pygame.image, "tobytes", None) or pygame.image.tostring

_ASSETS = {
    "door": "door.png",
    "fire": "fire.png",
    "intro": "intro.png",
    "heal_empty": "heal_0.png",
    "heal_full": "heal_1.png",
    "weapon": "weapon.png",
    "crosshair": "crosshair.png",
    "gameover": "gameover.png",
    "black_hole": "blackhole.png",
}


@dataclass(frozen=True)
class TextureSet:
    """Every image the game draws."""

    north: Texture
    south: Texture
    west: Texture
    east: Texture
    door: Texture
    fire: Texture
    black_hole: Texture
    intro: Texture
    heal_empty: Texture
    heal_full: Texture
    crosshair: Texture
    weapon: Texture
    gameover: Texture
    flames: tuple[Texture, ...]

    def __post_init__(self) -> None:
        if len(self.flames) != FLAME_FRAMES:
            raise ValueError(f"expected {FLAME_FRAMES} flame images")

    def wall(self, kind: TextureKind) -> Texture:
        """The texture used for a kind of wall slice."""
        return getattr(self, kind.value)


def load_texture(path: str | os.PathLike[str]) -> Texture:
    """Load an image file as a texture."""
    try:
        surface = pygame.image.load(os.fspath(path))
    except (OSError, pygame.error) as exc:
        raise MapError(f"Couldn't load texture {os.fspath(path)}") from exc
    width, height = surface.get_size()
    return Texture.from_rgba(width, height, _to_bytes(surface, "RGBA"))


def load_textures(
    config: SceneConfig, root: str | os.PathLike[str] = "."
) -> TextureSet:
    """Load the wall textures named in the scene and the game's own images."""
    textures = Path(root) / "textures"
    walls = {
        name: load_texture(getattr(config, name))
        for name in ("north", "south", "west", "east")
    }
    assets = {name: load_texture(textures / file) for name, file in _ASSETS.items()}
    flames = tuple(
        load_texture(textures / "fire" / f"fl{number}.png")
        for number in range(1, FLAME_FRAMES + 1)
    )
    return TextureSet(**walls, **assets, flames=flames)


def _read_keys(pressed: Sequence[bool]) -> KeyState:
    return KeyState(
        forward=bool(pressed[pygame.K_w]),
        backward=bool(pressed[pygame.K_s]),
        left=bool(pressed[pygame.K_a]),
        right=bool(pressed[pygame.K_d]),
        turn_left=bool(pressed[pygame.K_LEFT]),
        turn_right=bool(pressed[pygame.K_RIGHT]),
        sprint=bool(pressed[pygame.K_LSHIFT]),
        start=bool(pressed[pygame.K_SPACE]),
        escape=bool(pressed[pygame.K_ESCAPE]),
    )


def _present(screen: pygame.Surface, frame: Frame) -> None:
    data = frame.pixels.astype(">u4").tobytes()
    surface = pygame.image.frombuffer(data, (frame.width, frame.height), "RGBA")
    screen.fill((0, 0, 0))
    screen.blit(surface, (0, 0))
    pygame.display.flip()


def _run(screen: pygame.Surface, game: Game, textures: TextureSet) -> int:
    clock = pygame.time.Clock()
    frame = Frame(WINDOW_WIDTH, WINDOW_HEIGHT)
    pygame.mouse.set_visible(False)
    center = (WINDOW_WIDTH // 2, game.scene.width // 2)
    previous_x = 0
    while True:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return 0
            if event.type == pygame.MOUSEMOTION:
                game.player.look(event.pos[0], previous_x)
                pygame.mouse.set_pos(center)
                previous_x = center[0]
        game.render(frame, textures)
        _present(screen, frame)
        game.step(_read_keys(pygame.key.get_pressed()))
        if game.closed:
            return 1
        clock.tick(FRAMES_PER_SECOND)


def main(argv: Sequence[str] | None = None) -> int:
    """Validate the scene file named on the command line and play it."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        scene = load_scene(check_arguments(args))
    except MapError as exc:
        print(f"Error\n{exc}")
        return 1
    pygame.init()
    try:
        screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
        pygame.display.set_caption(WINDOW_TITLE)
        textures = load_textures(scene.config)
        return _run(screen, Game(scene), textures)
    except (MapError, pygame.error) as exc:
        print(f"Error\n{exc}")
        return 1
    finally:
        pygame.quit()