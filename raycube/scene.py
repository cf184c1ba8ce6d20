"""Loading and validation of a scene file: header, map grid and start position."""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path

from raycube.config import MapError, SceneConfig, read_header

MAX_MAP_LINES = 199
PLAYER_CHARS = frozenset("NESW")

_BLANK_CHARS = frozenset(" \t\n")
_FLOOR_CHARS = frozenset("023")
_OPEN_CHARS = frozenset(" \n")
# The start column is compared against these character codes as plain numbers.
_BORDER_CODES = frozenset({ord(" "), 0, ord("\n")})


@dataclass(frozen=True)
class Scene:
    """A validated scene: header settings, map rows and the player's start."""

    config: SceneConfig
    grid: tuple[str, ...]
    width: int
    start_row: int
    start_col: int
    orientation: str

    @property
    def height(self) -> int:
        """Number of map rows."""
        return len(self.grid)


def is_only_spaces(line: str) -> bool:
    """True when a line holds nothing but spaces, tabs and newlines."""
    return line.startswith("\n") or all(ch in _BLANK_CHARS for ch in line)


def _split_lines(text: str) -> Iterator[str]:
    parts = text.split("\n")
    for part in parts[:-1]:
        yield part + "\n"
    if parts[-1]:
        yield parts[-1]


def read_map_lines(lines: Iterable[str]) -> list[str]:
    """Collect the map rows, dropping blank lines before and after them."""
    remaining = iter(lines)
    for first in remaining:
        if not is_only_spaces(first):
            break
    else:
        raise MapError("Map is missing")
    rows = [first, *remaining]
    while rows and is_only_spaces(rows[-1]):
        rows.pop()
    if len(rows) > MAX_MAP_LINES:
        raise MapError("Map is too large")
    return rows


def find_map_width(grid: Sequence[str]) -> int:
    """Length of the longest row, ignoring trailing spaces and newlines."""
    return max((len(row.rstrip(" \n")) for row in grid), default=0)


def find_start(grid: Sequence[str]) -> tuple[int, int, str]:
    """Locate the single player character and return (row, col, orientation)."""
    found = []
    for row_index, row in enumerate(grid):
        for col_index, ch in enumerate(row):
            if ch.isascii() and ch.isalpha():
                if ch not in PLAYER_CHARS:
                    raise MapError("Wrong player character!")
                found.append((row_index, col_index, ch))
    if len(found) != 1:
        raise MapError("Insufficient characters")
    return found[0]


def check_border(row: int, col: int, height: int) -> None:
    """Reject a start position that sits on the map's edge."""
    if row == 0 or col == 0:
        raise MapError("No closed map!")
    if col + 1 in _BORDER_CODES:
        raise MapError("No closed map!")
    if row + 1 >= height:
        raise MapError("No closed map!")


def check_walls(
    grid: Sequence[str], row: int, col: int, width: int
) -> frozenset[tuple[int, int]]:
    """Flood-fill from the start and check the walkable area is enclosed.

    Returns the set of cells reached from the start.
    """
    height = len(grid)
    reached: set[tuple[int, int]] = set()
    pending = [(row, col)]
    while pending:
        r, c = pending.pop()
        if r < 0 or r >= height or c < 0 or c >= width + 1:
            continue
        if (r, c) in reached:
            continue
        line = grid[r]
        ch = line[c] if c < len(line) else " "
        if ch == "1":
            continue
        if ch in _FLOOR_CHARS and (r == 0 or c == 0 or r == height - 1):
            raise MapError("No closed map!")
        if ch in _OPEN_CHARS:
            raise MapError("No closed map!")
        reached.add((r, c))
        pending.extend(((r - 1, c), (r + 1, c), (r, c - 1), (r, c + 1)))
    return frozenset(reached)


def parse_scene(text: str) -> Scene:
    """Parse and validate the full contents of a scene file."""
    config, rest = read_header(_split_lines(text))
    rows = read_map_lines(rest)
    width = find_map_width(rows)
    row, col, orientation = find_start(rows)
    check_border(row, col, len(rows))
    check_walls(rows, row, col, width)
    return Scene(
        config=config,
        grid=tuple(rows),
        width=width,
        start_row=row,
        start_col=col,
        orientation=orientation,
    )


def load_scene(path: str | os.PathLike[str]) -> Scene:
    """Read a scene file from disk and validate it."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise MapError("Couldn't load the map!") from exc
    return parse_scene(text)