"""Command-line checks and parsing of the scene header (textures and colours)."""

from __future__ import annotations

import itertools
import string
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

HEADER_ENTRIES = 6

_C_WHITESPACE = " \t\n\v\f\r"
_TEXTURE_KEYS = (("SO", "south"), ("WE", "west"), ("EA", "east"), ("NO", "north"))


class MapError(Exception):
    """Raised when the arguments or the scene description are invalid."""


@dataclass
class SceneConfig:
    """Texture paths and RGB colours declared in a scene header."""

    north: str | None = None
    south: str | None = None
    west: str | None = None
    east: str | None = None
    ceiling: tuple[int, int, int] | None = None
    floor: tuple[int, int, int] | None = None

    @property
    def is_complete(self) -> bool:
        """True when every texture and both colours are set."""
        return None not in (
            self.north,
            self.south,
            self.west,
            self.east,
            self.ceiling,
            self.floor,
        )


def _is_alpha(ch: str) -> bool:
    return ch in string.ascii_letters


def parse_int(text: str) -> int:
    """Read a leading decimal integer, ignoring whitespace and trailing text."""
    rest = text.lstrip(_C_WHITESPACE)
    sign = 1
    if rest[:1] in ("-", "+"):
        if rest[0] == "-":
            sign = -1
        rest = rest[1:]
    digits = "".join(itertools.takewhile(lambda ch: "0" <= ch <= "9", rest))
    return sign * int(digits) if digits else 0


def split_fields(text: str, sep: str) -> list[str]:
    """Split on a separator, dropping empty fields."""
    if not sep:
        return [text] if text else []
    return [field for field in text.split(sep) if field]


def validate_rgb_count(parts: Sequence[str]) -> None:
    """Check that a colour has three components; letters count as one extra."""
    has_letters = any(_is_alpha(ch) for part in parts for ch in part)
    if len(parts) + int(has_letters) != 3:
        raise MapError("Invalid RGB numbers")


def parse_rgb(line: str) -> tuple[int, int, int]:
    """Parse a colour line such as ``C 220,100,0`` into its components."""
    skip = sum(
        1 for _ in itertools.takewhile(lambda ch: ch == " " or _is_alpha(ch), line)
    )
    parts = split_fields(line[skip:], ",")
    validate_rgb_count(parts)
    values = []
    for part in parts:
        value = parse_int(part)
        if not 0 <= value <= 255:
            raise MapError("Invalid RGB numbers")
        values.append(value)
    values.extend([0] * (3 - len(values)))
    return values[0], values[1], values[2]


def check_arguments(argv: Sequence[str]) -> str:
    """Return the map path from the arguments that follow the program name."""
    if len(argv) != 1:
        raise MapError("Not the right amount of arguments")
    path = argv[0]
    if not path.endswith(".cub"):
        raise MapError("Not a map")
    return path


def check_unique_textures(config: SceneConfig) -> None:
    """Reject texture paths where one is a prefix of another."""
    paths = (config.south, config.north, config.east, config.west)
    if any(path is None for path in paths):
        raise MapError("Not enough variables!")
    for first, second in itertools.combinations(paths, 2):
        if second.startswith(first):
            raise MapError("Not allowed to use the same texture!")


def _assign_texture(config: SceneConfig, line: str, key: str, attr: str) -> int:
    position = line.find(key)
    if position < 0:
        return 0
    value = line[position + len(key):].lstrip(" \t")
    if getattr(config, attr) is not None:
        raise MapError("Wrong textures!")
    setattr(config, attr, value.removesuffix("\n"))
    return 1


def _process_line(config: SceneConfig, line: str) -> int:
    if not any(_is_alpha(ch) for ch in line):
        if line.strip(" \n\t"):
            raise MapError("Not enough variables!")
        return 0
    found = sum(_assign_texture(config, line, key, attr) for key, attr in _TEXTURE_KEYS)
    if "C" in line:
        config.ceiling = parse_rgb(line)
        found += 1
    if "F" in line:
        config.floor = parse_rgb(line)
        found += 1
    return found


def read_header(lines: Iterable[str]) -> tuple[SceneConfig, list[str]]:
    """Read header entries until six are found.

    Returns the configuration and the lines that follow the header.
    """
    config = SceneConfig()
    remaining = iter(lines)
    found = 0
    for line in remaining:
        found += _process_line(config, line)
        if found == HEADER_ENTRIES:
            break
    if not config.is_complete:
        raise MapError("Not enough variables!")
    check_unique_textures(config)
    return config, list(remaining)