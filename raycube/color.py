"""Packing of 32-bit pixel colours."""

from __future__ import annotations

import enum

_MASK32 = 0xFFFFFFFF


class Channel(enum.IntEnum):
    """Byte index of each channel inside a packed screen colour in memory."""

    ALPHA = 0
    RED = 1
    GREEN = 2
    BLUE = 3


def pixel_color(r: int, g: int, b: int, a: int) -> int:
    """Pack channels into an RGBA value with red in the most significant byte."""
    return ((r << 24) | (g << 16) | (b << 8) | a) & _MASK32


def texture_to_pixel(texture_color: int) -> int:
    """Convert a texel read as a little-endian word into an RGBA pixel value.

    The texel's four bytes land in reverse order, so that a texel stored as
    the bytes R, G, B, A becomes ``pixel_color(R, G, B, A)``.
    """
    channels = {
        Channel.ALPHA: (texture_color >> 24) & 0xFF,
        Channel.RED: (texture_color >> 16) & 0xFF,
        Channel.GREEN: (texture_color >> 8) & 0xFF,
        Channel.BLUE: texture_color & 0xFF,
    }
    return sum(value << (8 * channel) for channel, value in channels.items())