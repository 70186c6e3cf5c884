"""Bit tricks and isometric map/screen coordinate helpers."""

from __future__ import annotations

SCALE = 32
"""Units per tile in map space."""

TILE_WIDTH = 64
TILE_HEIGHT = 32


def _cdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


def _cmod(a: int, b: int) -> int:
    """Remainder carrying the sign of the dividend."""
    return a - _cdiv(a, b) * b


def _reverse(x: int, width: int) -> int:
    value = x & ((1 << width) - 1)
    result = 0
    for _ in range(width):
        result = (result << 1) | (value & 1)
        value >>= 1
    return result


def reverse_bits8(x: int) -> int:
    """Reverse the order of the lowest 8 bits."""
    return _reverse(x, 8)


def reverse_bits16(x: int) -> int:
    """Reverse the order of the lowest 16 bits."""
    return _reverse(x, 16)


def reverse_bits32(x: int) -> int:
    """Reverse the order of the lowest 32 bits."""
    return _reverse(x, 32)


def ceil8(x: int) -> int:
    """Round ``x`` up to the next multiple of eight."""
    return x if not x & 7 else (x & ~7) + 8


def map_to_screen(x: int, y: int, z: int = 0) -> tuple[int, int]:
    """Project map coordinates onto the isometric screen."""
    return _cdiv(2 * x - 2 * y, 2), _cdiv(x + y - z, 2)


def screen_to_map(x: int, y: int) -> tuple[int, int]:
    """Map screen coordinates back onto the ground plane (z = 0)."""
    return _cdiv(x + 2 * y, 2), _cdiv(-x + 2 * y, 2)


def tile(x: int) -> int:
    """Round a map coordinate down to the start of its tile."""
    return x & ~(SCALE - 1)


def sub(x: int) -> int:
    """Position of a map coordinate within its tile."""
    return _cmod(x, SCALE)


def glom(x: int, y: int, z: int) -> int:
    """Pack tile coordinates into a single cell key."""
    return (z << 16) + (y << 8) + x