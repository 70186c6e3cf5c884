"""Map blocks, subtile graphics and isometric picking on the map."""

from __future__ import annotations

import struct
from dataclasses import dataclass

from .geometry import SCALE, TILE_HEIGHT, screen_to_map

NUM_TILES = 256
SUBTILES_PER_TILE = 6
SUBTILE_TABLE_SIZE = NUM_TILES * SUBTILES_PER_TILE * 4
SUBTILE_WIDTH = 32
SUBTILE_HEIGHT = 16
SUBTILE_ROW_BYTES = 20
SUBTILE_BYTES = SUBTILE_HEIGHT * SUBTILE_ROW_BYTES
TRANSPARENT = 255
SOLID_TILE = 5
"""Tile values below this are treated as empty when picking."""

_MAP_HEADER = struct.Struct("<3I")


def parse_subtile_table(data: bytes) -> list[int]:
    """Turn the block file's table of byte offsets into subtile numbers.

    The table holds six little-endian offsets for each of the 256 tiles;
    offsets before the subtile data map to subtile 0.
    """
    if len(data) < SUBTILE_TABLE_SIZE:
        raise ValueError(
            f"subtile table needs {SUBTILE_TABLE_SIZE} bytes, got {len(data)}"
        )
    return [
        0 if offset < SUBTILE_TABLE_SIZE else (offset - SUBTILE_TABLE_SIZE) // SUBTILE_BYTES
        for (offset,) in struct.iter_unpack("<i", bytes(data[:SUBTILE_TABLE_SIZE]))
    ]


def decode_subtiles(data: bytes, count: int) -> bytes:
    """Decode ``count`` planar subtiles into one 32-pixel wide, 8-bit image.

    Each 16-row subtile row is a 32-bit transparency mask followed by four
    32-bit bit planes, leftmost pixel in the most significant bit of the
    first byte. Subtiles are stacked top to bottom; 255 is transparent.
    """
    if count < 0:
        raise ValueError("subtile count must not be negative")
    if len(data) < count * SUBTILE_BYTES:
        raise ValueError("subtile data truncated")
    out = bytearray(count * SUBTILE_WIDTH * SUBTILE_HEIGHT)
    for row_index in range(count * SUBTILE_HEIGHT):
        start = row_index * SUBTILE_ROW_BYTES
        row = data[start:start + SUBTILE_ROW_BYTES]
        mask = row[0:4]
        planes = [row[4 + 4 * p:8 + 4 * p] for p in range(4)]
        base = row_index * SUBTILE_WIDTH
        for x in range(SUBTILE_WIDTH):
            byte, bit = divmod(x, 8)
            flag = 0x80 >> bit
            if mask[byte] & flag:
                out[base + x] = TRANSPARENT
            else:
                out[base + x] = sum(
                    1 << p for p, plane in enumerate(planes) if plane[byte] & flag
                )
    return bytes(out)


@dataclass(frozen=True)
class GameMap:
    """A block map: per (x, y) column an offset to a stack of tile bytes."""

    size_x: int
    size_y: int
    size_z: int
    columns: tuple[int, ...]
    body: bytes

    @classmethod
    def from_bytes(cls, data: bytes) -> "GameMap":
        """Parse a map file, checking that every column lies inside the data."""
        data = bytes(data)
        if len(data) < _MAP_HEADER.size:
            raise ValueError("map header truncated")
        size_x, size_y, size_z = _MAP_HEADER.unpack_from(data)
        body = data[_MAP_HEADER.size:]
        cells = size_x * size_y
        if len(body) < 4 * cells:
            raise ValueError("map column table truncated")
        if size_z == 0:
            raise ValueError("map has no levels")
        columns = struct.unpack_from(f"<{cells}I", body)
        top = size_z - 1
        for number, offset in enumerate(columns):
            if offset + top >= len(body):
                y, x = divmod(number, size_x)
                raise ValueError(f"{x},{y},{top} references beyond array")
        return cls(size_x, size_y, size_z, tuple(columns), body)

    def raw_tile(self, x: int, y: int, z: int) -> int | None:
        """Tile value at tile coordinates, or None outside the map."""
        if not (0 <= x < self.size_x and 0 <= y < self.size_y and 0 <= z < self.size_z):
            return None
        return self.body[self.columns[y * self.size_x + x] + z]

    def tile_ref(self, x: int, y: int, z: int) -> int | None:
        """Tile value at map-unit coordinates, or None outside the map."""
        if x < 0 or y < 0 or z < 0:
            return None
        return self.raw_tile(x // SCALE, y // SCALE, z // SCALE)

    def tile_at(self, x: int, y: int, z: int = 0) -> int:
        """Tile value at map-unit coordinates; -1 for empty or outside."""
        value = self.tile_ref(x, y, z)
        return value if value else -1


class Viewport:
    """Relates screen positions to map positions for a given map origin."""

    def __init__(self, origin_x: int = 0, origin_y: int = 0) -> None:
        self.origin_x = origin_x
        self.origin_y = origin_y

    def screen_to_map(self, x: float, y: float) -> tuple[float, float]:
        """Map position on the ground plane under a screen position."""
        return (
            (x + 2 * y) / 2 + self.origin_x,
            (-x + 2 * y) / 2 + self.origin_y,
        )

    def map_to_screen(self, x: float, y: float, z: float = 0) -> tuple[float, float]:
        """Screen position of a map position."""
        a = x - self.origin_x
        b = y - self.origin_y
        return float(a - b), (a + b - z) / 2

    def point_at(self, game_map: GameMap, x: int, y: int) -> tuple[int, int, int, int] | None:
        """Find the topmost solid tile under a screen position.

        Returns ``(map_x, map_y, level, tile)`` for the first tile from the
        top with a value of at least 5, else for the lowest level probed; None
        when that probe falls outside the map.
        """
        origin_x, origin_y = int(self.origin_x), int(self.origin_y)
        result = None
        for z in range(game_map.size_z - 1, -1, -1):
            mx, my = screen_to_map(x, y + z * TILE_HEIGHT // 2)
            mx += origin_x
            my += origin_y
            value = game_map.tile_ref(mx, my, z * SCALE)
            result = None if value is None else (mx, my, z, value)
            if value is not None and value >= SOLID_TILE:
                break
        return result