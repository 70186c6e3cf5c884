"""Loading of 256-colour game palettes stored as 6-bit RGB triplets."""

from __future__ import annotations

import os
from dataclasses import dataclass

NUM_COLORS = 256
PALETTE_SIZE = NUM_COLORS * 3

PALETTE_NAMES = (
    "hpal01.dat",
    "hpal02.dat",
    "hpal03.dat",
    "hpal04.dat",
    "hpal05.dat",
    "hpalette.dat",
    "mselect.pal",
)


@dataclass(frozen=True)
class Color:
    """An 8-bit RGB colour."""

    r: int
    g: int
    b: int


def palette_from_6bit(data: bytes) -> list[Color]:
    """Build a palette by shifting each 6-bit component left by two, kept to 8 bits.

    Missing entries in short data are black.
    """
    raw = bytes(data[:PALETTE_SIZE]).ljust(PALETTE_SIZE, b"\0")
    return [
        Color((r << 2) & 0xFF, (g << 2) & 0xFF, (b << 2) & 0xFF)
        for r, g, b in zip(raw[0::3], raw[1::3], raw[2::3])
    ]


def _expand(value: int) -> int:
    return ((value << 2) | (value >> 4)) & 0xFF


def palette_from_6bit_exact(data: bytes) -> list[Color]:
    """Build a palette scaling 6-bit components onto the full 0..255 range."""
    if len(data) != PALETTE_SIZE:
        raise ValueError(f"palette data must be {PALETTE_SIZE} bytes, got {len(data)}")
    raw = bytes(data)
    return [
        Color(_expand(r), _expand(g), _expand(b))
        for r, g, b in zip(raw[0::3], raw[1::3], raw[2::3])
    ]


class PaletteStore:
    """The known game palettes, read from a data directory on first use."""

    def __init__(self, root: str = "data") -> None:
        self.root = root
        self._cache: dict[str, list[Color]] = {}

    def get(self, name: str) -> list[Color]:
        """Return the named palette; a missing file gives an all-black palette."""
        if name not in PALETTE_NAMES:
            raise KeyError(name)
        if name not in self._cache:
            try:
                with open(os.path.join(self.root, name), "rb") as handle:
                    data = handle.read()
            except OSError:
                data = b""
            self._cache[name] = palette_from_6bit(data)
        return self._cache[name]