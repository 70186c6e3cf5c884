"""Sprite images and the fragment-based animation tables built from them."""

from __future__ import annotations

import logging
import struct
from dataclasses import dataclass

from .geometry import ceil8

log = logging.getLogger(__name__)

TRANSPARENT = 255

_ENTRY = struct.Struct("<IBB")
_FRAGMENT = struct.Struct("<HhhHH")
_FRAME = struct.Struct("<HBBHH")
_INDEX = struct.Struct("<H")

_PLANAR_BLOCK = 5


@dataclass(frozen=True)
class SpriteEntry:
    """Position and size of one sprite in a sprite data file."""

    offset: int
    width: int
    height: int


@dataclass(frozen=True)
class Sprite:
    """An 8-bit paletted image; value 255 is transparent."""

    width: int
    height: int
    pixels: bytes

    def mirrored(self) -> "Sprite":
        """Return the image flipped left to right."""
        rows = (
            self.pixels[row:row + self.width][::-1]
            for row in range(0, self.width * self.height, self.width)
        )
        return Sprite(self.width, self.height, b"".join(rows))


def _records(data: bytes, layout: struct.Struct) -> list[tuple]:
    count = len(data) // layout.size
    return list(layout.iter_unpack(bytes(data[:count * layout.size])))


def parse_sprite_table(data: bytes) -> list[SpriteEntry]:
    """Parse a sprite table of 6-byte (offset, width, height) records."""
    return [SpriteEntry(*record) for record in _records(data, _ENTRY)]


def decode_planar_block(block: bytes) -> bytes:
    """Decode 8 pixels from a transparency mask byte and four bit planes."""
    if len(block) < _PLANAR_BLOCK:
        raise ValueError("planar block needs 5 bytes")
    mask, *planes = block[:_PLANAR_BLOCK]
    pixels = bytearray()
    for i in range(7, -1, -1):
        bit = 1 << i
        value = 0xFF if mask & bit else 0
        for shift, plane in enumerate(planes):
            if plane & bit:
                value |= 1 << shift
        pixels.append(value)
    return bytes(pixels)


def decode_planar_sprite(entry: SpriteEntry, data: bytes) -> Sprite | None:
    """Decode a sprite stored as planar 8-pixel blocks; None if it is empty."""
    width, height = ceil8(entry.width), entry.height
    if not width or not height:
        return None
    blocks = width // 8 * height
    pos = entry.offset
    if pos + blocks * _PLANAR_BLOCK > len(data):
        raise ValueError("sprite data truncated")
    pixels = b"".join(
        decode_planar_block(data[start:start + _PLANAR_BLOCK])
        for start in range(pos, pos + blocks * _PLANAR_BLOCK, _PLANAR_BLOCK)
    )
    return Sprite(width, height, pixels)


def decode_rle_sprite(entry: SpriteEntry, data: bytes) -> Sprite | None:
    """Decode a run-length coded sprite; None if it is empty.

    Each row is a list of signed counts ended by zero: a positive count is
    followed by that many pixels, a negative one skips transparent pixels.
    """
    width, height = ceil8(entry.width), entry.height
    if not width or not height:
        return None
    buffer = bytearray([TRANSPARENT]) * (width * height)
    pos = entry.offset

    def read_count() -> int:
        nonlocal pos
        if pos >= len(data):
            raise ValueError("sprite data truncated")
        value = data[pos]
        pos += 1
        return value - 256 if value > 127 else value

    for y in range(height):
        x = 0
        run = read_count()
        while run and x < entry.width:
            start = y * width + x
            if run > 0:
                chunk = data[pos:pos + run]
                if len(chunk) < run:
                    raise ValueError("sprite data truncated")
                pos += run
                end = min(start + run, len(buffer))
                buffer[start:end] = chunk[:end - start]
            else:
                run = -run
                end = min(start + run, len(buffer))
                buffer[start:end] = bytes([TRANSPARENT]) * (end - start)
            x += run
            run = read_count()
    return Sprite(width, height, bytes(buffer))


@dataclass(frozen=True)
class Fragment:
    """One sprite placed within an animation frame; next 0 ends the list."""

    sprite: int
    x: int
    y: int
    mirrored: bool
    next: int


@dataclass(frozen=True)
class AnimFrame:
    """One animation frame: its first fragment and the following frame."""

    first: int
    width: int
    height: int
    flags: int
    next: int


def parse_fragments(data: bytes) -> list[Fragment]:
    """Parse fragment records, turning sprite byte offsets into sprite numbers."""
    fragments = []
    for number, (sprite, x, y, mirror, nxt) in enumerate(_records(data, _FRAGMENT)):
        if sprite % 6:
            log.warning("fragment %d starts at %d (%% %d)", number, sprite, sprite % 6)
        else:
            sprite //= 6
        fragments.append(Fragment(sprite, x, y, bool(mirror), nxt))
    return fragments


def parse_frames(data: bytes) -> list[AnimFrame]:
    """Parse animation frame records."""
    frames = [AnimFrame(*record) for record in _records(data, _FRAME)]
    for frame in frames:
        if frame.next > len(frames):
            raise ValueError("Animation continues beyond array bounds!")
    return frames


def parse_index(data: bytes) -> list[int]:
    """Parse the table of first frames of each animation."""
    return [value for (value,) in _records(data, _INDEX)]


class AnimationSet:
    """Animations as chains of frames, each a chain of sprite fragments."""

    def __init__(self, index: list[int], frames: list[AnimFrame],
                 fragments: list[Fragment]) -> None:
        for first in index:
            if first > len(frames):
                raise ValueError("AnimIndex refers beyond array bounds!")
        self.index = list(index)
        self.frames = list(frames)
        self.fragments = list(fragments)

    def _frame_number(self, anim: int, frame: int) -> int:
        if not 0 <= anim < len(self.index):
            raise IndexError(f"animation {anim} out of range")
        current = self.index[anim]
        for _ in range(frame):
            current = self.frames[current].next
        return current

    def frame_fragments(self, anim: int, frame: int) -> list[Fragment]:
        """Return the fragments drawn for frame ``frame`` of animation ``anim``."""
        current = self._frame_number(anim, frame)
        result = []
        link = self.frames[current].first
        while link:
            if len(result) > len(self.fragments):
                raise ValueError("fragment chain loops")
            fragment = self.fragments[link]
            result.append(fragment)
            link = fragment.next
        return result

    def is_last_frame(self, anim: int, frame: int) -> bool:
        """Tell whether the given frame leads back to the animation's start."""
        current = self._frame_number(anim, frame)
        return self.frames[current].next == self.index[anim]