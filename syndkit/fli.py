"""Decoder for the FLI/FLC animations used by the game's cut-scenes."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Callable, Iterator

from .palette import NUM_COLORS, Color

FLI_MAGIC = 0xAF12

_HEADER = struct.Struct("<IHHHH")
_CHUNK_HEADER = struct.Struct("<IH")
FRAME_HEADER_SIZE = 16

CHUNK_COLOR = 4
CHUNK_DELTA_FLC = 7
CHUNK_BYTE_RUN = 15
CHUNK_FRAME = 0xF1FA

_PACKET_COUNT = 0
_LAST_PIXEL = 2
_SKIP_LINES = 3


class FliError(Exception):
    """The animation data is malformed."""


@dataclass(frozen=True)
class FliHeader:
    """The animation file header."""

    size: int
    type: int
    num_frames: int
    width: int
    height: int


def parse_header(data: bytes) -> FliHeader:
    """Read the 12-byte animation header."""
    if len(data) < _HEADER.size:
        raise FliError("truncated FLI header")
    header = FliHeader(*_HEADER.unpack_from(data))
    if header.type != FLI_MAGIC:
        raise FliError(f"bad FLI magic 0x{header.type:04X}")
    return header


class _Reader:
    def __init__(self, data: bytes, pos: int) -> None:
        self.data = data
        self.pos = pos

    def read(self, count: int) -> bytes:
        end = self.pos + count
        if end > len(self.data):
            raise FliError("unexpected end of animation data")
        chunk = self.data[self.pos:end]
        self.pos = end
        return chunk

    def u8(self) -> int:
        return self.read(1)[0]

    def s8(self) -> int:
        value = self.u8()
        return value - 256 if value > 127 else value

    def u16(self) -> int:
        return int.from_bytes(self.read(2), "little")


class FliPlayer:
    """Decodes an animation frame by frame into an 8-bit pixel buffer."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self.header = parse_header(self._data)
        self.width = self.header.width
        self.height = self.header.height
        self.rewind()

    def rewind(self) -> None:
        """Go back to the first frame with a blank image and palette."""
        self._pos = _HEADER.size
        self.frame = 0
        self.pixels = bytearray(self.width * self.height)
        self.palette = [Color(0, 0, 0)] * NUM_COLORS

    def decode_next_frame(self) -> bytes | None:
        """Decode the next frame and return the image, or None at the end."""
        if self.frame >= self.header.num_frames:
            return None
        handlers: dict[int, Callable[[_Reader], None]] = {
            CHUNK_COLOR: self._set_palette,
            CHUNK_DELTA_FLC: self._decode_delta,
            CHUNK_BYTE_RUN: self._decode_byte_run,
        }
        data = self._data
        started = False
        while self._pos + _CHUNK_HEADER.size <= len(data):
            start = self._pos
            size, kind = _CHUNK_HEADER.unpack_from(data, start)
            if kind == CHUNK_FRAME:
                if started:
                    break
                started = True
                self.frame += 1
                self._pos = start + FRAME_HEADER_SIZE
                continue
            if size < _CHUNK_HEADER.size:
                raise FliError(f"chunk at {start} has invalid size {size}")
            handler = handlers.get(kind)
            if handler is None:
                raise FliError(f"unknown chunk type {kind} at {start}")
            handler(_Reader(data, start + _CHUNK_HEADER.size))
            self._pos = start + size
        if not started:
            return None
        return bytes(self.pixels)

    def frames(self) -> Iterator[bytes]:
        """Yield the image of every remaining frame."""
        while (image := self.decode_next_frame()) is not None:
            yield image

    def _put(self, offset: int, chunk: bytes) -> None:
        end = min(offset + len(chunk), len(self.pixels))
        if offset < 0 or offset >= end:
            return
        self.pixels[offset:end] = chunk[:end - offset]

    @staticmethod
    def _color(reader: _Reader) -> Color:
        r, g, b = reader.read(3)
        return Color((r << 2) & 0xFF, (g << 2) & 0xFF, (b << 2) & 0xFF)

    def _set_palette(self, reader: _Reader) -> None:
        packets = reader.u16() & 0xFF
        if reader.u16():
            reader.pos -= 2
            index = 0
            for _ in range(packets):
                index = (index + reader.u8()) & 0xFF
                for _ in range(reader.u8()):
                    self.palette[index] = self._color(reader)
                    index = (index + 1) & 0xFF
        else:
            self.palette = [self._color(reader) for _ in range(NUM_COLORS)]

    def _decode_byte_run(self, reader: _Reader) -> None:
        total = len(self.pixels)
        q = 0
        while q < total:
            for _ in range(reader.u8()):
                count = reader.s8()
                if count > 0:
                    self._put(q, bytes([reader.u8()]) * count)
                    q += count
                else:
                    self._put(q, reader.read(-count))
                    q -= count

    def _decode_delta(self, reader: _Reader) -> None:
        width = self.width
        line = 0
        packets = 0
        for _ in range(reader.u16()):
            while True:
                op = reader.u16()
                kind = op >> 14
                if kind == _PACKET_COUNT:
                    packets = op
                    break
                if kind == _SKIP_LINES:
                    line += 0x10000 - op
                elif kind == _LAST_PIXEL:
                    self._put(line * width + width - 1, bytes([op & 0xFF]))
            column = 0
            for _ in range(packets):
                column += reader.u8()
                count = reader.s8()
                base = line * width + column
                if count > 0:
                    self._put(base, reader.read(2 * count))
                    column += 2 * count
                elif count < 0:
                    self._put(base, reader.read(2) * -count)
                    column -= 2 * count
                else:
                    return
            line += 1