"""Decoder for RNC method 1 ("Rob Northen Compression") packed data."""

from __future__ import annotations

import struct
from dataclasses import dataclass

RNC_SIGNATURE = 0x524E4301  # b"RNC\x01"
HEADER_SIZE = 18

_ERRORS = (
    "No error",
    "File is not RNC-1 format",
    "Huffman decode error",
    "File size mismatch",
    "CRC error in packed data",
    "CRC error in unpacked data",
    "Unknown error",
)


def error_string(code: int) -> str:
    """Return the message for an RNC error code (0 or negative)."""
    index = -code
    if index < 0:
        index = 0
    return _ERRORS[min(index, len(_ERRORS) - 1)]


class RncError(Exception):
    """Base class for RNC decoding failures."""

    code = -(len(_ERRORS) - 1)

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or error_string(self.code))


class NotRncError(RncError):
    """The data does not carry the RNC-1 signature."""

    code = -1


class HuffmanDecodeError(RncError):
    """The packed bit stream holds an invalid code."""

    code = -2


class SizeMismatchError(RncError):
    """The unpacked data does not have the announced length."""

    code = -3


class PackedCrcError(RncError):
    """The checksum of the packed data is wrong."""

    code = -4


class UnpackedCrcError(RncError):
    """The checksum of the unpacked data is wrong."""

    code = -5


def _build_crc_table() -> tuple[int, ...]:
    table = []
    for i in range(256):
        value = i
        for _ in range(8):
            value = (value >> 1) ^ 0xA001 if value & 1 else value >> 1
        table.append(value)
    return tuple(table)


_CRC_TABLE = _build_crc_table()


def crc(data: bytes) -> int:
    """Compute the 16-bit checksum used by RNC archives."""
    result = 0
    for byte in data:
        result ^= byte
        result = (result >> 8) ^ _CRC_TABLE[result & 0xFF]
    return result


def is_rnc(data: bytes) -> bool:
    """Tell whether ``data`` starts with the RNC-1 signature."""
    return len(data) >= 4 and struct.unpack_from(">I", data)[0] == RNC_SIGNATURE


def unpacked_length(data: bytes) -> int:
    """Return the unpacked size announced in an RNC header."""
    if not is_rnc(data):
        raise NotRncError()
    if len(data) < 8:
        raise SizeMismatchError("truncated RNC header")
    return struct.unpack_from(">I", data, 4)[0]


def _mirror(value: int, width: int) -> int:
    """Reverse the lowest ``width`` bits of ``value``."""
    low = value & ((1 << width) - 1)
    reversed_low = int(format(low, f"0{width}b")[::-1], 2) if width else 0
    return (value & ~((1 << width) - 1)) | reversed_low


class _BitStream:
    """Little-endian 16-bit word bit reader interleaved with raw bytes."""

    def __init__(self, buffer: bytes) -> None:
        self._buffer = buffer
        self._pos = 0
        self._bits = self._word(0)
        self._count = 16

    def _word(self, pos: int) -> int:
        return int.from_bytes(self._buffer[pos:pos + 2].ljust(2, b"\0"), "little")

    def peek(self, mask: int) -> int:
        return self._bits & mask

    def advance(self, count: int) -> None:
        self._bits >>= count
        self._count -= count
        if self._count < 16:
            self._pos += 2
            self._bits = (self._bits | (self._word(self._pos) << self._count)) & 0xFFFFFFFF
            self._count += 16

    def read(self, mask: int, count: int) -> int:
        result = self.peek(mask)
        self.advance(count)
        return result

    def literal(self, length: int) -> bytes:
        """Take raw bytes at the input position and resynchronise."""
        chunk = self._buffer[self._pos:self._pos + length].ljust(length, b"\0")
        self._pos += length
        self._count -= 16
        self._bits &= (1 << self._count) - 1
        self._bits = (self._bits | (self._word(self._pos) << self._count)) & 0xFFFFFFFF
        self._count += 16
        return chunk


@dataclass(frozen=True)
class _Code:
    code: int
    length: int
    value: int


def _read_table(stream: _BitStream, previous: tuple[_Code, ...]) -> tuple[_Code, ...]:
    count = stream.read(0x1F, 5)
    if not count:
        return previous
    lengths = [stream.read(0x0F, 4) for _ in range(count)]
    leaf_max = max(1, *lengths)
    codes = []
    code_b = 0
    for length in range(1, leaf_max + 1):
        for value, leaf_length in enumerate(lengths):
            if leaf_length == length:
                codes.append(_Code(_mirror(code_b, length), length, value))
                code_b += 1
        code_b <<= 1
    return tuple(codes)


def _read_value(table: tuple[_Code, ...], stream: _BitStream) -> int:
    for entry in table:
        if stream.peek((1 << entry.length) - 1) == entry.code:
            break
    else:
        raise HuffmanDecodeError()
    stream.advance(entry.length)
    result = entry.value
    if result >= 2:
        result = 1 << (result - 1)
        result |= stream.read(result - 1, entry.value - 1)
    return result


def unpack(data: bytes) -> bytes:
    """Decompress an RNC-1 packed buffer and return the original bytes."""
    data = bytes(data)
    if not is_rnc(data):
        raise NotRncError()
    if len(data) < HEADER_SIZE:
        raise SizeMismatchError("truncated RNC header")

    output_length, input_length, unpacked_crc, packed_crc = struct.unpack_from(
        ">IIHH", data, 4
    )
    body = data[HEADER_SIZE:HEADER_SIZE + input_length]
    if crc(body) != packed_crc:
        raise PackedCrcError()

    stream = _BitStream(body)
    stream.advance(2)  # the first two bits are flags that are not used

    raw_table: tuple[_Code, ...] = ()
    dist_table: tuple[_Code, ...] = ()
    len_table: tuple[_Code, ...] = ()
    output = bytearray()

    while len(output) < output_length:
        raw_table = _read_table(stream, raw_table)
        dist_table = _read_table(stream, dist_table)
        len_table = _read_table(stream, len_table)
        pending = stream.read(0xFFFF, 16)

        while True:
            length = _read_value(raw_table, stream)
            if length:
                if len(output) + length > output_length:
                    raise SizeMismatchError()
                output += stream.literal(length)

            pending = (pending - 1) & 0xFFFFFFFF
            if pending == 0:
                break

            distance = _read_value(dist_table, stream) + 1
            length = _read_value(len_table, stream) + 2
            if distance > len(output):
                raise HuffmanDecodeError("back-reference before start of output")
            if len(output) + length > output_length:
                raise SizeMismatchError()
            for _ in range(length):
                output.append(output[-distance])

    if len(output) != output_length:
        raise SizeMismatchError()
    result = bytes(output)
    if crc(result) != unpacked_crc:
        raise UnpackedCrcError()
    return result