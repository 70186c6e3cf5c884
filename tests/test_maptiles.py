import struct

import pytest

from syndkit.maptiles import (
    SUBTILE_BYTES,
    SUBTILE_TABLE_SIZE,
    TRANSPARENT,
    GameMap,
    Viewport,
    decode_subtiles,
    parse_subtile_table,
)


def build_map(sx, sy, sz, columns):
    base = 4 * sx * sy
    offsets = []
    body = b""
    for column in columns:
        offsets.append(base + len(body))
        body += bytes(column)
    return struct.pack("<3I", sx, sy, sz) + struct.pack(f"<{len(offsets)}I", *offsets) + body


def subtile_row(mask=b"\0\0\0\0", planes=(b"\0" * 4,) * 4):
    return bytes(mask) + b"".join(bytes(p) for p in planes)


def test_parse_subtile_table_offsets():
    values = [0, SUBTILE_TABLE_SIZE, SUBTILE_TABLE_SIZE + 3 * SUBTILE_BYTES, 100]
    values += [0] * (1536 - len(values))
    table = parse_subtile_table(struct.pack("<1536i", *values))
    assert len(table) == 1536
    assert table[:4] == [0, 0, 3, 0]


def test_parse_subtile_table_too_short():
    with pytest.raises(ValueError):
        parse_subtile_table(b"\0" * 100)


def test_decode_subtiles_pixels():
    planes = (b"\x40\0\0\0", b"\x40\0\0\0", b"\0" * 4, b"\0" * 4)
    first = subtile_row(b"\x80\0\0\0", planes)
    data = first + subtile_row() * 15
    image = decode_subtiles(data, 1)
    assert len(image) == 32 * 16
    assert image[0] == TRANSPARENT
    assert image[1] == 3
    assert image[2] == 0
    assert set(image[32:]) == {0}


def test_decode_subtiles_mask_overrides_planes():
    planes = (b"\xff\xff\xff\xff",) * 4
    data = subtile_row(b"\xff\xff\xff\xff", planes) * 16
    assert decode_subtiles(data, 1) == bytes([TRANSPARENT]) * 512


def test_decode_subtiles_last_pixel_bit_order():
    planes = (b"\0" * 4, b"\0" * 4, b"\0\0\0\x01", b"\0" * 4)
    data = subtile_row(b"\0\0\0\0", planes) * 16
    image = decode_subtiles(data, 1)
    assert image[31] == 4
    assert image[30] == 0


def test_decode_subtiles_truncated():
    with pytest.raises(ValueError):
        decode_subtiles(b"\0" * 100, 1)


def test_game_map_tiles():
    game_map = GameMap.from_bytes(build_map(2, 1, 2, [[6, 7], [0, 9]]))
    assert (game_map.size_x, game_map.size_y, game_map.size_z) == (2, 1, 2)
    assert game_map.raw_tile(0, 0, 0) == 6
    assert game_map.raw_tile(0, 0, 1) == 7
    assert game_map.raw_tile(1, 0, 1) == 9
    assert game_map.raw_tile(2, 0, 0) is None
    assert game_map.raw_tile(0, 0, 2) is None


def test_game_map_tile_ref_scales():
    game_map = GameMap.from_bytes(build_map(2, 1, 2, [[6, 7], [0, 9]]))
    assert game_map.tile_ref(32, 0, 32) == 9
    assert game_map.tile_ref(31, 31, 31) == 6
    assert game_map.tile_ref(-1, 0, 0) is None


def test_game_map_tile_at():
    game_map = GameMap.from_bytes(build_map(2, 1, 2, [[6, 7], [0, 9]]))
    assert game_map.tile_at(0, 0) == 6
    assert game_map.tile_at(32, 0, 0) == -1
    assert game_map.tile_at(1000, 0, 0) == -1


def test_game_map_bad_reference():
    data = struct.pack("<3I", 1, 1, 2) + struct.pack("<I", 100) + b"\x06\x07"
    with pytest.raises(ValueError):
        GameMap.from_bytes(data)


def test_game_map_truncated():
    with pytest.raises(ValueError):
        GameMap.from_bytes(b"\0" * 5)
    with pytest.raises(ValueError):
        GameMap.from_bytes(struct.pack("<3I", 4, 4, 1))


@pytest.mark.parametrize("point", [(0, 0), (7, 3), (-5, 12)])
def test_viewport_round_trip(point):
    viewport = Viewport(10, -4)
    mx, my = viewport.screen_to_map(*point)
    assert viewport.map_to_screen(mx, my) == point


def test_viewport_origin():
    assert Viewport(10, -4).screen_to_map(0, 0) == (10, -4)


def test_point_at_finds_lower_solid_tile():
    game_map = GameMap.from_bytes(build_map(1, 1, 2, [[6, 0]]))
    assert Viewport().point_at(game_map, 0, 0) == (0, 0, 0, 6)


def test_point_at_returns_last_probe_when_nothing_solid():
    game_map = GameMap.from_bytes(build_map(1, 1, 1, [[2]]))
    assert Viewport().point_at(game_map, 0, 0) == (0, 0, 0, 2)


def test_point_at_outside_map():
    game_map = GameMap.from_bytes(build_map(1, 1, 1, [[6]]))
    assert Viewport().point_at(game_map, 1000, 1000) is None