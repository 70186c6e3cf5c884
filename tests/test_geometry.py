import pytest

from syndkit import geometry


@pytest.mark.parametrize("value", [0, 1, 0x5A, 0xF0, 0xFF])
def test_reverse8_is_involution(value):
    assert geometry.reverse_bits8(geometry.reverse_bits8(value)) == value


def test_reverse8_symmetric_values():
    assert geometry.reverse_bits8(0xFF) == 0xFF
    assert geometry.reverse_bits8(0) == 0


@pytest.mark.parametrize("value", [0, 1, 0x1234, 0xFFFF, 0x8001])
def test_reverse16_is_involution(value):
    assert geometry.reverse_bits16(geometry.reverse_bits16(value)) == value


@pytest.mark.parametrize("value", [0, 1, 0x12345678, 0xFFFFFFFF])
def test_reverse32_is_involution(value):
    assert geometry.reverse_bits32(geometry.reverse_bits32(value)) == value


def test_reverse_lowest_to_highest():
    assert geometry.reverse_bits8(1) == 0x80
    assert geometry.reverse_bits16(1) == 0x8000


@pytest.mark.parametrize("value", range(0, 40))
def test_ceil8_invariants(value):
    result = geometry.ceil8(value)
    assert result % 8 == 0
    assert value <= result < value + 8


@pytest.mark.parametrize("x,y", [(0, 0), (10, 4), (64, 32), (3, 7), (-6, 2)])
def test_map_screen_round_trip(x, y):
    sx, sy = geometry.map_to_screen(x, y, 0)
    assert geometry.screen_to_map(sx, sy) == (x, y)


def test_height_raises_on_screen():
    _, low = geometry.map_to_screen(10, 10, 0)
    _, high = geometry.map_to_screen(10, 10, 4)
    assert high < low


@pytest.mark.parametrize("value", [0, 1, 31, 32, 100, 1000])
def test_tile_plus_sub(value):
    assert geometry.tile(value) + geometry.sub(value) == value
    assert geometry.tile(value) % geometry.SCALE == 0


def test_sub_keeps_sign():
    assert geometry.sub(-1) == -1


def test_glom_components():
    key = geometry.glom(17, 42, 3)
    assert key >> 16 == 3
    assert (key >> 8) & 0xFF == 42
    assert key & 0xFF == 17