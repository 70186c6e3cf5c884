import pytest

from syndkit.palette import (
    Color,
    PaletteStore,
    palette_from_6bit,
    palette_from_6bit_exact,
)


def test_6bit_palette_shift():
    pal = palette_from_6bit(bytes([63, 0, 1]) * 256)
    assert len(pal) == 256
    assert pal[0] == Color(252, 0, 4)
    assert all(c == pal[0] for c in pal)


def test_6bit_short_data_is_black():
    pal = palette_from_6bit(bytes([10, 20, 30]))
    assert len(pal) == 256
    assert pal[1:] == [Color(0, 0, 0)] * 255
    assert pal[0] == Color(10 << 2, 20 << 2, 30 << 2)


def test_6bit_components_stay_in_byte_range():
    pal = palette_from_6bit(bytes(range(256)) * 3)
    assert all(0 <= v <= 255 for c in pal for v in (c.r, c.g, c.b))


def test_exact_palette_full_range():
    pal = palette_from_6bit_exact(bytes([63, 0, 63]) * 256)
    assert pal[0] == Color(255, 0, 255)


def test_exact_palette_monotonic():
    data = bytes(v for v in range(64) for _ in range(3)) + bytes(3 * 192)
    pal = palette_from_6bit_exact(data)
    reds = [c.r for c in pal[:64]]
    assert reds == sorted(reds)
    assert len(set(reds)) == 64


def test_exact_palette_wrong_size():
    with pytest.raises(ValueError):
        palette_from_6bit_exact(bytes(767))


def test_store_loads_and_caches(tmp_path):
    (tmp_path / "hpal01.dat").write_bytes(bytes([1, 2, 3]) * 256)
    store = PaletteStore(str(tmp_path))
    pal = store.get("hpal01.dat")
    assert pal == palette_from_6bit(bytes([1, 2, 3]) * 256)
    assert store.get("hpal01.dat") is pal


def test_store_missing_file_gives_black(tmp_path):
    store = PaletteStore(str(tmp_path))
    assert store.get("mselect.pal") == [Color(0, 0, 0)] * 256


def test_store_unknown_name(tmp_path):
    store = PaletteStore(str(tmp_path))
    with pytest.raises(KeyError):
        store.get("other.pal")