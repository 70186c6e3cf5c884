# syndkit

Readers and decoders for the data files of the classic *Syndicate* game:
RNC-compressed files, palettes, sprite banks, animation tables, block maps,
mission levels and FLI/FLC cut-scenes, plus a small model of the agent
roster. Pure Python, no third-party dependencies.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

| Module              | Purpose |
|---------------------|---------|
| `syndkit.rnc`       | `is_rnc`, `unpacked_length`, `crc` and `unpack` for RNC method-1 packed data. |
| `syndkit.datafile`  | `DataStore`: finds files under a root path, trying the lower-case then the upper-case file name, and unpacks RNC data on load. |
| `syndkit.agents`    | `Agent`, `AgentManager` and the `Slot` enum: agent health (capped at 255), six modification slots and a weapon list. |
| `syndkit.palette`   | `Color`, `palette_from_6bit`, `palette_from_6bit_exact` and `PaletteStore` for the game's 6-bit palette files. |
| `syndkit.mission`   | `parse_level` turns a level file into a `Level` (peds, cars and `LevelInfo`); `report` describes it. |
| `syndkit.geometry`  | Bit reversal, `ceil8`, `map_to_screen`, `screen_to_map`, `tile`, `sub` and `glom`. |
| `syndkit.sprites`   | Sprite tables, planar and RLE sprite decoding, animation fragments, frames and `AnimationSet`. |
| `syndkit.maptiles`  | `parse_subtile_table`, `decode_subtiles`, `GameMap` and `Viewport` for picking the tile under a screen position. |
| `syndkit.fli`       | `parse_header` and `FliPlayer`, which decodes an animation frame by frame. |

## Examples

Unpacking RNC data:

```python
from syndkit import rnc

with open("data/mspr-0.dat", "rb") as fh:
    raw = fh.read()

data = rnc.unpack(raw) if rnc.is_rnc(raw) else raw
```

`unpack` raises a subclass of `rnc.RncError` (`NotRncError`,
`HuffmanDecodeError`, `SizeMismatchError`, `PackedCrcError`,
`UnpackedCrcError`) when the data is not valid; `rnc.error_string(code)`
gives the message for a numeric error code.

Loading files from a data directory, packed or not:

```python
from syndkit.datafile import DataStore

store = DataStore("./data/")
intro = store.load_file("intro.dat")
```

`load_file` raises `FileNotFoundError` when neither spelling of the name
exists.

Decoding an animation:

```python
from syndkit.fli import FliPlayer

player = FliPlayer(intro)
for image in player.frames():
    palette = player.palette   # 256 Color values
    ...                        # image: width * height palette indices
```

Reading a palette:

```python
from syndkit.palette import PaletteStore

palettes = PaletteStore("data")
colors = palettes.get("hpal01.dat")
```

Reading a mission level:

```python
from syndkit.mission import parse_level, report

with open("data/game01.dat", "rb") as fh:
    level = parse_level(fh.read())
print(report(level), end="")
```

Working with the agent roster:

```python
from syndkit.agents import AgentManager, Slot

roster = AgentManager()
roster.load_agents()                 # one male and one female agent per name
roster.reset(lambda: "PISTOL")       # full health, no mods, one new weapon each
roster.agent(0).set_slot(Slot.LEGS, "LEGS V1")
```

## Command line

`syndkit-mission` prints the record sizes it expects, then, for each level
file named (taken from the last argument to the first), the map number, the
playable area, the objective and every pedestrian with a non-zero height,
with its position, look and IPA levels. It exits with status 5 if a file
cannot be opened or is too short.

```
syndkit-mission data/game01.dat data/game02.dat
```

## What it does not do

syndkit only reads and decodes data. It does not open a window or draw
anything, play sound or music, run the game, its menus or missions, or
write images to disk. Decoded sprites, subtiles and animation frames are
raw 8-bit palette indices; combining them with a palette is left to the
caller.