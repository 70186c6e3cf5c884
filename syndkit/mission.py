"""Reader for mission level files: pedestrians, cars and mission parameters."""

from __future__ import annotations

import struct
import sys
from dataclasses import dataclass

PED_SIZE = 92
CAR_SIZE = 42
LEVEL_SIZE = 116014
NUM_PEDS = 256
NUM_CARS = 64

PED_OFFSET = 8 + 128 * 256
CAR_OFFSET = PED_OFFSET + NUM_PEDS * PED_SIZE
INFO_OFFSET = CAR_OFFSET + NUM_CARS * CAR_SIZE + 400 * 30 + 725 * 36 + 12 + 2048 * 8 + 437

OBJECTIVES = (
    "0", "persuade", "assassinate", "protect", "4", "grab",
    "6", "7", "8", "9", "melee (cops)", "melee",
    "12", "13", "raid/rescue", "use vehicle",
)


def objective_name(code: int) -> str:
    """Return the name of a mission objective (only the low four bits count)."""
    return OBJECTIVES[code & 0x0F]


@dataclass(frozen=True)
class Ped:
    """A person on the map, agents included."""

    x: int
    y: int
    z: int
    vistype: int
    current_vistype: int
    object_type: int
    adrenaline: tuple[int, int, int, int]
    intelligence: tuple[int, int, int, int]
    perception: tuple[int, int, int, int]

    @classmethod
    def from_bytes(cls, data: bytes) -> "Ped":
        x, y, z = struct.unpack_from("<3H", data, 4)
        vistype, current = struct.unpack_from("<2H", data, 14)
        return cls(
            x=x,
            y=y,
            z=z,
            vistype=vistype,
            current_vistype=current,
            object_type=data[24],
            adrenaline=tuple(data[71:75]),
            intelligence=tuple(data[75:79]),
            perception=tuple(data[79:83]),
        )


@dataclass(frozen=True)
class Car:
    """A vehicle on the map, destroyed ones included."""

    x: int
    y: int
    z: int
    current_vistype: int
    status: int
    type: int
    direction: tuple[int, int, int, int]
    speed: int

    @classmethod
    def from_bytes(cls, data: bytes) -> "Car":
        x, y, z = struct.unpack_from("<3H", data, 4)
        return cls(
            x=x,
            y=y,
            z=z,
            current_vistype=data[16],
            status=data[24],
            type=data[25],
            direction=tuple(data[26:30]),
            speed=data[40],
        )


@dataclass(frozen=True)
class LevelInfo:
    """Map number, playable bounds and objective of a mission."""

    map: int
    min_x: int
    min_y: int
    max_x: int
    max_y: int
    objective: int
    objective_data: int

    @classmethod
    def from_bytes(cls, data: bytes) -> "LevelInfo":
        map_no, min_x, min_y, max_x, max_y = struct.unpack_from("<5H", data, 11)
        objective, objective_data = struct.unpack_from("<2H", data, 25)
        return cls(map_no, min_x, min_y, max_x, max_y, objective, objective_data)


@dataclass(frozen=True)
class Level:
    """A parsed mission level."""

    peds: list[Ped]
    cars: list[Car]
    info: LevelInfo
    raw: bytes


def parse_level(data: bytes) -> Level:
    """Parse the fixed-size level record at the start of ``data``."""
    if len(data) < LEVEL_SIZE:
        raise ValueError(f"level data must be at least {LEVEL_SIZE} bytes, got {len(data)}")
    raw = bytes(data[:LEVEL_SIZE])
    peds = [
        Ped.from_bytes(raw[start:start + PED_SIZE])
        for start in range(PED_OFFSET, CAR_OFFSET, PED_SIZE)
    ]
    cars = [
        Car.from_bytes(raw[start:start + CAR_SIZE])
        for start in range(CAR_OFFSET, CAR_OFFSET + NUM_CARS * CAR_SIZE, CAR_SIZE)
    ]
    return Level(peds, cars, LevelInfo.from_bytes(raw[INFO_OFFSET:]), raw)


def report(level: Level) -> str:
    """Describe a level's bounds, objective and placed pedestrians."""
    info = level.info
    lines = [
        f"map: {info.map} X: {info.min_x} .. {info.max_x}",
        f"Y: {info.min_y} .. {info.max_y}",
        "objective %2d objective data %6d: %12s"
        % (info.objective, info.objective_data, objective_name(info.objective)),
    ]
    for number, ped in enumerate(level.peds):
        if not ped.z:
            continue
        lines.append(
            "ped[%3d]: %3d.%02x,  %3d.%02x,  %2d.%02x  vis:%x A:%02x I:%02x P:%02x"
            % (
                number,
                ped.x // 256, ped.x & 0xFF,
                ped.y // 256, ped.y & 0xFF,
                ped.z // 256, ped.z & 0xFF,
                ped.vistype,
                ped.adrenaline[3],
                ped.intelligence[3],
                ped.perception[3],
            )
        )
    return "\n".join(lines) + "\n"


def main(argv: list[str] | None = None) -> int:
    """Print a report for each level file named on the command line."""
    paths = sys.argv[1:] if argv is None else list(argv)
    print(f"sizeof(ped): {PED_SIZE}")
    print(f"sizeof(car): {CAR_SIZE}")
    print(f"sizeof(lvl): {LEVEL_SIZE}")
    print("-" * 79)
    for path in reversed(paths):
        try:
            with open(path, "rb") as handle:
                data = handle.read(LEVEL_SIZE)
        except OSError:
            print("file to eat?")
            return 5
        try:
            level = parse_level(data)
        except ValueError as exc:
            print(f"{path}: {exc}")
            return 5
        print(f"==== {path} ====")
        print(report(level), end="")
    return 0


if __name__ == "__main__":
    sys.exit(main())