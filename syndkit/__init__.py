"""Readers and decoders for the data files of the classic Syndicate game."""

__version__ = "0.1.0"

__all__ = [
    "agents",
    "datafile",
    "fli",
    "geometry",
    "maptiles",
    "mission",
    "palette",
    "rnc",
    "sprites",
]