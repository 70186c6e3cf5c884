"""Access to game data files, with transparent RNC decompression."""

from __future__ import annotations

import logging
from typing import IO, Iterator

from . import rnc

log = logging.getLogger(__name__)

DEFAULT_PATH = "./data/"
MAX_PATH_LENGTH = 255


class DataStore:
    """Locates data files under a root path, trying lower then upper case names."""

    def __init__(self, path: str = DEFAULT_PATH) -> None:
        self.path = DEFAULT_PATH
        self.set_path(path)

    def set_path(self, path: str) -> None:
        """Change the root path; an overlong path falls back to the current directory."""
        if len(path) < MAX_PATH_LENGTH:
            log.info("Changing path to: %r", path)
            self.path = path
        else:
            log.warning("path %r too long, using CWD", path)
            self.path = "./"

    def full_path(self, filename: str, uppercase: bool = False) -> str:
        """Join the root path and ``filename`` with the file name case-folded."""
        name = filename.upper() if uppercase else filename.lower()
        return self.path + name

    def _candidates(self, filename: str) -> Iterator[str]:
        yield self.full_path(filename, False)
        yield self.full_path(filename, True)

    def load_file(self, filename: str) -> bytes:
        """Read a data file, unpacking it if it is RNC compressed."""
        for candidate in self._candidates(filename):
            try:
                with open(candidate, "rb") as handle:
                    data = handle.read()
            except OSError:
                continue
            break
        else:
            raise FileNotFoundError(
                f"couldn't open file {filename!r} (using path {self.path!r})"
            )

        if rnc.is_rnc(data):
            return rnc.unpack(data)
        return data

    def open_text(self, filename: str) -> IO[str]:
        """Open a text data file for reading."""
        for candidate in self._candidates(filename):
            try:
                return open(candidate, "r", encoding="latin-1")
            except OSError:
                continue
        raise FileNotFoundError(
            f"couldn't open file {filename!r} (using path {self.path!r})"
        )