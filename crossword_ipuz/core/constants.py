"""Shared constants and enumerations for the IPUZ converters."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


IPUZ_VERSION = "http://ipuz.org/v2"
IPUZ_KIND = "http://ipuz.org/crossword#1"

# Block marker written into the IPUZ puzzle and solution grids.
BLOCK = "#"
# Block marker used by grid-string sources.
GRID_STRING_BLOCK = "."

NYT_PUBLISHER = "The New York Times"
NYT_PUBLICATION = "The Mini Crossword"
NYT_MINI_URL = "https://www.nytimes.com/crosswords/game/mini"

SMH_PUBLISHER = "Sydney Morning Herald"
SMH_COPYRIGHT = "SMH"
SMH_DEFAULT_TITLE = "SMH"
SMH_DIFFICULTY_PREFIX = "CROSSWORD_"


class Direction(str, Enum):
    """Fill directions, valued with their IPUZ clue-list keys."""

    ACROSS = "Across"
    DOWN = "Down"

    @classmethod
    def parse(cls, value: str) -> "Direction":
        """Accept ``across``/``Across``/``ACROSS`` style spellings."""

        normalized = (value or "").strip().lower()
        for member in cls:
            if member.value.lower() == normalized:
                return member
        raise ValueError(f"Unknown clue direction: {value!r}")


class SourceFormat(str, Enum):
    """Supported upstream puzzle formats."""

    NYT = "nyt"
    SMH = "smh"


@dataclass(frozen=True)
class Bounds:
    """Simple rectangle bounds helper."""

    rows: int
    cols: int

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols
