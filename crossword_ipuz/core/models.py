"""Data models shared by the converters."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple, Union

from .constants import GRID_STRING_BLOCK, Direction

# IPUZ grid cells: the block marker, an entry number, or 0 for unnumbered cells.
PuzzleCell = Union[int, str]
Coordinate = Tuple[int, int]  # (col, row)


@dataclass(frozen=True)
class ClueEntry:
    """A numbered clue; ``answer`` is only filled by grid-derived clues."""

    number: int
    text: str = ""
    answer: str = ""


@dataclass
class ClueLists:
    across: List[ClueEntry] = field(default_factory=list)
    down: List[ClueEntry] = field(default_factory=list)

    def for_direction(self, direction: Direction) -> List[ClueEntry]:
        return self.across if direction == Direction.ACROSS else self.down


@dataclass(frozen=True)
class GridPair:
    """Parallel puzzle and solution grids in IPUZ cell form."""

    puzzle: List[List[PuzzleCell]]
    solution: List[List[str]]

    @property
    def height(self) -> int:
        return len(self.solution)

    @property
    def width(self) -> int:
        return len(self.solution[0]) if self.solution else 0


@dataclass
class NumberedGrid:
    """Result of numbering a grid-string source.

    ``numbering`` maps ``(col, row)`` to the entry number. ``rows`` keeps the
    untouched source rows so clue inference can rescan them.
    """

    rows: List[List[str]]
    grids: GridPair
    numbering: Dict[Coordinate, int]
    block: str
    _positions: Optional[Dict[int, Coordinate]] = field(default=None, repr=False, compare=False)

    @property
    def positions(self) -> Dict[int, Coordinate]:
        """Inverse of ``numbering``: entry number to ``(col, row)``."""
        if self._positions is None:
            self._positions = {number: coord for coord, number in self.numbering.items()}
        return self._positions

    @property
    def height(self) -> int:
        return len(self.rows)

    @property
    def width(self) -> int:
        return len(self.rows[0]) if self.rows else 0


@dataclass(frozen=True)
class CellRecord:
    """One cell of a labeled-cell source; ``None`` records are blocks."""

    answer: Optional[str] = None
    label: Optional[str] = None


@dataclass(frozen=True)
class ClueReference:
    """Grid-string clue pointing at an entry number."""

    position: int
    text: str = ""


@dataclass(frozen=True)
class LabeledClue:
    """Labeled-source clue; ``texts`` holds the plain-text variants."""

    direction: str
    label: str
    texts: Sequence[str]


@dataclass
class PuzzleMetadata:
    """Publication metadata copied onto the IPUZ document.

    ``None`` fields are left out of the document.
    """

    title: Optional[str] = None
    author: Optional[str] = None
    copyright: Optional[str] = None
    publisher: Optional[str] = None
    publication: Optional[str] = None
    date: Optional[str] = None
    editor: Optional[str] = None
    url: Optional[str] = None
    uniqueid: Optional[str] = None


@dataclass
class GridStringSource:
    """Grid-string source: rows of letters with ``block`` marking walls.

    ``clue_refs`` maps a direction to its referenced clues; a direction with
    no entry has its answers inferred from the grid.
    """

    rows: List[List[str]]
    metadata: PuzzleMetadata
    clue_refs: Dict[Direction, List[ClueReference]] = field(default_factory=dict)
    block: str = GRID_STRING_BLOCK


@dataclass
class LabeledCellSource:
    """Cell-array source with explicit per-cell labels."""

    width: int
    height: int
    cells: List[Optional[CellRecord]]
    clues: List[LabeledClue]
    metadata: PuzzleMetadata


SourceDocument = Union[GridStringSource, LabeledCellSource]
